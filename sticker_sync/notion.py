"""Read access to the Notion sticker database."""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Optional

from notion_client import Client

from .config import SyncConfig
from .models import Block, PropertyValue, RawRecord, parse_block, parse_property_item

logger = logging.getLogger("sticker_sync")

TITLE_PROPERTY_ID = "title"


class NotionClient:
    """Thin wrapper around the Notion SDK exposing the calls the sync needs."""

    def __init__(self, config: SyncConfig, client: Optional[Any] = None) -> None:
        self.database_id = config.database_id
        self._client = client if client is not None else Client(auth=config.notion_token)

    def iter_database_records(self) -> Iterator[RawRecord]:
        """Yield every page of the database, querying one result page at a time.

        Stops when a result page is empty or reports no further pages.
        """
        cursor: Optional[str] = None
        page_number = 0
        while True:
            query: dict = {"database_id": self.database_id}
            if cursor:
                query["start_cursor"] = cursor
            response = self._client.databases.query(**query)
            results = response.get("results") or []
            page_number += 1
            logger.debug(
                "Database query page %d returned %d record(s)",
                page_number,
                len(results),
            )
            if not results:
                return
            for result in results:
                yield RawRecord(id=result["id"])
            if not response.get("has_more"):
                return
            cursor = response.get("next_cursor")

    def fetch_records(self) -> List[RawRecord]:
        """Collect every database record into a list."""
        return list(self.iter_database_records())

    def retrieve_property(self, record_id: str, property_id: str) -> PropertyValue:
        """Fetch one property, following the cursor of paginated list properties."""
        response = self._client.pages.properties.retrieve(
            page_id=record_id,
            property_id=property_id,
        )
        if response.get("object") == "list":
            results = list(response.get("results") or [])
            while response.get("has_more") and response.get("next_cursor"):
                response = self._client.pages.properties.retrieve(
                    page_id=record_id,
                    property_id=property_id,
                    start_cursor=response["next_cursor"],
                )
                results.extend(response.get("results") or [])
            response = dict(response, results=results)
        return parse_property_item(response, record_id)

    def first_block(self, record_id: str) -> Optional[Block]:
        """Return the first child block of a page, or ``None`` if it has none."""
        response = self._client.blocks.children.list(block_id=record_id, page_size=1)
        results = response.get("results") or []
        if not results:
            return None
        return parse_block(results[0], record_id)
