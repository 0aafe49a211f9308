"""Shared fixtures: fake Notion SDK responses and stickertrade HTTP responses."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
import requests

from sticker_sync.config import SyncConfig
from sticker_sync.notion import NotionClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

COUNT_PROPERTY = "count-prop"
EXCLUDE_PROPERTY = "exclude-prop"


def title_response(text: str) -> Dict[str, Any]:
    return {
        "object": "list",
        "type": "property_item",
        "results": [
            {"object": "property_item", "type": "title", "title": {"plain_text": text}}
        ],
        "has_more": False,
        "next_cursor": None,
    }


def number_response(number: Any) -> Dict[str, Any]:
    return {"object": "property_item", "type": "number", "number": number}


def checkbox_response(checked: Any) -> Dict[str, Any]:
    return {"object": "property_item", "type": "checkbox", "checkbox": checked}


def hosted_image_block(url: str) -> Dict[str, Any]:
    return {
        "object": "block",
        "type": "image",
        "image": {"type": "file", "file": {"url": url}},
    }


def external_image_block(url: str) -> Dict[str, Any]:
    return {
        "object": "block",
        "type": "image",
        "image": {"type": "external", "external": {"url": url}},
    }


def paragraph_block() -> Dict[str, Any]:
    return {"object": "block", "type": "paragraph", "paragraph": {"rich_text": []}}


def sticker_page(
    name: str,
    count: Any = 1,
    excluded: bool = False,
    blocks: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Describe one fake database page by its property responses."""
    if blocks is None:
        blocks = [hosted_image_block(f"https://files.notion.test/{name}.png")]
    return {
        "title": title_response(name),
        COUNT_PROPERTY: number_response(count),
        EXCLUDE_PROPERTY: checkbox_response(excluded),
        "blocks": blocks,
    }


def make_notion_sdk(pages: Dict[str, Dict[str, Any]], page_size: int = 2) -> MagicMock:
    """Build a mock of ``notion_client.Client`` serving the given pages.

    ``pages`` maps page id to the output of ``sticker_page``; database queries
    return the ids in insertion order, ``page_size`` at a time.
    """
    sdk = MagicMock()
    ids = list(pages)

    def query(database_id: str, start_cursor: Optional[str] = None) -> Dict[str, Any]:
        start = int(start_cursor) if start_cursor else 0
        chunk = ids[start : start + page_size]
        end = start + len(chunk)
        has_more = end < len(ids)
        return {
            "object": "list",
            "results": [{"object": "page", "id": page_id} for page_id in chunk],
            "has_more": has_more,
            "next_cursor": str(end) if has_more else None,
        }

    def retrieve(
        page_id: str, property_id: str, start_cursor: Optional[str] = None
    ) -> Dict[str, Any]:
        return pages[page_id][property_id]

    def list_children(block_id: str, page_size: int = 100) -> Dict[str, Any]:
        return {
            "object": "list",
            "results": pages[block_id]["blocks"][:page_size],
            "has_more": False,
            "next_cursor": None,
        }

    sdk.databases.query.side_effect = query
    sdk.pages.properties.retrieve.side_effect = retrieve
    sdk.blocks.children.list.side_effect = list_children
    return sdk


def make_response(
    status_code: int = 200,
    json_data: Any = None,
    content: bytes = b"",
    text: str = "",
    headers: Optional[Dict[str, str]] = None,
) -> MagicMock:
    """Build a mock ``requests.Response``."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = content
    resp.text = text
    resp.headers = headers or {}
    if json_data is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = json_data
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error", response=resp
        )
    return resp


def profile_payload(*names: str) -> Dict[str, Any]:
    return {
        "username": "alice",
        "avatarUrl": None,
        "stickers": [
            {"id": str(idx), "name": name, "imageUrl": f"https://cdn.test/{idx}.png"}
            for idx, name in enumerate(names)
        ],
    }


@pytest.fixture
def config() -> SyncConfig:
    return SyncConfig(
        notion_token="secret-token",
        database_id="db-123",
        count_property_id=COUNT_PROPERTY,
        exclude_property_id=EXCLUDE_PROPERTY,
        stickertrade_username="alice",
        stickertrade_session="session-cookie",
        stickertrade_base_url="https://stickertrade.test",
    )


@pytest.fixture
def notion_factory(config):
    """Return a builder for ``NotionClient`` instances over fake pages."""

    def build(pages: Dict[str, Dict[str, Any]], page_size: int = 2) -> NotionClient:
        return NotionClient(config, client=make_notion_sdk(pages, page_size=page_size))

    return build
