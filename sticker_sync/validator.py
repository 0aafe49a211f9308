"""Validation and normalization of Notion sticker pages."""

from __future__ import annotations

import logging
from typing import AbstractSet, Union

from .config import SyncConfig
from .errors import NameTooLongError, SchemaError
from .models import (
    CheckboxValue,
    ExternalImageBlock,
    HostedImageBlock,
    NumberValue,
    OtherBlock,
    RawRecord,
    SkipReason,
    StickerRecord,
    TitleValue,
)
from .notion import TITLE_PROPERTY_ID, NotionClient

logger = logging.getLogger("sticker_sync")

ValidationOutcome = Union[StickerRecord, SkipReason]


def _read_name(notion: NotionClient, record_id: str) -> str:
    value = notion.retrieve_property(record_id, TITLE_PROPERTY_ID)
    if not isinstance(value, TitleValue):
        raise SchemaError("Title property is not a title", record_id)
    name = value.text
    if not name.strip():
        raise SchemaError("Title property is empty", record_id)
    return name


def _read_count(notion: NotionClient, record_id: str, property_id: str) -> int:
    value = notion.retrieve_property(record_id, property_id)
    if not isinstance(value, NumberValue):
        raise SchemaError("Count property is not a number", record_id)
    number = value.number
    if number is None:
        raise SchemaError("Count property is empty", record_id)
    if number < 0 or number != int(number):
        raise SchemaError(
            f"Count property must be a non-negative integer, got {number}",
            record_id,
        )
    return int(number)


def _read_excluded(notion: NotionClient, record_id: str, property_id: str) -> bool:
    value = notion.retrieve_property(record_id, property_id)
    if not isinstance(value, CheckboxValue):
        raise SchemaError("Exclude property is not a checkbox", record_id)
    return value.checked


def _read_image_url(notion: NotionClient, record_id: str) -> str:
    block = notion.first_block(record_id)
    if block is None:
        raise SchemaError("Page has no content blocks", record_id)
    if isinstance(block, HostedImageBlock):
        return block.url
    if isinstance(block, ExternalImageBlock):
        raise SchemaError("First block is an external image, not an uploaded file", record_id)
    if isinstance(block, OtherBlock):
        raise SchemaError(f"First block is {block.kind!r}, not an image", record_id)
    raise SchemaError(f"Unhandled block {block!r}", record_id)


def normalize_record(
    notion: NotionClient,
    record: RawRecord,
    existing_names: AbstractSet[str],
    config: SyncConfig,
) -> ValidationOutcome:
    """Validate one database page and flatten it into a ``StickerRecord``.

    Returns a ``SkipReason`` for pages that are already synced, have no
    stickers remaining, or are excluded. Any unexpected property or block
    shape raises ``SchemaError``; an overlong name raises
    ``NameTooLongError``.

    Properties are fetched one at a time, in order, so a skipped page costs
    no further requests.
    """
    name = _read_name(notion, record.id)

    if name in existing_names:
        logger.info("Skipping %s because %s", name, SkipReason.ALREADY_SYNCED.value)
        return SkipReason.ALREADY_SYNCED

    if len(name) > config.max_name_length:
        raise NameTooLongError(name, config.max_name_length, record_id=record.id)

    count = _read_count(notion, record.id, config.count_property_id)
    if count == 0:
        logger.info("Skipping %s because %s", name, SkipReason.NONE_REMAINING.value)
        return SkipReason.NONE_REMAINING

    if _read_excluded(notion, record.id, config.exclude_property_id):
        logger.info("Skipping %s because %s", name, SkipReason.EXCLUDED.value)
        return SkipReason.EXCLUDED

    image_url = _read_image_url(notion, record.id)
    return StickerRecord(
        name=name,
        remaining_count=count,
        excluded=False,
        image_url=image_url,
    )
