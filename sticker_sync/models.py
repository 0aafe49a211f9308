"""Data models used throughout the sync pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import SchemaError


@dataclass(frozen=True)
class RawRecord:
    """Handle to one page of the source Notion database."""

    id: str


@dataclass
class StickerRecord:
    """Validated sticker ready to be uploaded."""

    name: str
    remaining_count: int
    excluded: bool
    image_url: str


class SkipReason(enum.Enum):
    """Why a source record was left out of the upload set."""

    ALREADY_SYNCED = "it's already in stickertrade"
    NONE_REMAINING = "it has no stickers remaining"
    EXCLUDED = "it's excluded"


# Property item variants --------------------------------------------------


@dataclass
class TitleValue:
    """Title property, flattened to plain text."""

    text: str


@dataclass
class NumberValue:
    """Number property; Notion reports unset numbers as ``None``."""

    number: Optional[float]


@dataclass
class CheckboxValue:
    """Checkbox property."""

    checked: bool


PropertyValue = Union[TitleValue, NumberValue, CheckboxValue]


def parse_property_item(
    response: Mapping[str, Any],
    record_id: Optional[str] = None,
) -> PropertyValue:
    """Turn a ``pages.properties.retrieve`` response into a typed value.

    Title properties come back as a paginated list of fragments; number and
    checkbox properties come back as a single property item. Any other kind
    is rejected.
    """
    if response.get("object") == "list":
        if response.get("type") != "property_item":
            raise SchemaError(
                f"Property list has unexpected type {response.get('type')!r}",
                record_id,
            )
        fragments = response.get("results") or []
        if not fragments:
            raise SchemaError("Title property has no fragments", record_id)
        parts: List[str] = []
        for fragment in fragments:
            if fragment.get("type") != "title":
                raise SchemaError(
                    f"Property fragment is {fragment.get('type')!r}, not a title",
                    record_id,
                )
            title = fragment.get("title")
            if not isinstance(title, dict):
                raise SchemaError("Title fragment has no title payload", record_id)
            parts.append(title.get("plain_text", ""))
        return TitleValue(text="".join(parts))

    kind = response.get("type")
    if kind == "number":
        number = response.get("number")
        if number is not None and (
            isinstance(number, bool) or not isinstance(number, (int, float))
        ):
            raise SchemaError(f"Number property holds {number!r}", record_id)
        return NumberValue(number=number)
    if kind == "checkbox":
        checked = response.get("checkbox")
        if not isinstance(checked, bool):
            raise SchemaError(f"Checkbox property holds {checked!r}", record_id)
        return CheckboxValue(checked=checked)
    raise SchemaError(f"Unsupported property kind {kind!r}", record_id)


# Block variants ----------------------------------------------------------


@dataclass
class HostedImageBlock:
    """Image uploaded to Notion; the URL is a signed, short-lived file link."""

    url: str


@dataclass
class ExternalImageBlock:
    """Image embedded from an external URL."""

    url: str


@dataclass
class OtherBlock:
    """Any block that is not an image."""

    kind: str


Block = Union[HostedImageBlock, ExternalImageBlock, OtherBlock]


def parse_block(block: Mapping[str, Any], record_id: Optional[str] = None) -> Block:
    """Turn one entry of ``blocks.children.list`` into a typed block."""
    kind = block.get("type")
    if kind is None:
        raise SchemaError("Block is a partial object without a type", record_id)
    if kind != "image":
        return OtherBlock(kind=kind)

    image = block.get("image") or {}
    source = image.get("type")
    if source == "file":
        return HostedImageBlock(url=_image_url(image, source, record_id))
    if source == "external":
        return ExternalImageBlock(url=_image_url(image, source, record_id))
    raise SchemaError(f"Image block has unknown source {source!r}", record_id)


def _image_url(image: Mapping[str, Any], source: str, record_id: Optional[str]) -> str:
    payload = image.get(source)
    url = payload.get("url") if isinstance(payload, dict) else None
    if not isinstance(url, str) or not url:
        raise SchemaError(f"Image block has no {source} URL", record_id)
    return url


# Destination profile -----------------------------------------------------


@dataclass
class DestinationSticker:
    """Sticker already published on a stickertrade profile."""

    id: str
    name: str
    image_url: str


@dataclass
class Profile:
    """Public stickertrade profile."""

    username: str
    avatar_url: Optional[str]
    stickers: List[DestinationSticker] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "Profile":
        if not isinstance(data, dict):
            raise SchemaError("Profile response is not a JSON object")
        stickers = data.get("stickers")
        if not isinstance(stickers, list):
            raise SchemaError("Profile response has no sticker list")
        try:
            parsed = [
                DestinationSticker(
                    id=str(item["id"]),
                    name=item["name"],
                    image_url=item["imageUrl"],
                )
                for item in stickers
            ]
        except (KeyError, TypeError) as exc:
            raise SchemaError(f"Malformed sticker in profile response: {exc}") from exc
        return cls(
            username=data.get("username", ""),
            avatar_url=data.get("avatarUrl"),
            stickers=parsed,
        )


class SyncState(enum.Enum):
    """Stages of a sync run, entered strictly in declaration order."""

    READING_CATALOG = "reading catalog"
    FETCHING_AND_VALIDATING = "fetching and validating"
    UPLOADING = "uploading"
    DONE = "done"


@dataclass
class SyncSummary:
    """Counts reported at the end of a run."""

    state: Optional[SyncState] = None
    records_seen: int = 0
    accepted: int = 0
    uploaded: int = 0
    skipped: Dict[SkipReason, int] = field(default_factory=dict)
    uploaded_names: List[str] = field(default_factory=list)

    def record_skip(self, reason: SkipReason) -> None:
        self.skipped[reason] = self.skipped.get(reason, 0) + 1

    @property
    def total_skipped(self) -> int:
        return sum(self.skipped.values())
