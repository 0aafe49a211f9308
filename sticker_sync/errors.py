"""Exception types raised by the sticker sync pipeline."""

from __future__ import annotations

from typing import Optional


class StickerSyncError(Exception):
    """Base class for every fatal sync failure."""


class ConfigError(StickerSyncError):
    """Raised when required settings are missing or malformed."""


class SchemaError(StickerSyncError):
    """Raised when an API response does not have the expected shape."""

    def __init__(self, message: str, record_id: Optional[str] = None) -> None:
        if record_id:
            message = f"{message} (record {record_id})"
        super().__init__(message)
        self.record_id = record_id


class NameTooLongError(SchemaError):
    """Raised when a sticker name exceeds the destination's length limit."""

    def __init__(
        self,
        name: str,
        limit: int,
        record_id: Optional[str] = None,
    ) -> None:
        self.name = name
        self.length = len(name)
        self.limit = limit
        super().__init__(
            f"Sticker name {name!r} is {self.length} characters long; "
            f"the maximum is {limit}",
            record_id=record_id,
        )


class UploadError(StickerSyncError):
    """Raised when an image download or sticker creation request fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body
