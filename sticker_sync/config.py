"""Configuration objects and constants for the sticker sync."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError

DEFAULT_STICKERTRADE_URL = "https://stickertrade.ca"
DEFAULT_UPLOAD_PATH = "/upload"
DEFAULT_MAX_NAME_LENGTH = 60

_REQUIRED_VARS = (
    "NOTION_TOKEN",
    "NOTION_DATABASE_ID",
    "NOTION_COUNT_PROPERTY_ID",
    "NOTION_EXCLUDE_PROPERTY_ID",
    "STICKERTRADE_USERNAME",
)


def _parse_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def _parse_positive_int(name: str, value: Optional[str], default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc
    if parsed <= 0:
        raise ConfigError(f"{name} must be positive, got {parsed}")
    return parsed


@dataclass
class SyncConfig:
    """Top-level settings shared by the Notion reader and the stickertrade client."""

    notion_token: str
    database_id: str
    count_property_id: str
    exclude_property_id: str
    stickertrade_username: str
    stickertrade_session: Optional[str] = None
    stickertrade_base_url: str = DEFAULT_STICKERTRADE_URL
    upload_path: str = DEFAULT_UPLOAD_PATH
    max_name_length: int = DEFAULT_MAX_NAME_LENGTH
    request_timeout: float = 30.0
    dry_run: bool = False

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        dry_run: Optional[bool] = None,
    ) -> "SyncConfig":
        """Build a config from environment variables.

        All missing required variables are reported together. The session
        credential is only required when the run will upload.
        """
        env = os.environ if environ is None else environ
        if dry_run is None:
            dry_run = _parse_bool(env.get("DRY_RUN"))

        required = list(_REQUIRED_VARS)
        if not dry_run:
            required.append("STICKERTRADE_SESSION")
        missing = [name for name in required if not env.get(name)]
        if missing:
            raise ConfigError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        return cls(
            notion_token=env["NOTION_TOKEN"],
            database_id=env["NOTION_DATABASE_ID"],
            count_property_id=env["NOTION_COUNT_PROPERTY_ID"],
            exclude_property_id=env["NOTION_EXCLUDE_PROPERTY_ID"],
            stickertrade_username=env["STICKERTRADE_USERNAME"],
            stickertrade_session=env.get("STICKERTRADE_SESSION") or None,
            stickertrade_base_url=(
                env.get("STICKERTRADE_BASE_URL") or DEFAULT_STICKERTRADE_URL
            ).rstrip("/"),
            upload_path=env.get("STICKERTRADE_UPLOAD_PATH") or DEFAULT_UPLOAD_PATH,
            max_name_length=_parse_positive_int(
                "STICKER_MAX_NAME_LENGTH",
                env.get("STICKER_MAX_NAME_LENGTH"),
                DEFAULT_MAX_NAME_LENGTH,
            ),
            dry_run=dry_run,
        )
