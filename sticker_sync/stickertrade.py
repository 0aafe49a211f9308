"""HTTP client for the stickertrade.ca profile and upload endpoints."""

from __future__ import annotations

import logging
from typing import Optional, Set
from urllib.parse import quote, urlparse

import requests

from .config import SyncConfig
from .errors import SchemaError, UploadError
from .images import DownloadedImage
from .models import Profile

logger = logging.getLogger("sticker_sync")

SESSION_COOKIE = "__session"
PROFILE_DATA_ROUTE = "routes/profile/$username"
LOGIN_PATH = "/login"


class StickerTradeClient:
    """Reads a public profile and creates stickers for the configured account."""

    def __init__(
        self,
        config: SyncConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = config.stickertrade_base_url.rstrip("/")
        self.username = config.stickertrade_username
        self.upload_path = config.upload_path
        self._session_token = config.stickertrade_session
        self.session = session or requests.Session()

    def profile_url(self) -> str:
        return f"{self.base_url}/profile/{quote(self.username)}"

    def fetch_profile(self) -> Profile:
        """Load the account's public profile, including its sticker list."""
        logger.debug("Fetching stickertrade profile %s", self.username)
        resp = self.session.get(
            self.profile_url(),
            params={"_data": PROFILE_DATA_ROUTE},
        )
        resp.raise_for_status()
        try:
            payload = resp.json()
        except ValueError as exc:
            raise SchemaError(
                f"Profile response for {self.username} is not valid JSON"
            ) from exc
        return Profile.from_json(payload)

    def list_sticker_names(self) -> Set[str]:
        """Return the names of every sticker already on the profile."""
        profile = self.fetch_profile()
        names = {sticker.name for sticker in profile.stickers}
        logger.info(
            "Found %d sticker(s) on stickertrade profile %s",
            len(names),
            self.username,
        )
        return names

    def create_sticker(self, name: str, image: DownloadedImage, filename: str) -> None:
        """Submit a multipart creation request for one sticker."""
        if not self._session_token:
            raise UploadError("No stickertrade session credential configured")
        resp = self.session.post(
            f"{self.base_url}{self.upload_path}",
            data={"name": name},
            files={"image": (filename, image.data, image.mime_type)},
            cookies={SESSION_COOKIE: self._session_token},
            allow_redirects=False,
        )
        if resp.status_code >= 400:
            raise UploadError(
                f"Failed to create sticker {name!r}",
                status_code=resp.status_code,
                body=resp.text,
            )
        if 300 <= resp.status_code < 400:
            location = resp.headers.get("Location", "")
            if urlparse(location).path.rstrip("/") == LOGIN_PATH:
                raise UploadError(
                    f"Failed to create sticker {name!r}: redirected to {location}; "
                    "the session credential is missing or expired",
                    status_code=resp.status_code,
                )
        logger.debug("Created sticker %s (HTTP %d)", name, resp.status_code)
