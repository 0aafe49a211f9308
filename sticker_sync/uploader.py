"""Upload validated stickers to stickertrade."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .config import SyncConfig
from .images import download_image
from .models import StickerRecord
from .stickertrade import StickerTradeClient
from .utils import unique_filename

logger = logging.getLogger("sticker_sync")


class StickerUploader:
    """Download a sticker's image and create it on the destination profile."""

    def __init__(
        self,
        config: SyncConfig,
        client: StickerTradeClient,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.client = client
        self.timeout = config.request_timeout
        # Kept apart from the stickertrade session so its cookies never reach the image host.
        self.session = session or requests.Session()

    def upload(self, record: StickerRecord) -> str:
        """Upload one record and return the filename it was sent under."""
        image = download_image(self.session, record.image_url, timeout=self.timeout)
        filename = unique_filename(record.name, image.extension)
        self.client.create_sticker(record.name, image, filename)
        logger.info("Uploaded %s as %s", record.name, filename)
        return filename
