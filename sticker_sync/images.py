"""Image downloading and type detection for sticker uploads."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import requests
from filetype import guess

from .errors import UploadError

logger = logging.getLogger("sticker_sync")

FALLBACK_EXTENSION = "bin"
FALLBACK_MIME_TYPE = "application/octet-stream"


@dataclass
class DownloadedImage:
    """Image bytes held in memory together with their detected type."""

    url: str
    data: bytes
    extension: str
    mime_type: str = FALLBACK_MIME_TYPE


def detect_image_format(data: bytes) -> Optional[Tuple[str, str]]:
    """Detect image type using filetype; returns ``(extension, mime)``."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            ext = "jpg"
        return ext, kind.mime
    return None


def infer_image_type(content_type: Optional[str], data: bytes) -> Tuple[str, str]:
    """Pick an extension and MIME type from the file signature or HTTP metadata.

    Types filetype does not know (SVG, for one) fall back to the Content-Type;
    anything else is sent as generic binary for the destination to judge.
    """
    detected = detect_image_format(data)
    if detected:
        return detected
    mime = (content_type or "").split(";")[0].strip().lower()
    parts = mime.split("/")
    if len(parts) == 2 and parts[0] == "image" and parts[1]:
        ext = parts[1].split("+")[0]
        if ext == "jpeg":
            ext = "jpg"
        return ext, mime
    return FALLBACK_EXTENSION, FALLBACK_MIME_TYPE


def download_image(
    session: requests.Session,
    url: str,
    timeout: float = 30.0,
) -> DownloadedImage:
    """Fetch an image into memory, failing only when the download itself fails."""
    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise UploadError(f"Failed to fetch image {url}: {exc}") from exc

    content_type = resp.headers.get("Content-Type", "")
    data = resp.content
    if not data:
        raise UploadError(f"Image {url} is empty")

    extension, mime_type = infer_image_type(content_type, data)
    if extension == FALLBACK_EXTENSION:
        logger.warning(
            "Could not identify image type for %s (Content-Type=%s); uploading as binary",
            url,
            content_type,
        )
    logger.debug("Downloaded %d bytes (%s) from %s", len(data), mime_type, url)
    return DownloadedImage(url=url, data=data, extension=extension, mime_type=mime_type)
