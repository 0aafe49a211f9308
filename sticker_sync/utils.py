"""Utility helpers for string normalization and filenames."""

from __future__ import annotations

import re
import uuid

SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def slugify(value: str, fallback: str = "sticker") -> str:
    """Generate a filename-friendly slug using ASCII characters only."""
    normalized = value.encode("ascii", "ignore").decode("ascii")
    normalized = normalized.lower()
    normalized = SLUG_PATTERN.sub("-", normalized).strip("-")
    return normalized or fallback


def unique_filename(name: str, extension: str) -> str:
    """Build a collision-free upload filename from a sticker name."""
    return f"{slugify(name)[:40]}-{uuid.uuid4().hex}.{extension}"
