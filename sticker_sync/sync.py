"""High-level orchestration for a Notion to stickertrade sync run."""

from __future__ import annotations

import logging
from typing import AbstractSet, List

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from .config import SyncConfig
from .models import SkipReason, StickerRecord, SyncState, SyncSummary
from .notion import NotionClient
from .stickertrade import StickerTradeClient
from .uploader import StickerUploader
from .validator import normalize_record

logger = logging.getLogger("sticker_sync")


def _enter(summary: SyncSummary, state: SyncState) -> None:
    logger.debug("Sync state -> %s", state.value)
    summary.state = state


def collect_stickers(
    notion: NotionClient,
    existing_names: AbstractSet[str],
    config: SyncConfig,
    summary: SyncSummary,
    show_progress: bool = True,
) -> List[StickerRecord]:
    """Fetch every database page and keep the ones that should be uploaded."""
    records = notion.fetch_records()
    summary.records_seen = len(records)
    logger.info("Fetching sticker details from Notion for %d record(s)...", len(records))

    accepted: List[StickerRecord] = []
    with logging_redirect_tqdm():
        for record in tqdm(records, desc="Validating", disable=not show_progress):
            outcome = normalize_record(notion, record, existing_names, config)
            if isinstance(outcome, SkipReason):
                summary.record_skip(outcome)
            else:
                accepted.append(outcome)
    summary.accepted = len(accepted)
    return accepted


def upload_stickers(
    uploader: StickerUploader,
    stickers: List[StickerRecord],
    summary: SyncSummary,
    show_progress: bool = True,
) -> None:
    with logging_redirect_tqdm():
        for sticker in tqdm(stickers, desc="Uploading", disable=not show_progress):
            uploader.upload(sticker)
            summary.uploaded += 1
            summary.uploaded_names.append(sticker.name)


def run_sync(
    config: SyncConfig,
    notion: NotionClient,
    stickertrade: StickerTradeClient,
    uploader: StickerUploader,
    show_progress: bool = True,
) -> SyncSummary:
    """Read the destination catalog, validate the source, then upload the rest.

    Any exception aborts the run at the state it was raised in; nothing is
    uploaded unless every source record validated.
    """
    summary = SyncSummary()

    _enter(summary, SyncState.READING_CATALOG)
    existing_names = stickertrade.list_sticker_names()

    _enter(summary, SyncState.FETCHING_AND_VALIDATING)
    stickers = collect_stickers(
        notion, existing_names, config, summary, show_progress=show_progress
    )
    logger.info(
        "%d of %d record(s) ready to upload (%d skipped)",
        summary.accepted,
        summary.records_seen,
        summary.total_skipped,
    )

    if not stickers:
        _enter(summary, SyncState.DONE)
        return summary

    if config.dry_run:
        for sticker in stickers:
            logger.info(
                "Dry run: would upload %s (%d remaining)",
                sticker.name,
                sticker.remaining_count,
            )
        _enter(summary, SyncState.DONE)
        return summary

    _enter(summary, SyncState.UPLOADING)
    upload_stickers(uploader, stickers, summary, show_progress=show_progress)

    _enter(summary, SyncState.DONE)
    return summary
