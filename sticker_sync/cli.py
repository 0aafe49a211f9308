"""Command-line entry point for the sticker sync."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Sequence

from dotenv import load_dotenv

from .config import SyncConfig
from .notion import NotionClient
from .stickertrade import StickerTradeClient
from .sync import run_sync
from .uploader import StickerUploader

logger = logging.getLogger("sticker_sync.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Upload stickers from a Notion database to a stickertrade.ca profile."
        ),
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Validate the Notion database without uploading anything",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def _run(args: argparse.Namespace) -> None:
    config = SyncConfig.from_env(dry_run=args.dry_run)
    stickertrade = StickerTradeClient(config)
    notion = NotionClient(config)
    uploader = StickerUploader(config, stickertrade)

    overall_start = time.perf_counter()
    summary = run_sync(config, notion, stickertrade, uploader)
    total_elapsed = time.perf_counter() - overall_start

    logger.info(
        "Finished in %.2fs (%d records, %d skipped, %d uploaded)",
        total_elapsed,
        summary.records_seen,
        summary.total_skipped,
        summary.uploaded,
    )
    for reason, count in summary.skipped.items():
        logger.debug("Skipped %d because %s", count, reason.value)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    load_dotenv()

    try:
        _run(args)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Sticker sync failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
