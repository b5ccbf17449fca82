#!/usr/bin/env python3
"""Append the latest scraper results (and post draft) to Google Sheets."""

from __future__ import annotations

import argparse
import sys

from gsheets_utils import upload_latest
from logging_utils import exception
from scraper_config import DEFAULT_OUTPUT_DIR, SheetsSettings, env_str


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="upload_to_sheets.py",
        description="Upload the newest summary-<date>.json and post draft to Google Sheets.",
    )
    p.add_argument(
        "--output-dir",
        default=env_str("SCRAPER_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR)),
        help="Folder holding the scraper output (default: %(default)s)",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    upload_latest(args.output_dir, SheetsSettings.from_env())
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception:
        exception("Upload aborted by an unexpected error.", prefix="GS")
        sys.exit(1)
