"""
Push the latest scraper run to Google Sheets.

Reads the newest summary-<date>.json in output/, appends one row per job
to the jobs tab and the newest post draft to the posts tab. Tabs and
header rows are created on first use. Every failure is logged and the
upload simply stops; the local CSV / post / summary files are untouched.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import gspread
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from logging_utils import log_line
from report_formatter import CSV_HEADERS
from run_outputs import load_latest_post, load_latest_summary
from scraper_config import SheetsSettings

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]  # Sheets only (no Drive)
POST_HEADERS = ["Date", "Post Draft"]

# API, auth and transport failures (requests errors are OSErrors)
SHEETS_ERRORS = (gspread.exceptions.GSpreadException, GoogleAuthError, OSError)


def _gs_log(level: str, msg: str) -> None:
    """Sheets log lines carry a [GS] prefix so they are easy to spot."""
    log_line(level, msg, prefix="GS")


def service_account_credentials(settings: SheetsSettings) -> Credentials:
    """
    Build service-account credentials from the key text or key file.
    Raises ValueError (json.JSONDecodeError included) for an unusable key.
    """
    if settings.service_account_key:
        info = json.loads(settings.service_account_key)
        if not isinstance(info, dict):
            raise ValueError("service account key must be a JSON object")
        return Credentials.from_service_account_info(info, scopes=SCOPES)

    key_file = Path(settings.service_account_file)
    if not key_file.exists():
        raise ValueError(f"key file not found at {key_file}")
    return Credentials.from_service_account_file(str(key_file), scopes=SCOPES)


def authorize(settings: SheetsSettings) -> gspread.Client:
    return gspread.authorize(service_account_credentials(settings))


def ensure_worksheet(sh: gspread.Spreadsheet, title: str, header: Sequence[str]) -> gspread.Worksheet:
    """Return the tab called `title`, creating it with a header row if it is missing."""
    for ws in sh.worksheets():
        if ws.title == title:
            return ws

    ws = sh.add_worksheet(title=title, rows=1000, cols=max(len(header), 2))
    ws.update(values=[list(header)], range_name="A1")
    _gs_log("INFO", f"Created {title!r} sheet with headers")
    return ws


def _normalize_sheet_value(value: Any) -> str:
    """Force all cell values to plain strings for Sheets."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def append_rows(ws: gspread.Worksheet, rows: Sequence[Sequence[Any]]) -> int:
    values = [[_normalize_sheet_value(v) for v in row] for row in rows]
    if not values:
        return 0
    ws.append_rows(values, value_input_option="RAW", insert_data_option="INSERT_ROWS")
    return len(values)


def upload_latest(
    output_dir: str | os.PathLike[str],
    settings: SheetsSettings,
    *,
    authorize_fn: Callable[[SheetsSettings], gspread.Client] = authorize,
) -> int:
    """
    Upload the most recent run. Returns the number of job rows appended;
    0 whenever the upload is skipped or fails.
    """
    summary = load_latest_summary(output_dir)
    if summary is None:
        _gs_log("WARN", "No summary files found. Run the scraper first.")
        return 0

    _gs_log("INFO", f"Loading {len(summary.jobs)} jobs from {summary.path.name}")

    if not settings.is_configured:
        _gs_log(
            "WARN",
            "Google Sheets credentials not configured. Set GOOGLE_SHEET_ID and "
            "GOOGLE_SERVICE_ACCOUNT_KEY (or GOOGLE_SERVICE_ACCOUNT_FILE). "
            f"Your results are still available as CSV in {output_dir}.",
        )
        return 0

    try:
        client = authorize_fn(settings)
    except ValueError as e:
        _gs_log(
            "ERROR",
            f"Failed to load the service account key ({e}). Make sure "
            "GOOGLE_SERVICE_ACCOUNT_KEY is the full JSON key, or that "
            "GOOGLE_SERVICE_ACCOUNT_FILE points at it.",
        )
        return 0

    try:
        sh = client.open_by_key(settings.sheet_id)
        ws = ensure_worksheet(sh, settings.sheet_name, CSV_HEADERS)
    except SHEETS_ERRORS as e:
        _gs_log("ERROR", f"Error accessing spreadsheet: {e}")
        return 0

    rows = [job.to_sheet_row(summary.date) for job in summary.jobs]
    if not rows:
        _gs_log("INFO", "No jobs to upload this week.")
        return 0

    try:
        uploaded = append_rows(ws, rows)
    except SHEETS_ERRORS as e:
        _gs_log("ERROR", f"Error uploading to Sheets: {e}")
        return 0

    _gs_log("DONE", f"Uploaded {uploaded} jobs to tab {settings.sheet_name!r}.")
    _gs_log("INFO", f"Sheet: https://docs.google.com/spreadsheets/d/{settings.sheet_id}")

    post = load_latest_post(output_dir)
    if post is not None:
        try:
            posts_ws = ensure_worksheet(sh, settings.posts_sheet_name, POST_HEADERS)
            append_rows(posts_ws, [[summary.date, post]])
            _gs_log("INFO", f"Post draft also saved to {settings.posts_sheet_name!r} tab")
        except SHEETS_ERRORS as e:
            _gs_log("WARN", f"Could not save post draft to Sheets: {e}")

    return uploaded
