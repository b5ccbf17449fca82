# browser.py

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from playwright.sync_api import BrowserContext, sync_playwright

from scraper_config import USER_AGENT

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


@contextmanager
def open_browser(*, headless: bool = True, user_agent: str = USER_AGENT) -> Iterator[BrowserContext]:
    """One Chromium instance + context for the whole run; closed on exit."""
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=headless, args=LAUNCH_ARGS)
        try:
            context = browser.new_context(user_agent=user_agent)
            try:
                yield context
            finally:
                context.close()
        finally:
            browser.close()
