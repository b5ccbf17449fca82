# ats_extractors.py
"""
Per-platform extraction of title / company / location / body text from a
rendered job detail page.

Each ATS gets an `AtsExtractor` subclass registered under its platform
name. A URL is routed to a strategy by matching the configured platform
domains; anything we cannot route gets an `UnsupportedPlatform`, which
says why and yields nothing. Adding a platform means registering a new
class plus a `platforms` entry in config.json.
"""

from __future__ import annotations

from collections.abc import Sequence

from bs4 import BeautifulSoup
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from job_models import PageData, Platform
from logging_utils import debug, warn
from scraper_config import BODY_WAIT_TIMEOUT_MS, PAGE_LOAD_TIMEOUT_MS


class AtsExtractor:
    """
    Selector-driven extractor. Subclasses set `platform` and the selector
    fallbacks; the first selector with non-empty text wins.
    """

    platform: str = ""
    supported: bool = True
    title_selectors: tuple[str, ...] = ("h1",)
    company_selectors: tuple[str, ...] = ()
    location_selectors: tuple[str, ...] = ()

    def parse(self, html: str, body_text: str) -> PageData | None:
        soup = BeautifulSoup(html or "", "html.parser")
        return PageData(
            title=_first_text(soup, self.title_selectors),
            company=_first_text(soup, self.company_selectors) or company_from_document_title(soup),
            location=_first_text(soup, self.location_selectors),
            body_text=body_text or "",
        )


class UnsupportedPlatform(AtsExtractor):
    """Stand-in for URLs with no matching platform or no registered strategy."""

    supported = False

    def __init__(self, reason: str) -> None:
        self.reason = reason

    def parse(self, html: str, body_text: str) -> PageData | None:
        return None


# Global in-process registry: lowercased platform name -> extractor class
_REGISTRY: dict[str, type[AtsExtractor]] = {}


def register(cls: type[AtsExtractor]) -> type[AtsExtractor]:
    """Class decorator that registers an extractor under `cls.platform`."""
    key = (cls.platform or "").strip().lower()
    if not key:
        raise ValueError(f"Cannot register extractor {cls!r}: missing/empty 'platform'.")
    if key in _REGISTRY and _REGISTRY[key] is not cls:
        raise ValueError(f"Platform {key!r} already registered to {_REGISTRY[key]!r}.")
    _REGISTRY[key] = cls
    return cls


def get_extractor(platform_name: str) -> type[AtsExtractor] | None:
    return _REGISTRY.get((platform_name or "").strip().lower())


def registered_platforms() -> list[str]:
    return sorted(_REGISTRY)


@register
class AshbyExtractor(AtsExtractor):
    platform = "ashby"
    title_selectors = ("h1", '[data-testid="job-title"]')
    company_selectors = ('[data-testid="company-name"]', ".ashby-job-posting-company-name")
    location_selectors = ('[data-testid="job-location"]', ".ashby-job-posting-location")


@register
class WorkableExtractor(AtsExtractor):
    platform = "workable"
    title_selectors = ("h1", '[data-ui="job-title"]')
    company_selectors = ('[data-ui="company-name"]', ".company-name")
    location_selectors = ('[data-ui="job-location"]', ".location")


def resolve_extractor(url: str, platforms: Sequence[Platform]) -> AtsExtractor:
    for platform in platforms:
        if not platform.matches(url):
            continue
        cls = get_extractor(platform.name)
        if cls is None:
            return UnsupportedPlatform(f"no extractor registered for platform {platform.name!r}")
        return cls()
    return UnsupportedPlatform("URL does not match any configured platform")


def fetch_job_page(
    page: Page,
    url: str,
    platforms: Sequence[Platform],
    *,
    timeout_ms: int = PAGE_LOAD_TIMEOUT_MS,
    body_timeout_ms: int = BODY_WAIT_TIMEOUT_MS,
) -> PageData | None:
    """
    Load one job detail page in `page` and extract its fields.
    Returns None when the platform is unsupported or the page fails to load.
    """
    extractor = resolve_extractor(url, platforms)
    if not extractor.supported:
        debug(f"Skipping {url}: {extractor.reason}", prefix="PAGE")
        return None

    try:
        page.goto(url, wait_until="networkidle", timeout=timeout_ms)
        page.wait_for_selector("body", timeout=body_timeout_ms)
        html = page.content()
        body_text = page.inner_text("body")
    except PlaywrightError as e:
        first = str(e).splitlines()[0] if str(e) else e.__class__.__name__
        warn(f"Failed to scrape {extractor.platform} page: {url} - {first}", prefix="PAGE")
        return None

    return extractor.parse(html, body_text)


def _first_text(soup: BeautifulSoup, selectors: Sequence[str]) -> str:
    for sel in selectors:
        el = soup.select_one(sel)
        if el is None:
            continue
        text = el.get_text().strip()
        if text:
            return text
    return ""


def company_from_document_title(soup: BeautifulSoup) -> str:
    """'Head of People - Acme' / 'Head of People at Acme' -> 'Acme'."""
    if soup.title is None:
        return ""
    doc_title = soup.title.get_text().strip()
    if not doc_title:
        return ""
    return doc_title.split(" - ")[-1].split(" at ")[-1].strip()
