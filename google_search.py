# google_search.py

from __future__ import annotations

import urllib.parse as up

from bs4 import BeautifulSoup
from playwright.sync_api import BrowserContext
from playwright.sync_api import Error as PlaywrightError

from logging_utils import warn
from scraper_config import MAX_RESULTS_PER_QUERY, PAGE_LOAD_TIMEOUT_MS

GOOGLE_BASE = "https://www.google.com"


def search_url(query: str, max_results: int = MAX_RESULTS_PER_QUERY) -> str:
    return f"{GOOGLE_BASE}/search?{up.urlencode({'q': query, 'num': max_results})}"


def _unwrap_redirect(href: str) -> str:
    """Google sometimes links results as /url?q=<target>&sa=..."""
    p = up.urlparse(href)
    if p.path == "/url" and "google." in p.netloc:
        qs = up.parse_qs(p.query)
        target = qs.get("q") or qs.get("url")
        if target:
            return target[0]
    return href


def parse_result_links(html: str, base_url: str = GOOGLE_BASE) -> list[str]:
    """
    Result links from a Google results page: anchors under div#search,
    minus Google's own pages and cache links, de-duped in page order.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    links: list[str] = []
    seen: set[str] = set()
    for a in soup.select("div#search a[href]"):
        href = _unwrap_redirect(up.urljoin(base_url, a.get("href", "").strip()))
        if not href.startswith(("http://", "https://")):
            continue
        if "google.com" in href or "webcache" in href:
            continue
        if href in seen:
            continue
        seen.add(href)
        links.append(href)
    return links


def search_google(
    context: BrowserContext,
    query: str,
    *,
    max_results: int = MAX_RESULTS_PER_QUERY,
    timeout_ms: int = PAGE_LOAD_TIMEOUT_MS,
) -> list[str]:
    """Run one Google search in a fresh tab. Failures are logged and give []."""
    page = context.new_page()
    try:
        page.goto(search_url(query, max_results), wait_until="networkidle", timeout=timeout_ms)
        return parse_result_links(page.content(), page.url or GOOGLE_BASE)
    except PlaywrightError as e:
        first = str(e).splitlines()[0] if str(e) else e.__class__.__name__
        warn(f"Search failed for query: {query[:60]}... - {first}", prefix="SEARCH")
        return []
    finally:
        page.close()
