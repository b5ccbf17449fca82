#!/usr/bin/env python3
"""
Salary-transparency job scraper for People / HR leadership roles.

Searches Google for Ashby and Workable postings, keeps the ones whose page
shows a salary, and writes a CSV, a LinkedIn post draft and a JSON summary
(for upload_to_sheets.py) into output/. Meant to run weekly from CI.

    python job_scraper.py
    python job_scraper.py --only ashby --limit-links 10
    python job_scraper.py --test-url https://jobs.ashbyhq.com/acme/123
"""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path

from dateutil import parser as date_parser

from ats_extractors import fetch_job_page
from browser import open_browser
from google_search import search_google
from job_models import DiscoveredUrl, JobRecord, PageData, Platform, SearchQuery
from logging_utils import (
    done_log,
    exception,
    info,
    log_event,
    progress,
    progress_clear_if_needed,
    warn,
)
from run_outputs import write_run_outputs
from salary_patterns import extract_salary
from scraper_config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_OUTPUT_DIR,
    MAX_RESULTS_PER_QUERY,
    PAGE_DELAY_S,
    PAGE_LOAD_TIMEOUT_MS,
    SEARCH_DELAY_S,
    ConfigError,
    RunSettings,
    ScraperConfig,
    env_float,
    env_int,
    env_str,
    load_config,
)
from search_queries import build_search_queries
from url_dedupe import dedupe_by_url

SearchFn = Callable[[str], list[str]]
FetchFn = Callable[[str], PageData | None]

UNKNOWN_COMPANY = "Unknown"
UNKNOWN_LOCATION = "Not specified"


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def parse_run_date(value: str) -> str:
    """Accept any date dateutil understands ('2026-10-18', 'Oct 18 2026') -> ISO date."""
    try:
        return date_parser.parse(value).date().isoformat()
    except (ValueError, OverflowError) as e:
        raise argparse.ArgumentTypeError(f"not a date: {value!r}") from e


# ---------------------------------------------------------------------------
# Pipeline steps
# ---------------------------------------------------------------------------
def collect_urls(
    queries: Sequence[SearchQuery],
    search: SearchFn,
    *,
    delay_s: float = SEARCH_DELAY_S,
    sleep: Callable[[float], None] = time.sleep,
) -> list[DiscoveredUrl]:
    """Step 1: run every query, tagging each hit with the role/platform that found it."""
    found: list[DiscoveredUrl] = []
    for q in queries:
        info(f'Searching: "{q.role}" on {q.platform.name}...', prefix="SEARCH")
        try:
            urls = search(q.query)
        except Exception as e:
            warn(f"Search failed for query: {q.query[:60]}... - {e!r}", prefix="SEARCH")
            urls = []

        found.extend(DiscoveredUrl(url=u, search_role=q.role, platform=q.platform.name) for u in urls)
        info(f"-> Found {len(urls)} links", prefix="SEARCH")
        sleep(delay_s)
    return found


def job_from_page(item: DiscoveredUrl, data: PageData) -> JobRecord | None:
    """A JobRecord only exists when the page text yields a salary."""
    salary = extract_salary(data.body_text)
    if not salary:
        return None
    return JobRecord(
        title=data.title or item.search_role,
        company=data.company or UNKNOWN_COMPANY,
        salary=salary,
        location=data.location or UNKNOWN_LOCATION,
        platform=item.platform,
        url=item.url,
    )


def scrape_jobs(
    items: Sequence[DiscoveredUrl],
    fetch_page: FetchFn,
    *,
    delay_s: float = PAGE_DELAY_S,
    sleep: Callable[[float], None] = time.sleep,
) -> list[JobRecord]:
    """Step 2: visit each unique URL and keep the pages that show a salary."""
    jobs: list[JobRecord] = []
    total = len(items)
    for i, item in enumerate(items, start=1):
        progress(i, total, item.url[:80], prefix="PAGE")
        try:
            data = fetch_page(item.url)
        except Exception as e:
            warn(f"Failed to scrape page: {item.url} - {e!r}", prefix="PAGE")
            data = None

        if data is None or not data.body_text:
            log_event("SKIP", item.url[:80], right="could not extract page data")
        else:
            job = job_from_page(item, data)
            if job is None:
                log_event("SKIP", item.url[:80], right="no salary found")
            else:
                jobs.append(job)
                log_event("KEEP", f"{job.title} @ {job.company}", right=job.salary)

        sleep(delay_s)

    progress_clear_if_needed()
    return jobs


def run_pipeline(
    config: ScraperConfig,
    settings: RunSettings,
    search: SearchFn,
    fetch_page: FetchFn,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> list[JobRecord]:
    """
    Queries -> search -> dedupe URLs -> fetch + salary filter -> dedupe jobs.
    `search` and `fetch_page` are the browser collaborators; tests pass fakes.
    """
    queries = build_search_queries(config.roles, config.platforms, config.salary_indicators)
    info(f"Built {len(queries)} search queries across {len(config.platforms)} platforms")

    info("Step 1: Searching Google for job listings...")
    discovered = collect_urls(queries, search, delay_s=settings.search_delay_s, sleep=sleep)
    info(f"Total URLs collected: {len(discovered)}")

    unique = dedupe_by_url(discovered)
    if settings.link_cap is not None:
        unique = unique[: settings.link_cap]
    info(f"Unique URLs to scrape: {len(unique)}")

    info("Step 2: Scraping job pages...")
    jobs = scrape_jobs(unique, fetch_page, delay_s=settings.page_delay_s, sleep=sleep)

    final_jobs = dedupe_by_url(jobs)
    done_log(f"Final results: {len(final_jobs)} jobs with salaries")
    return final_jobs


def run_with_browser(config: ScraperConfig, settings: RunSettings) -> list[JobRecord]:
    """Production wiring: one Chromium context, a tab per search, one tab for detail pages."""
    with open_browser(headless=settings.headless, user_agent=settings.user_agent) as context:
        detail_page = context.new_page()
        try:
            return run_pipeline(
                config,
                settings,
                search=lambda q: search_google(
                    context, q, max_results=settings.max_results, timeout_ms=settings.page_timeout_ms
                ),
                fetch_page=lambda url: fetch_job_page(
                    detail_page,
                    url,
                    config.platforms,
                    timeout_ms=settings.page_timeout_ms,
                    body_timeout_ms=settings.body_timeout_ms,
                ),
            )
        finally:
            detail_page.close()


def _debug_single_url(url: str, platforms: Sequence[Platform], settings: RunSettings) -> None:
    """Fetch and parse a single job URL, then print the extracted fields."""
    with open_browser(headless=settings.headless, user_agent=settings.user_agent) as context:
        page = context.new_page()
        data = fetch_job_page(
            page, url, platforms, timeout_ms=settings.page_timeout_ms, body_timeout_ms=settings.body_timeout_ms
        )
        page.close()

    if data is None:
        warn(f"Could not extract page data from {url}")
        return
    print(f"Title:    {data.title}")
    print(f"Company:  {data.company}")
    print(f"Location: {data.location}")
    print(f"Salary:   {extract_salary(data.body_text)}")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------
def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="job_scraper.py",
        description="Find Ashby / Workable People & HR leadership roles that show a salary.",
    )
    p.add_argument("--config", default=str(DEFAULT_CONFIG_PATH),
                   help="Roles / platforms / salary terms JSON (default: %(default)s)")
    p.add_argument("--output-dir", default=env_str("SCRAPER_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR)),
                   help="Where CSV, post draft and summary are written (default: %(default)s)")
    p.add_argument("--date", type=parse_run_date, default=None,
                   help="Report date used in file names and the post (default: today, UTC)")
    # politeness / timeouts
    p.add_argument("--search-delay", type=float, default=env_float("SCRAPER_SEARCH_DELAY", SEARCH_DELAY_S),
                   help="Seconds to wait after each Google search (default: %(default)s)")
    p.add_argument("--page-delay", type=float, default=env_float("SCRAPER_PAGE_DELAY", PAGE_DELAY_S),
                   help="Seconds to wait after each job page (default: %(default)s)")
    p.add_argument("--timeout-ms", type=int, default=env_int("SCRAPER_PAGE_TIMEOUT_MS", PAGE_LOAD_TIMEOUT_MS),
                   help="Page load timeout in ms (default: %(default)s)")
    p.add_argument("--max-results", type=int, default=env_int("SCRAPER_MAX_RESULTS", MAX_RESULTS_PER_QUERY),
                   help="Google results to request per query (default: %(default)s)")
    # run shape
    p.add_argument("--only", type=str, default="",
                   help="Comma list of platform names to include (e.g. 'ashby,workable')")
    p.add_argument("--limit-links", type=int, default=None,
                   help="Hard cap on job detail pages visited")
    p.add_argument("--headful", action="store_true",
                   help="Show the browser window")
    p.add_argument("--print-queries", action="store_true",
                   help="Print the search queries and exit")
    p.add_argument("--test-url", type=str, default=None,
                   help="Fetch and parse a single job URL, print fields, then exit.")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    config = load_config(args.config)
    only = {s.strip() for s in args.only.split(",") if s.strip()}
    if only:
        config = config.only_platforms(only)
        if not config.platforms:
            raise ConfigError(f"--only {args.only!r} matches no configured platform.")

    settings = RunSettings(
        search_delay_s=args.search_delay,
        page_delay_s=args.page_delay,
        page_timeout_ms=args.timeout_ms,
        max_results=args.max_results,
        output_dir=Path(args.output_dir),
        link_cap=args.limit_links,
        headless=not args.headful,
    )

    if args.print_queries:
        for q in build_search_queries(config.roles, config.platforms, config.salary_indicators):
            print(q.query)
        return 0

    if args.test_url:
        _debug_single_url(args.test_url, config.platforms, settings)
        return 0

    run_date = args.date or today_iso()
    info("Starting job scraper...")
    jobs = run_with_browser(config, settings)

    outputs = write_run_outputs(jobs, run_date, settings.output_dir)
    info(f"CSV saved: {outputs.csv_path}")
    info(f"LinkedIn post draft saved: {outputs.post_path}")
    info(f"Summary JSON saved: {outputs.summary_path}")

    print("\n" + "=" * 60)
    print("LINKEDIN POST DRAFT:")
    print("=" * 60 + "\n")
    print(outputs.post_text)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception:
        exception("Scraper run aborted.")
        sys.exit(1)
