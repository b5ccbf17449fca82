# tests/test_ats_extractors.py
from unittest import mock

import pytest
from bs4 import BeautifulSoup
from playwright.sync_api import Error as PlaywrightError

import ats_extractors
from ats_extractors import (
    AshbyExtractor,
    AtsExtractor,
    UnsupportedPlatform,
    WorkableExtractor,
    company_from_document_title,
    fetch_job_page,
    register,
    registered_platforms,
    resolve_extractor,
)
from job_models import PageData, Platform


# ----------------------------------------------------------------------
# Parsing
# ----------------------------------------------------------------------
def test_ashby_selectors(ashby_html):
    data = AshbyExtractor().parse(ashby_html, "body text")
    assert data == PageData(title="VP People", company="Acme Corp", location="Remote - UK", body_text="body text")


def test_workable_company_falls_back_to_document_title(workable_html):
    data = WorkableExtractor().parse(workable_html, "Salary 90,000 - 110,000 EUR")
    assert data.title == "Head of People"
    assert data.company == "Globex"
    assert data.location == "Berlin, Germany"


def test_missing_fields_are_empty_strings():
    data = AshbyExtractor().parse("<html><body><p>hi</p></body></html>", "hi")
    assert data == PageData(title="", company="", location="", body_text="hi")


@pytest.mark.parametrize(
    "doc_title, expected",
    [
        ("Head of People - Acme", "Acme"),
        ("Head of People at Acme", "Acme"),
        ("Jobs - Head of People at Initech", "Initech"),
        ("Acme", "Acme"),
    ],
)
def test_company_from_document_title(doc_title, expected):
    soup = BeautifulSoup(f"<html><head><title>{doc_title}</title></head></html>", "html.parser")
    assert company_from_document_title(soup) == expected


# ----------------------------------------------------------------------
# Routing
# ----------------------------------------------------------------------
def test_resolve_by_domain_and_alias(platforms):
    assert isinstance(resolve_extractor("https://jobs.ashbyhq.com/acme/123", platforms), AshbyExtractor)
    assert isinstance(resolve_extractor("https://acme.ashby.io/jobs/9", platforms), AshbyExtractor)
    assert isinstance(resolve_extractor("https://APPLY.WORKABLE.COM/globex/j/ABC", platforms), WorkableExtractor)


def test_unmatched_url_is_unsupported(platforms):
    extractor = resolve_extractor("https://boards.greenhouse.io/acme/jobs/1", platforms)
    assert isinstance(extractor, UnsupportedPlatform)
    assert extractor.supported is False
    assert "does not match" in extractor.reason
    assert extractor.parse("<html></html>", "Salary: $1") is None


def test_configured_platform_without_strategy_is_unsupported():
    lever = Platform(name="Lever", domain="jobs.lever.co")
    extractor = resolve_extractor("https://jobs.lever.co/acme/1", [lever])
    assert isinstance(extractor, UnsupportedPlatform)
    assert "Lever" in extractor.reason


def test_register_new_platform(monkeypatch):
    monkeypatch.setattr(ats_extractors, "_REGISTRY", dict(ats_extractors._REGISTRY))

    @register
    class LeverExtractor(AtsExtractor):
        platform = "lever"
        location_selectors = (".location",)

    assert "lever" in registered_platforms()
    lever = Platform(name="Lever", domain="jobs.lever.co")
    assert isinstance(resolve_extractor("https://jobs.lever.co/acme/1", [lever]), LeverExtractor)


def test_register_rejects_conflicts(monkeypatch):
    monkeypatch.setattr(ats_extractors, "_REGISTRY", dict(ats_extractors._REGISTRY))

    class Nameless(AtsExtractor):
        platform = ""

    class OtherAshby(AtsExtractor):
        platform = "Ashby"

    with pytest.raises(ValueError):
        register(Nameless)
    with pytest.raises(ValueError):
        register(OtherAshby)
    # re-registering the same class is fine
    assert register(AshbyExtractor) is AshbyExtractor


# ----------------------------------------------------------------------
# Fetching (Playwright page mocked)
# ----------------------------------------------------------------------
def test_fetch_job_page_extracts(platforms, ashby_html):
    page = mock.Mock()
    page.content.return_value = ashby_html
    page.inner_text.return_value = "Compensation: £140k - £160k"

    data = fetch_job_page(page, "https://jobs.ashbyhq.com/acme/1", platforms, timeout_ms=1234)

    page.goto.assert_called_once_with("https://jobs.ashbyhq.com/acme/1", wait_until="networkidle", timeout=1234)
    page.wait_for_selector.assert_called_once()
    assert data.title == "VP People"
    assert data.body_text == "Compensation: £140k - £160k"


def test_fetch_job_page_swallows_playwright_errors(platforms, log_output):
    page = mock.Mock()
    page.goto.side_effect = PlaywrightError("Timeout 15000ms exceeded.")

    assert fetch_job_page(page, "https://apply.workable.com/globex/j/1", platforms) is None
    assert "Timeout 15000ms exceeded." in log_output.getvalue()


def test_fetch_job_page_skips_unsupported_without_navigating(platforms):
    page = mock.Mock()
    assert fetch_job_page(page, "https://example.com/careers/1", platforms) is None
    page.goto.assert_not_called()
