# tests/conftest.py
import io
import json

import pytest

import logging_utils
from job_models import JobRecord, PageData, Platform
from scraper_config import ScraperConfig

ASHBY = Platform(name="Ashby", domain="jobs.ashbyhq.com", aliases=("ashby.io",))
WORKABLE = Platform(name="Workable", domain="apply.workable.com", aliases=("workable.com",))


# ---------------------------------------------------------------------
# Keep log lines out of the terminal; tests that care read `log_output`
# ---------------------------------------------------------------------
@pytest.fixture(autouse=True)
def log_output(monkeypatch):
    buf = io.StringIO()
    monkeypatch.setattr(logging_utils, "LOG_STREAM", buf)
    monkeypatch.setattr(logging_utils, "PROGRESS_STREAM", io.StringIO())
    monkeypatch.setattr(logging_utils, "_PROGRESS_ACTIVE", False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("SCRAPER_DEBUG", raising=False)
    return buf


@pytest.fixture
def platforms():
    return (ASHBY, WORKABLE)


@pytest.fixture
def scraper_config(platforms):
    return ScraperConfig(
        roles=("VP People", "Head of People"),
        platforms=platforms,
        salary_indicators=("salary", "OTE"),
    )


@pytest.fixture
def config_file(tmp_path):
    data = {
        "roles": ["VP People"],
        "platforms": [
            {"name": "Ashby", "domain": "jobs.ashbyhq.com", "aliases": ["ashby.io"]},
            {"name": "Workable", "domain": "apply.workable.com"},
        ],
        "salaryIndicators": ["salary", "£"],
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def make_job():
    def _make(**overrides):
        fields = {
            "title": "VP People",
            "company": "Acme",
            "salary": "$150,000 - $180,000",
            "location": "Remote (US)",
            "platform": "Ashby",
            "url": "https://jobs.ashbyhq.com/acme/1",
        }
        fields.update(overrides)
        return JobRecord(**fields)

    return _make


@pytest.fixture
def page_with_salary():
    return PageData(
        title="Head of People",
        company="Acme",
        location="London",
        body_text="About the role. Salary: £95,000 - £110,000 per annum plus equity.",
    )


@pytest.fixture
def ashby_html():
    return """
    <html>
      <head><title>VP People @ Acme - Acme</title></head>
      <body>
        <h1> VP People </h1>
        <div data-testid="company-name">Acme Corp</div>
        <div data-testid="job-location">Remote - UK</div>
        <p>Compensation: £140k - £160k</p>
      </body>
    </html>
    """


@pytest.fixture
def workable_html():
    return """
    <html>
      <head><title>Head of People - Globex</title></head>
      <body>
        <h1>Head of People</h1>
        <span class="location">Berlin, Germany</span>
        <p>Salary 90,000 - 110,000 EUR</p>
      </body>
    </html>
    """
