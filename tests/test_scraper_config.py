# tests/test_scraper_config.py
import json

import pytest

from job_models import Platform
from scraper_config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_POSTS_SHEET_NAME,
    DEFAULT_SHEET_NAME,
    ConfigError,
    RunSettings,
    ScraperConfig,
    SheetsSettings,
    env_float,
    env_int,
    load_config,
)


def test_load_config_file(config_file):
    cfg = load_config(config_file)
    assert cfg.roles == ("VP People",)
    assert cfg.platforms == (
        Platform(name="Ashby", domain="jobs.ashbyhq.com", aliases=("ashby.io",)),
        Platform(name="Workable", domain="apply.workable.com"),
    )
    assert cfg.salary_indicators == ("salary", "£")


def test_shipped_config_loads():
    cfg = load_config(DEFAULT_CONFIG_PATH)
    assert cfg.roles
    assert {p.name for p in cfg.platforms} == {"Ashby", "Workable"}
    assert "salary" in cfg.salary_indicators


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{roles: [", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(path)


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"roles": "VP People"},
        {"roles": ["VP People", ""]},
        {"roles": ["VP People"], "platforms": [{"name": "Ashby"}]},
        {"roles": ["VP People"], "platforms": {"name": "Ashby", "domain": "x"}},
        {"roles": ["VP People"], "salaryIndicators": "salary"},
    ],
)
def test_rejects_malformed_documents(data):
    with pytest.raises(ConfigError):
        ScraperConfig.from_dict(data)


def test_empty_sections_are_allowed():
    cfg = ScraperConfig.from_dict({})
    assert cfg.roles == ()
    assert cfg.platforms == ()
    assert cfg.salary_indicators == ()


def test_only_platforms(scraper_config):
    assert [p.name for p in scraper_config.only_platforms({"workable"}).platforms] == ["Workable"]
    assert scraper_config.only_platforms(set()) is scraper_config
    assert scraper_config.only_platforms({"lever"}).platforms == ()


def test_run_settings_validation():
    assert RunSettings().search_delay_s == 3.0
    with pytest.raises(ConfigError):
        RunSettings(search_delay_s=-1)
    with pytest.raises(ConfigError):
        RunSettings(page_timeout_ms=0)
    with pytest.raises(ConfigError):
        RunSettings(max_results=0)
    with pytest.raises(ConfigError):
        RunSettings(link_cap=0)


def test_env_numbers(monkeypatch):
    monkeypatch.setenv("SCRAPER_SEARCH_DELAY", "0.5")
    monkeypatch.setenv("SCRAPER_MAX_RESULTS", "abc")
    monkeypatch.delenv("SCRAPER_TIMEOUT_MS", raising=False)

    assert env_float("SCRAPER_SEARCH_DELAY", 3.0) == 0.5
    assert env_int("SCRAPER_TIMEOUT_MS", 15000) == 15000
    with pytest.raises(ConfigError):
        env_int("SCRAPER_MAX_RESULTS", 20)


def test_sheets_settings_from_env():
    s = SheetsSettings.from_env({})
    assert s.sheet_name == DEFAULT_SHEET_NAME
    assert s.posts_sheet_name == DEFAULT_POSTS_SHEET_NAME
    assert not s.is_configured

    key = json.dumps({"type": "service_account"})
    s = SheetsSettings.from_env({"GOOGLE_SHEET_ID": " abc ", "GOOGLE_SERVICE_ACCOUNT_KEY": key})
    assert s.sheet_id == "abc"
    assert s.is_configured
    assert key not in repr(s)

    s = SheetsSettings.from_env({"GOOGLE_SERVICE_ACCOUNT_FILE": "/keys/sa.json"})
    assert s.has_credentials
    assert not s.is_configured
