# scraper_config.py

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from job_models import Platform

# ---- Defaults ----
PROJECT_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = PROJECT_DIR / "config.json"
DEFAULT_OUTPUT_DIR = PROJECT_DIR / "output"

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

SEARCH_DELAY_S = 3.0          # after every Google search
PAGE_DELAY_S = 1.0            # after every job detail page
PAGE_LOAD_TIMEOUT_MS = 15000  # Playwright page.goto
BODY_WAIT_TIMEOUT_MS = 5000   # Playwright wait_for_selector("body")
MAX_RESULTS_PER_QUERY = 20    # Google results per search query

# === Google Sheets upload ===
DEFAULT_SHEET_NAME = "Jobs"
DEFAULT_POSTS_SHEET_NAME = "LinkedIn Posts"


class ConfigError(ValueError):
    """Raised when the config document or settings cannot be used."""


@dataclass(frozen=True)
class ScraperConfig:
    """Roles, platforms and salary terms for one run. Loaded once at startup."""

    roles: tuple[str, ...]
    platforms: tuple[Platform, ...]
    salary_indicators: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> ScraperConfig:
        if not isinstance(data, dict):
            raise ConfigError("Config must be a JSON object.")

        roles = data.get("roles") or []
        if not isinstance(roles, list) or not all(isinstance(r, str) and r.strip() for r in roles):
            raise ConfigError("'roles' must be a list of non-empty strings.")

        indicators = data.get("salaryIndicators") or []
        if not isinstance(indicators, list) or not all(isinstance(t, str) for t in indicators):
            raise ConfigError("'salaryIndicators' must be a list of strings.")

        return cls(
            roles=tuple(r.strip() for r in roles),
            platforms=tuple(_parse_platforms(data.get("platforms") or [])),
            salary_indicators=tuple(t.strip() for t in indicators if t.strip()),
        )

    def only_platforms(self, names: set[str]) -> ScraperConfig:
        """Copy of this config restricted to the given platform names (case-insensitive)."""
        if not names:
            return self
        wanted = {n.strip().lower() for n in names if n.strip()}
        kept = tuple(p for p in self.platforms if p.name.lower() in wanted)
        return ScraperConfig(roles=self.roles, platforms=kept, salary_indicators=self.salary_indicators)


def _parse_platforms(value: Any) -> list[Platform]:
    if not isinstance(value, list):
        raise ConfigError("'platforms' must be a list of {name, domain} objects.")
    out: list[Platform] = []
    for i, item in enumerate(value):
        if not isinstance(item, dict):
            raise ConfigError(f"platforms[{i}] must be an object.")
        name = str(item.get("name") or "").strip()
        domain = str(item.get("domain") or "").strip()
        if not name or not domain:
            raise ConfigError(f"platforms[{i}] requires 'name' and 'domain'.")
        aliases = item.get("aliases") or []
        if not isinstance(aliases, list):
            raise ConfigError(f"platforms[{i}].aliases must be a list.")
        out.append(Platform(name=name, domain=domain, aliases=tuple(str(a) for a in aliases if a)))
    return out


def load_config(path: str | os.PathLike[str] = DEFAULT_CONFIG_PATH) -> ScraperConfig:
    cfg_path = Path(path)
    try:
        with cfg_path.open(encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {cfg_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file is invalid JSON: {cfg_path} ({e})") from e
    return ScraperConfig.from_dict(data)


def env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}.") from e


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}.") from e


@dataclass(frozen=True)
class RunSettings:
    """Knobs for one scraper run (CLI options over env over defaults)."""

    search_delay_s: float = SEARCH_DELAY_S
    page_delay_s: float = PAGE_DELAY_S
    page_timeout_ms: int = PAGE_LOAD_TIMEOUT_MS
    body_timeout_ms: int = BODY_WAIT_TIMEOUT_MS
    max_results: int = MAX_RESULTS_PER_QUERY
    output_dir: Path = DEFAULT_OUTPUT_DIR
    link_cap: int | None = None
    headless: bool = True
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if self.search_delay_s < 0 or self.page_delay_s < 0:
            raise ConfigError("Delays cannot be negative.")
        if self.page_timeout_ms <= 0 or self.body_timeout_ms <= 0:
            raise ConfigError("Timeouts must be positive.")
        if self.max_results <= 0:
            raise ConfigError("max_results must be >= 1.")
        if self.link_cap is not None and self.link_cap <= 0:
            raise ConfigError("link_cap must be >= 1 when set.")


@dataclass(frozen=True)
class SheetsSettings:
    """
    Google Sheets target + service account, read from the environment.

    GOOGLE_SERVICE_ACCOUNT_KEY holds the JSON key text (CI secret);
    GOOGLE_SERVICE_ACCOUNT_FILE points at a key file. The text wins if both are set.
    """

    sheet_id: str = ""
    sheet_name: str = DEFAULT_SHEET_NAME
    posts_sheet_name: str = DEFAULT_POSTS_SHEET_NAME
    service_account_key: str = field(default="", repr=False)
    service_account_file: str = ""

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> SheetsSettings:
        env = os.environ if environ is None else environ
        return cls(
            sheet_id=(env.get("GOOGLE_SHEET_ID") or "").strip(),
            sheet_name=(env.get("GOOGLE_SHEET_NAME") or "").strip() or DEFAULT_SHEET_NAME,
            posts_sheet_name=(env.get("GOOGLE_POSTS_SHEET_NAME") or "").strip() or DEFAULT_POSTS_SHEET_NAME,
            service_account_key=(env.get("GOOGLE_SERVICE_ACCOUNT_KEY") or "").strip(),
            service_account_file=(env.get("GOOGLE_SERVICE_ACCOUNT_FILE") or "").strip(),
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.service_account_key or self.service_account_file)

    @property
    def is_configured(self) -> bool:
        return bool(self.sheet_id) and self.has_credentials
