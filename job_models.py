# job_models.py

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class Platform:
    """
    An ATS platform we search and scrape.

    `domain` drives the `site:` filter of the search query; `domain` and
    `aliases` are matched as substrings of a discovered URL to pick the
    extraction strategy.
    """

    name: str
    domain: str
    aliases: tuple[str, ...] = field(default_factory=tuple)

    def matches(self, url: str) -> bool:
        u = (url or "").lower()
        return any(d.lower() in u for d in (self.domain, *self.aliases) if d)


@dataclass(frozen=True)
class SearchQuery:
    query: str
    role: str
    platform: Platform


@dataclass(frozen=True)
class DiscoveredUrl:
    """A search hit plus the (role, platform) that produced it."""

    url: str
    search_role: str
    platform: str


@dataclass(frozen=True)
class PageData:
    title: str = ""
    company: str = ""
    location: str = ""
    body_text: str = ""


@dataclass(frozen=True)
class JobRecord:
    title: str
    company: str
    salary: str
    location: str
    platform: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    def to_sheet_row(self, date_found: str) -> list[str]:
        """Row in `Date Found, Title, Company, Salary, Location, Platform, URL` order."""
        return [
            date_found,
            self.title or "",
            self.company or "",
            self.salary or "",
            self.location or "",
            self.platform or "",
            self.url or "",
        ]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JobRecord:
        return cls(
            title=str(data.get("title") or ""),
            company=str(data.get("company") or ""),
            salary=str(data.get("salary") or ""),
            location=str(data.get("location") or ""),
            platform=str(data.get("platform") or ""),
            url=str(data.get("url") or ""),
        )
