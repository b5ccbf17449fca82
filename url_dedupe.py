# url_dedupe.py
"""
De-duplication by canonical URL.

The pipeline runs `dedupe_by_url` twice: over discovered search hits
before any detail page is fetched, and over the final job records. Both
passes go through this module so they always share one key rule.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import Protocol, TypeVar

T = TypeVar("T")


class HasUrl(Protocol):
    url: str


U = TypeVar("U", bound=HasUrl)


def canonical_url(url: str) -> str:
    """Drop everything from the first '?' and lowercase the rest."""
    return (url or "").split("?", 1)[0].lower()


def deduplicate(items: Iterable[T], key_of: Callable[[T], Hashable]) -> list[T]:
    """Stable de-dupe: keep the first item for each key, in input order."""
    seen: set[Hashable] = set()
    out: list[T] = []
    for item in items:
        key = key_of(item)
        if key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


def dedupe_by_url(items: Iterable[U]) -> list[U]:
    return deduplicate(items, lambda item: canonical_url(item.url))
