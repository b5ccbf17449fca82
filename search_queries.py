# search_queries.py

from __future__ import annotations

from collections.abc import Iterable, Sequence

from job_models import Platform, SearchQuery


def build_query_string(role: str, domain: str, salary_indicators: Sequence[str]) -> str:
    """
    '"VP People" (salary OR £ OR OTE) site:jobs.ashbyhq.com'

    The indicator group is left out entirely when there are no terms.
    """
    terms = [t for t in salary_indicators if t]
    parts = [f'"{role}"']
    if terms:
        parts.append(f"({' OR '.join(terms)})")
    parts.append(f"site:{domain}")
    return " ".join(parts)


def build_search_queries(
    roles: Iterable[str],
    platforms: Sequence[Platform],
    salary_indicators: Sequence[str],
) -> list[SearchQuery]:
    """One query per (role, platform), role-major then platform order."""
    queries: list[SearchQuery] = []
    for role in roles:
        for platform in platforms:
            queries.append(
                SearchQuery(
                    query=build_query_string(role, platform.domain, salary_indicators),
                    role=role,
                    platform=platform,
                )
            )
    return queries
