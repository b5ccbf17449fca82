# salary_patterns.py
"""
Salary detection over plain page text.

Patterns are tried in order and the first pattern that matches anywhere
wins; its leftmost match is returned. This is first-match, not
best-match: a later pattern is never consulted once an earlier one hits.
Every pattern needs a currency symbol, a currency code or a pay keyword,
so prose-only salaries are missed on purpose.
"""

from __future__ import annotations

import re

_CUR = r"[$£€]"
_FIGURE = r"[0-9,]+[kK]?"  # ASCII digits only; \s still matches \xa0
_PERIOD = r"(?:per\s+(?:year|annum)|p\.?a\.?|annually|/yr|/year)"

SALARY_PATTERNS: tuple[re.Pattern[str], ...] = (
    # $120,000 - $150,000 / £80k to £95k, optional period
    re.compile(
        rf"{_CUR}\s?{_FIGURE}\s*[-–to]+\s*{_CUR}?\s?{_FIGURE}(?:\s*{_PERIOD})?",
        re.I,
    ),
    # $120,000+ per year / £80k p.a.
    re.compile(rf"{_CUR}\s?{_FIGURE}\+?(?:\s*{_PERIOD})", re.I),
    # Salary: $120,000
    re.compile(rf"(?:salary|compensation|pay|comp)[:\s]+{_CUR}\s?{_FIGURE}", re.I),
    # 120,000 - 150,000 GBP
    re.compile(rf"{_FIGURE}\s*[-–to]+\s*{_FIGURE}\s*(?:GBP|USD|EUR|AUD|CAD|NZD)", re.I),
    # OTE: £120k / on-target earnings $200,000
    re.compile(rf"(?:OTE|on[- ]target[- ]earnings?)[:\s]*{_CUR}\s?{_FIGURE}", re.I),
    # Base: $140k
    re.compile(rf"(?:base)[:\s]*{_CUR}\s?{_FIGURE}", re.I),
)


def extract_salary(text: str | None) -> str | None:
    """Return the salary snippet found in `text`, or None."""
    if not text:
        return None

    for rx in SALARY_PATTERNS:
        m = rx.search(text)
        if m:
            return m.group(0).strip()

    return None


def has_salary_info(text: str | None) -> bool:
    return extract_salary(text) is not None
