# report_formatter.py
"""
Render the final job list as a LinkedIn post draft and as CSV text.
Both are pure functions of (jobs, date).
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence

from job_models import JobRecord

CSV_HEADERS = ["Date Found", "Title", "Company", "Salary", "Location", "Platform", "URL"]

POST_FOOTER = (
    "---\n"
    "♻️ Repost to help someone in your network find their next role.\n"
    "💬 Know of other roles with salaries shown? Drop them in the comments!\n"
    "\n"
    "#SalaryTransparency #PeopleLeadership #HRJobs #Hiring"
)


def _pluralize(n: int, noun: str) -> str:
    return f"{n} {noun}" if n == 1 else f"{n} {noun}s"


def format_linkedin_post(jobs: Sequence[JobRecord], week_date: str) -> str:
    lines = [
        f"🔍 This week's People & HR leadership roles with salaries (w/c {week_date})",
        "",
        f"Found {_pluralize(len(jobs), 'role')} with transparent pay:",
        "",
    ]

    for i, job in enumerate(jobs, start=1):
        head = f"{i}. {job.title}"
        if job.company:
            head += f" — {job.company}"
        lines.append(head)
        lines.append(f"   💰 {job.salary}")
        if job.location:
            lines.append(f"   📍 {job.location}")
        lines.append(f"   🔗 {job.url}")
        lines.append("")

    return "\n".join(lines) + "\n" + POST_FOOTER


def _csv_cells(values: Sequence[str | None], quoting: int = csv.QUOTE_MINIMAL) -> str:
    """One CSV fragment (no line terminator) for `values` under `quoting`."""
    buf = io.StringIO()
    csv.writer(buf, quoting=quoting, lineterminator="\n").writerow(values)
    return buf.getvalue().removesuffix("\n")


def generate_csv(jobs: Sequence[JobRecord], week_date: str) -> str:
    """
    Text fields are always quoted (embedded quotes doubled); the date and
    URL are written bare unless they hold a delimiter.
    """
    rows = [_csv_cells(CSV_HEADERS)]
    for job in jobs:
        text_fields = [job.title, job.company, job.salary, job.location, job.platform]
        rows.append(
            ",".join(
                [
                    _csv_cells([week_date]),
                    _csv_cells(text_fields, quoting=csv.QUOTE_ALL),
                    _csv_cells([job.url]),
                ]
            )
        )
    return "\n".join(rows)
