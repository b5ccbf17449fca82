# run_outputs.py
"""
Files a run leaves in output/, all keyed by the run date:

    jobs-<date>.csv            CSV for Sheets / manual review
    linkedin-post-<date>.txt   post draft
    summary-<date>.json        {"date": ..., "jobs": [...]}, read by the uploader
"""

from __future__ import annotations

import json
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from job_models import JobRecord
from report_formatter import format_linkedin_post, generate_csv

CSV_PREFIX = "jobs-"
POST_PREFIX = "linkedin-post-"
SUMMARY_PREFIX = "summary-"


@dataclass(frozen=True)
class RunOutputs:
    csv_path: Path
    post_path: Path
    summary_path: Path
    post_text: str


@dataclass(frozen=True)
class Summary:
    path: Path
    date: str
    jobs: list[JobRecord]


def output_paths(output_dir: str | os.PathLike[str], run_date: str) -> tuple[Path, Path, Path]:
    out = Path(output_dir)
    return (
        out / f"{CSV_PREFIX}{run_date}.csv",
        out / f"{POST_PREFIX}{run_date}.txt",
        out / f"{SUMMARY_PREFIX}{run_date}.json",
    )


def write_run_outputs(
    jobs: Sequence[JobRecord],
    run_date: str,
    output_dir: str | os.PathLike[str],
) -> RunOutputs:
    csv_path, post_path, summary_path = output_paths(output_dir, run_date)
    csv_path.parent.mkdir(parents=True, exist_ok=True)

    csv_path.write_text(generate_csv(jobs, run_date), encoding="utf-8")

    post_text = format_linkedin_post(jobs, run_date)
    post_path.write_text(post_text, encoding="utf-8")

    summary = {"date": run_date, "jobs": [job.to_dict() for job in jobs]}
    summary_path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")

    return RunOutputs(csv_path=csv_path, post_path=post_path, summary_path=summary_path, post_text=post_text)


def _latest(output_dir: str | os.PathLike[str], prefix: str, suffix: str) -> Path | None:
    """Lexicographically last file named <prefix>*<suffix>; None if nothing matches."""
    out = Path(output_dir)
    if not out.is_dir():
        return None
    names = sorted(p.name for p in out.iterdir() if p.name.startswith(prefix) and p.name.endswith(suffix))
    return out / names[-1] if names else None


def load_latest_summary(output_dir: str | os.PathLike[str]) -> Summary | None:
    path = _latest(output_dir, SUMMARY_PREFIX, ".json")
    if path is None:
        return None
    data: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    return Summary(
        path=path,
        date=str(data.get("date") or ""),
        jobs=[JobRecord.from_dict(j) for j in data.get("jobs") or []],
    )


def load_latest_post(output_dir: str | os.PathLike[str]) -> str | None:
    path = _latest(output_dir, POST_PREFIX, ".txt")
    if path is None:
        return None
    return path.read_text(encoding="utf-8")
