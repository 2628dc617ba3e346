from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import pandas as pd

from .extraction import ImportedRow
from .text import normalize_name


IDENTITY_FIELDS = ("job_title", "fiscal_year", "period", "first_name", "last_name")

SUMMARY_COLUMNS = {
    "job_title": "Job Title",
    "fiscal_year": "Fiscal Year",
    "period": "Period",
    "first_name": "First Name",
    "last_name": "Last Name",
    "employee_score_percent": "Employee Score",
    "coordinator_score_percent": "Coordinator Score",
}


@dataclass
class CombinedRow:
    key: str
    job_title: str = ""
    fiscal_year: str = ""
    period: str = ""
    first_name: str = ""
    last_name: str = ""
    employee_score_percent: float | None = None
    coordinator_score_percent: float | None = None
    source_files: List[str] = field(default_factory=list)


def identity_key(first_name: str, last_name: str) -> str:
    # Name only: two people sharing a name across job titles or periods collapse into one row.
    return f"{normalize_name(first_name)}|{normalize_name(last_name)}"


def merge_rows(rows: Iterable[ImportedRow]) -> List[CombinedRow]:
    """Group imported rows by normalised name, keeping first-appearance order.

    Identity fields take the first non-empty value seen for the group. Score
    slots are last-write-wins in upload order: a later Employee (or
    Coordinator) file replaces the earlier one's value, even when the later
    file had no scores. Unknown-role rows never touch a slot.
    """
    combined: Dict[str, CombinedRow] = {}

    for row in rows:
        key = identity_key(row.first_name, row.last_name)
        target = combined.setdefault(key, CombinedRow(key=key))

        for name in IDENTITY_FIELDS:
            if not getattr(target, name):
                setattr(target, name, getattr(row, name))

        if row.completed_by == "Employee":
            target.employee_score_percent = row.percent
        elif row.completed_by == "Coordinator":
            target.coordinator_score_percent = row.percent

        if row.file_name:
            target.source_files.append(row.file_name)

    return list(combined.values())


def summary_frame(rows: Iterable[CombinedRow]) -> pd.DataFrame:
    records = [{col: getattr(row, col) for col in SUMMARY_COLUMNS} for row in rows]
    return pd.DataFrame(records, columns=list(SUMMARY_COLUMNS)).rename(columns=SUMMARY_COLUMNS)


def format_percent(value) -> str:
    if value is None or pd.isna(value):
        return ""
    return f"{value:.1f}%"


def to_tsv(rows: Iterable[CombinedRow]) -> str:
    """Header-less TSV for pasting into an existing spreadsheet."""
    df = summary_frame(rows)
    if df.empty:
        return ""
    for col in ("Employee Score", "Coordinator Score"):
        df[col] = df[col].map(format_percent)
    df = df.astype(str).replace(r"\r?\n", " ", regex=True)
    return df.to_csv(sep="\t", header=False, index=False, lineterminator="\n").rstrip("\n")
