"""Cell positions shared by the form generator and the score importer.

Anything the importer reads back from a completed form is addressed through
the constants below, so a change to the generated layout is picked up by both
sides at once.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Tuple

from openpyxl.utils import get_column_letter


ReviewType = Literal["mid", "end"]

LAYOUT_VERSION = "1"
METADATA_SHEET = "_form_meta"

# Template workbook: A = KPI title, B = competency, C = description, D..H = ratings 1-5
TEMPLATE_FIRST_ROW = 2
TEMPLATE_COLUMNS = 8

# Generated form columns
LABEL_COL = 2  # B
DESCRIPTION_COL = 3  # C
SCORE_COL = 4  # D
SPACER_COL = 5  # E
NOTES_COL = 6  # F
GOALS_COL = 7  # G

TITLE_ROW = 2
INSTRUCTIONS_ROW = 3
HEADER_FIRST_ROW = 6

BLOCK_HEIGHT = 8
BLOCK_STRIDE = BLOCK_HEIGHT + 1
LEGEND_TITLE_OFFSET = 2
LEGEND_FIRST_OFFSET = 3

RATING_LABELS = (
    "1 – Unsatisfactory",
    "2 – Needs Improvement",
    "3 – Proficient",
    "4 – Strong",
    "5 – Exemplary",
)

PERIOD_LABELS: Dict[str, str] = {"mid": "Middle of Year", "end": "End of Year"}
PERIOD_CODES: Dict[str, str] = {"mid": "MOY", "end": "EOY"}

COMPLETED_BY_CHOICES = ("Employee", "Coordinator")


@dataclass(frozen=True)
class HeaderField:
    key: str
    label: str
    editable: bool = False
    choices: Tuple[str, ...] = ()


HEADER_FIELDS: Tuple[HeaderField, ...] = (
    HeaderField("job_title", "Job Title:"),
    HeaderField("fiscal_year", "Fiscal Year:"),
    HeaderField("period", "Period:"),
    HeaderField("completed_by", "Completed By:", editable=True, choices=COMPLETED_BY_CHOICES),
    HeaderField("first_name", "First Name:", editable=True),
    HeaderField("last_name", "Last Name:", editable=True),
)

HEADER_LAST_ROW = HEADER_FIRST_ROW + len(HEADER_FIELDS) - 1
SECTION_A_ROW = HEADER_LAST_ROW + 2
SECTION_A_FIRST_BLOCK_ROW = SECTION_A_ROW + 2


def header_row(key: str) -> int:
    for offset, header in enumerate(HEADER_FIELDS):
        if header.key == key:
            return HEADER_FIRST_ROW + offset
    raise KeyError(f"Unknown header field '{key}'")


def header_address(key: str) -> str:
    """Value cell of an identity field (merged C:D, value lives in C)."""
    return f"{get_column_letter(DESCRIPTION_COL)}{header_row(key)}"


def score_address(block_row: int) -> str:
    return f"{get_column_letter(SCORE_COL)}{block_row + 1}"
