from __future__ import annotations

import io
import zipfile

import pytest
from openpyxl import Workbook, load_workbook

from review_forms.generator import generate_forms


TEMPLATE_HEADER = ["KPI", "Competency", "Description", "1", "2", "3", "4", "5"]

ENGINEER_ROWS = [
    ("Communication", "Teamwork", "Responds promptly", "rarely", "sometimes", "usually", "often", "always"),
    (None, "  ", None, None, None, None, None, None),
    ("Delivery", "Ownership", "Ships on time", "late", "often late", "on time", "early", "always early"),
]

SOFT_ROWS = [
    ("Attitude", "Culture", "Positive outlook", "poor", "fair", "good", "great", "outstanding"),
]


def workbook_bytes(wb: Workbook) -> bytes:
    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()


def add_sheet(wb: Workbook, title: str, rows, state: str = "visible"):
    ws = wb.create_sheet(title)
    ws.append(TEMPLATE_HEADER)
    for row in rows:
        ws.append(list(row))
    ws.sheet_state = state
    return ws


@pytest.fixture
def template_workbook() -> Workbook:
    wb = Workbook()
    wb.remove(wb.active)
    add_sheet(wb, "Dashboard", [])
    add_sheet(wb, "Engineer KPI", ENGINEER_ROWS)
    add_sheet(wb, "Analyst", ENGINEER_ROWS[:1])
    add_sheet(wb, "Archived KPI", ENGINEER_ROWS, state="hidden")
    add_sheet(wb, "Soft Skills KPI", SOFT_ROWS)
    return wb


@pytest.fixture
def template_bytes(template_workbook) -> bytes:
    return workbook_bytes(template_workbook)


@pytest.fixture
def generated_forms(template_bytes):
    """Map of file name -> loaded workbook for a mid-year FY25 run."""
    result = generate_forms(template_bytes, review_type="mid", fiscal_year="FY25")
    with zipfile.ZipFile(io.BytesIO(result.archive)) as zf:
        return {name: load_workbook(io.BytesIO(zf.read(name))) for name in zf.namelist()}


def fill_form(wb: Workbook, completed_by: str, first: str, last: str, scores: dict) -> bytes:
    ws = wb.worksheets[0]
    ws["C9"] = completed_by
    ws["C10"] = first
    ws["C11"] = last
    for address, value in scores.items():
        ws[address] = value
    return workbook_bytes(wb)
