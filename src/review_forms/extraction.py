from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Literal

from openpyxl.worksheet.worksheet import Worksheet

from .config import ImportConfig
from .layout import METADATA_SHEET, header_address
from .text import cell_text, parse_score


CompletedBy = Literal["Employee", "Coordinator", "Unknown"]


@dataclass
class ImportedRow:
    file_name: str
    job_title: str
    fiscal_year: str
    period: str
    first_name: str
    last_name: str
    completed_by: CompletedBy
    avg_score: float | None
    percent: float | None
    employee_score_percent: float | None
    coordinator_score_percent: float | None
    score_count: int = 0


def normalize_completed_by(raw) -> CompletedBy:
    value = cell_text(raw).strip().lower()
    if value == "employee":
        return "Employee"
    if value == "coordinator":
        return "Coordinator"
    return "Unknown"


def is_marker_fill(cell, color_suffix: str = "FFFF00") -> bool:
    fill = cell.fill
    if fill is None or fill.fill_type != "solid":
        return False
    rgb = getattr(fill.fgColor, "rgb", None)
    if not isinstance(rgb, str):
        return False
    return rgb.upper().endswith(color_suffix.upper())


def marker_cells(ws: Worksheet, color_suffix: str = "FFFF00") -> Iterator:
    for row in ws.iter_rows():
        for cell in row:
            if is_marker_fill(cell, color_suffix):
                yield cell


def metadata_score_cells(workbook) -> List[str] | None:
    """Score cell addresses recorded by the generator, or None for older forms."""
    if METADATA_SHEET not in workbook.sheetnames:
        return None
    meta = workbook[METADATA_SHEET]
    for key, value in meta.iter_rows(min_col=1, max_col=2, values_only=True):
        if cell_text(key).strip() == "score_cells":
            return [addr.strip() for addr in cell_text(value).split(",") if addr.strip()]
    return None


def collect_scores(workbook, ws: Worksheet, cfg: ImportConfig | None = None) -> List[float]:
    cfg = cfg or ImportConfig()

    addresses = metadata_score_cells(workbook) if cfg.use_metadata_sheet else None
    if addresses is not None:
        values = [ws[address].value for address in addresses]
    else:
        values = [cell.value for cell in marker_cells(ws, cfg.marker_color_suffix)]

    scores = []
    for value in values:
        number = parse_score(value)
        if number is not None and cfg.min_score <= number <= cfg.max_score:
            scores.append(number)
    return scores


def extract_scores(workbook, file_name: str = "", cfg: ImportConfig | None = None) -> ImportedRow:
    cfg = cfg or ImportConfig()
    ws = workbook.worksheets[0]

    def read(key: str) -> str:
        return cell_text(ws[header_address(key)].value).strip()

    completed_by = normalize_completed_by(read("completed_by"))
    scores = collect_scores(workbook, ws, cfg)

    avg_score = None
    percent = None
    if scores:
        avg_score = sum(scores) / len(scores)
        percent = max(0.0, min(100.0, avg_score / cfg.max_score * 100))

    return ImportedRow(
        file_name=file_name,
        job_title=read("job_title"),
        fiscal_year=read("fiscal_year"),
        period=read("period"),
        first_name=read("first_name"),
        last_name=read("last_name"),
        completed_by=completed_by,
        avg_score=avg_score,
        percent=percent,
        employee_score_percent=percent if completed_by == "Employee" else None,
        coordinator_score_percent=percent if completed_by == "Coordinator" else None,
        score_count=len(scores),
    )
