from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import dataclass, field
from typing import List

from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from .config import ReviewFormsConfig
from .exceptions import NoEligibleSheetsError
from .form_sheet import FormSheetResult, build_form_sheet
from .layout import LAYOUT_VERSION, METADATA_SHEET, PERIOD_CODES, ReviewType
from .text import cell_text, fit_sheet_title, safe_filename


logger = logging.getLogger(__name__)

XLSX_SUFFIX = ".xlsx"


@dataclass
class GeneratedForm:
    file_name: str
    sheet_title: str
    source_sheet: str
    kpi_blocks: int
    soft_skill_blocks: int


@dataclass
class GenerationResult:
    archive: bytes
    archive_name: str
    forms: List[GeneratedForm] = field(default_factory=list)
    skipped_sheets: List[str] = field(default_factory=list)


def parse_review_type(raw) -> ReviewType:
    return "end" if cell_text(raw).strip().lower() == "end" else "mid"


def build_prefix(review_type: ReviewType, fiscal_year: str | None = None) -> str:
    code = PERIOD_CODES[review_type]
    fy = (fiscal_year or "").strip()
    return f"{fy}_{code} " if fy else f"_{code} "


def is_eligible_sheet(ws: Worksheet, cfg: ReviewFormsConfig) -> bool:
    if ws.sheet_state != "visible":
        return False
    return ws.title not in cfg.generator.excluded_sheets


def build_form_workbook(
    src_ws: Worksheet,
    soft_ws: Worksheet | None,
    review_type: ReviewType,
    fiscal_year: str | None,
    cfg: ReviewFormsConfig | None = None,
) -> tuple[Workbook, FormSheetResult]:
    cfg = cfg or ReviewFormsConfig()
    prefix = build_prefix(review_type, fiscal_year)

    wb = Workbook()
    out_ws = wb.active
    out_ws.title = fit_sheet_title(f"{prefix}{src_ws.title}", cfg.generator.max_title_length)

    result = build_form_sheet(src_ws, out_ws, soft_ws, review_type, fiscal_year, cfg.layout)

    if cfg.generator.write_metadata_sheet:
        _write_metadata_sheet(wb, src_ws.title, review_type, fiscal_year, result)
    return wb, result


def generate_forms(
    data: bytes,
    review_type: ReviewType = "mid",
    fiscal_year: str | None = None,
    cfg: ReviewFormsConfig | None = None,
) -> GenerationResult:
    cfg = cfg or ReviewFormsConfig()
    fiscal_year = (fiscal_year or "").strip() or None

    source = load_workbook(io.BytesIO(data))
    soft_name = cfg.generator.soft_skills_sheet
    soft_ws = source[soft_name] if soft_name in source.sheetnames else None

    prefix = build_prefix(review_type, fiscal_year)
    result = GenerationResult(archive=b"", archive_name=cfg.generator.archive_name)

    zip_buffer = io.BytesIO()
    with zipfile.ZipFile(zip_buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
        for src_ws in source.worksheets:
            if not is_eligible_sheet(src_ws, cfg):
                logger.debug("Skipping sheet %r", src_ws.title)
                result.skipped_sheets.append(src_ws.title)
                continue

            wb, form = build_form_workbook(src_ws, soft_ws, review_type, fiscal_year, cfg)
            file_name = f"{safe_filename(prefix + src_ws.title)}{XLSX_SUFFIX}"

            out = io.BytesIO()
            wb.save(out)
            zf.writestr(file_name, out.getvalue())

            result.forms.append(
                GeneratedForm(
                    file_name=file_name,
                    sheet_title=wb.worksheets[0].title,
                    source_sheet=src_ws.title,
                    kpi_blocks=form.kpi_blocks,
                    soft_skill_blocks=form.soft_skill_blocks,
                )
            )
            logger.info("Generated %s (%d KPI blocks, %d soft-skill blocks)", file_name, form.kpi_blocks, form.soft_skill_blocks)

    if not result.forms:
        raise NoEligibleSheetsError("No visible KPI sheets found to generate forms from.")

    result.archive = zip_buffer.getvalue()
    return result


def _write_metadata_sheet(
    wb: Workbook,
    source_sheet: str,
    review_type: ReviewType,
    fiscal_year: str | None,
    form: FormSheetResult,
) -> None:
    ws = wb.create_sheet(METADATA_SHEET)
    ws.sheet_state = "hidden"
    rows = [
        ("layout_version", LAYOUT_VERSION),
        ("review_type", review_type),
        ("fiscal_year", fiscal_year or ""),
        ("source_sheet", source_sheet),
        ("score_cells", ",".join(form.score_cells)),
    ]
    for i, (key, value) in enumerate(rows, start=1):
        ws.cell(row=i, column=1, value=key)
        ws.cell(row=i, column=2, value=value or None)
