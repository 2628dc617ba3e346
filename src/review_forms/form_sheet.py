from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from openpyxl.worksheet.datavalidation import DataValidation
from openpyxl.worksheet.worksheet import Worksheet

from .blocks import append_kpi_blocks, read_template_rows, score_validation
from .config import LayoutConfig
from .layout import (
    BLOCK_STRIDE,
    DESCRIPTION_COL,
    HEADER_FIELDS,
    HEADER_FIRST_ROW,
    HEADER_LAST_ROW,
    INSTRUCTIONS_ROW,
    LABEL_COL,
    PERIOD_LABELS,
    SCORE_COL,
    SECTION_A_FIRST_BLOCK_ROW,
    SECTION_A_ROW,
    TITLE_ROW,
    ReviewType,
    score_address,
)
from .styles import (
    BOLD_FONT,
    CENTER_ALIGN,
    CENTER_BOTTOM_ALIGN,
    INPUT_FONT,
    LEFT_CENTER_ALIGN,
    MARKER_FILL,
    NO_SIDE,
    RIGHT_CENTER_ALIGN,
    SECTION_FONT,
    TITLE_FONT,
    WHITE_BORDER,
    outline_range,
    paint_grid,
)


@dataclass
class FormSheetResult:
    kpi_blocks: int = 0
    soft_skill_blocks: int = 0
    score_cells: List[str] = field(default_factory=list)


def job_title_for(sheet_name: str) -> str:
    if sheet_name.endswith(" KPI"):
        return sheet_name[: -len(" KPI")].strip()
    return sheet_name


def build_form_sheet(
    src_ws: Worksheet,
    out_ws: Worksheet,
    soft_ws: Worksheet | None,
    review_type: ReviewType,
    fiscal_year: str | None,
    layout: LayoutConfig | None = None,
) -> FormSheetResult:
    layout = layout or LayoutConfig()
    result = FormSheetResult()

    for letter, width in layout.column_widths.items():
        out_ws.column_dimensions[letter].width = width
    paint_grid(out_ws, layout.grid_rows, layout.grid_cols)

    _write_title(out_ws, src_ws.title, layout.title_row_height)
    _write_header_block(
        out_ws,
        {
            "job_title": job_title_for(src_ws.title),
            "fiscal_year": fiscal_year or "",
            "period": PERIOD_LABELS[review_type],
        },
    )

    validation = score_validation()

    _write_section_title(out_ws, SECTION_A_ROW, "Section A: Key Performance Indicators (KPIs)")
    kpi_rows = list(read_template_rows(src_ws))
    row = append_kpi_blocks(out_ws, kpi_rows, SECTION_A_FIRST_BLOCK_ROW, validation)
    result.kpi_blocks = len(kpi_rows)
    result.score_cells += _score_cells(SECTION_A_FIRST_BLOCK_ROW, len(kpi_rows))

    row += 1
    _write_section_title(out_ws, row, "Section B: Soft Skills")
    row += 2
    if soft_ws is not None:
        soft_rows = list(read_template_rows(soft_ws))
        append_kpi_blocks(out_ws, soft_rows, row, validation)
        result.soft_skill_blocks = len(soft_rows)
        result.score_cells += _score_cells(row, len(soft_rows))

    if result.score_cells:
        out_ws.add_data_validation(validation)
    return result


def _score_cells(first_block_row: int, count: int) -> List[str]:
    return [score_address(first_block_row + i * BLOCK_STRIDE) for i in range(count)]


def _write_title(ws: Worksheet, sheet_name: str, title_height: float) -> None:
    ws.merge_cells(start_row=TITLE_ROW, start_column=LABEL_COL, end_row=TITLE_ROW, end_column=SCORE_COL)
    title = ws.cell(row=TITLE_ROW, column=LABEL_COL, value=f"Performance Review Form for {sheet_name}")
    title.font = TITLE_FONT
    title.alignment = CENTER_BOTTOM_ALIGN
    ws.row_dimensions[TITLE_ROW].height = title_height

    ws.merge_cells(start_row=INSTRUCTIONS_ROW, start_column=LABEL_COL, end_row=INSTRUCTIONS_ROW, end_column=SCORE_COL)
    instructions = ws.cell(
        row=INSTRUCTIONS_ROW,
        column=LABEL_COL,
        value="Please rate each question on a scale of 1–5 using the yellow cell.",
    )
    instructions.alignment = CENTER_ALIGN


def _write_header_block(ws: Worksheet, values: dict) -> None:
    for offset, header in enumerate(HEADER_FIELDS):
        r = HEADER_FIRST_ROW + offset

        label = ws.cell(row=r, column=LABEL_COL, value=header.label)
        label.font = BOLD_FONT
        label.alignment = RIGHT_CENTER_ALIGN

        ws.merge_cells(start_row=r, start_column=DESCRIPTION_COL, end_row=r, end_column=SCORE_COL)
        value = ws.cell(row=r, column=DESCRIPTION_COL, value=values.get(header.key) or None)
        value.alignment = LEFT_CENTER_ALIGN

        if header.editable:
            value.fill = MARKER_FILL
            value.font = INPUT_FONT
        if header.choices:
            _choice_validation(ws, header.choices).add(value)

        for col in range(LABEL_COL, SCORE_COL + 1):
            ws.cell(row=r, column=col).border = WHITE_BORDER

    outline_range(ws, HEADER_FIRST_ROW, HEADER_LAST_ROW, LABEL_COL, SCORE_COL, inner=NO_SIDE)


def _choice_validation(ws: Worksheet, choices) -> DataValidation:
    options = ",".join(choices)
    validation = DataValidation(
        type="list",
        formula1=f'"{options}"',
        allow_blank=False,
        showInputMessage=True,
        promptTitle="Select Role",
        prompt=f"Choose {' or '.join(choices)}.",
        showErrorMessage=True,
        errorTitle="Invalid Selection",
        error=f"Please select either {' or '.join(choices)}.",
    )
    ws.add_data_validation(validation)
    return validation


def _write_section_title(ws: Worksheet, row: int, text: str) -> None:
    ws.merge_cells(start_row=row, start_column=LABEL_COL, end_row=row, end_column=SCORE_COL)
    cell = ws.cell(row=row, column=LABEL_COL, value=text)
    cell.font = SECTION_FONT
    cell.alignment = LEFT_CENTER_ALIGN
