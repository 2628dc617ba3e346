from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from openpyxl.worksheet.datavalidation import DataValidation
from openpyxl.worksheet.worksheet import Worksheet

from .layout import (
    BLOCK_HEIGHT,
    BLOCK_STRIDE,
    DESCRIPTION_COL,
    GOALS_COL,
    LABEL_COL,
    LEGEND_FIRST_OFFSET,
    LEGEND_TITLE_OFFSET,
    NOTES_COL,
    RATING_LABELS,
    SCORE_COL,
    TEMPLATE_COLUMNS,
    TEMPLATE_FIRST_ROW,
)
from .styles import (
    BOLD_FONT,
    CENTER_ALIGN,
    CENTER_TOP_ALIGN,
    DARK_FILL,
    DEFAULT_ALIGN,
    LEFT_CENTER_ALIGN,
    LIGHT_FILL,
    MARKER_FILL,
    MEDIUM_BLACK,
    SCORE_FONT,
    THIN_WHITE,
    outline_range,
    patch_border,
)
from .text import cell_text, is_blank_row


@dataclass(frozen=True)
class TemplateRow:
    title: str
    competency: str
    description: str
    ratings: Tuple[str, str, str, str, str]

    @classmethod
    def from_values(cls, values) -> "TemplateRow":
        texts = [cell_text(v) for v in values]
        texts += [""] * (TEMPLATE_COLUMNS - len(texts))
        return cls(
            title=texts[0],
            competency=texts[1],
            description=texts[2],
            ratings=tuple(texts[3:TEMPLATE_COLUMNS]),
        )


def read_template_rows(ws: Worksheet) -> Iterator[TemplateRow]:
    """Yield the KPI definitions of a template sheet, skipping blank rows."""
    for values in ws.iter_rows(min_row=TEMPLATE_FIRST_ROW, max_col=TEMPLATE_COLUMNS, values_only=True):
        if is_blank_row(values):
            continue
        yield TemplateRow.from_values(values)


def score_validation() -> DataValidation:
    return DataValidation(
        type="whole",
        operator="between",
        formula1="1",
        formula2="5",
        allow_blank=True,
        showInputMessage=True,
        promptTitle="Score Required",
        prompt="Enter a whole number from 1 to 5.",
        showErrorMessage=True,
        errorTitle="Invalid Entry",
        error="Only whole numbers from 1 to 5 are allowed.",
    )


def append_kpi_blocks(
    ws: Worksheet,
    rows,
    start_row: int,
    validation: DataValidation | None = None,
) -> int:
    """Lay out one block per template row and return the next free row."""
    row = start_row
    for template_row in rows:
        write_kpi_block(ws, row, template_row, validation)
        row += BLOCK_STRIDE
    return row


def write_kpi_block(
    ws: Worksheet,
    top: int,
    template_row: TemplateRow,
    validation: DataValidation | None = None,
) -> None:
    _write_block_header(ws, top, template_row.title)
    _write_block_inputs(ws, top + 1, template_row, validation)
    _write_legend(ws, top, template_row.ratings)
    _draw_block_borders(ws, top)


def _write_block_header(ws: Worksheet, row: int, title: str) -> None:
    headers = [
        (LABEL_COL, f"KPI - {title}".strip(), None),
        (DESCRIPTION_COL, "Description of Work", None),
        (SCORE_COL, "Score (1–5)", CENTER_TOP_ALIGN),
        (NOTES_COL, "Notes", CENTER_TOP_ALIGN),
        (GOALS_COL, "Goals", CENTER_TOP_ALIGN),
    ]
    for col, text, alignment in headers:
        cell = ws.cell(row=row, column=col, value=text)
        cell.font = BOLD_FONT
        if alignment is not None:
            cell.alignment = alignment


def _write_block_inputs(
    ws: Worksheet,
    row: int,
    template_row: TemplateRow,
    validation: DataValidation | None,
) -> None:
    ws.cell(row=row, column=LABEL_COL, value=template_row.competency or None)
    ws.cell(row=row, column=DESCRIPTION_COL, value=template_row.description or None)

    score = ws.cell(row=row, column=SCORE_COL)
    score.fill = MARKER_FILL
    score.font = SCORE_FONT
    score.alignment = CENTER_ALIGN
    if validation is not None:
        validation.add(score)

    for col in (NOTES_COL, GOALS_COL):
        cell = ws.cell(row=row, column=col)
        cell.fill = MARKER_FILL
        cell.alignment = DEFAULT_ALIGN


def _write_legend(ws: Worksheet, top: int, ratings) -> None:
    row = top + LEGEND_TITLE_OFFSET
    ws.merge_cells(start_row=row, start_column=LABEL_COL, end_row=row, end_column=SCORE_COL)
    title = ws.cell(row=row, column=LABEL_COL, value="Rating Scale (1–5)")
    title.font = BOLD_FONT
    title.alignment = CENTER_ALIGN

    for i, (label, rating) in enumerate(zip(RATING_LABELS, ratings)):
        r = top + LEGEND_FIRST_OFFSET + i
        fill = LIGHT_FILL if i % 2 == 0 else DARK_FILL
        for col, value in ((LABEL_COL, label), (DESCRIPTION_COL, rating or None), (SCORE_COL, None)):
            cell = ws.cell(row=r, column=col, value=value)
            cell.fill = fill
            cell.alignment = LEFT_CENTER_ALIGN


def _draw_block_borders(ws: Worksheet, top: int) -> None:
    bottom = top + BLOCK_HEIGHT - 1
    inputs_bottom = top + 1
    separator = top + LEGEND_TITLE_OFFSET

    outline_range(ws, top, bottom, LABEL_COL, SCORE_COL)
    outline_range(ws, top, inputs_bottom, NOTES_COL, GOALS_COL)
    outline_range(ws, separator, bottom, NOTES_COL, GOALS_COL, edge=THIN_WHITE)

    for col in range(LABEL_COL, SCORE_COL + 1):
        patch_border(ws.cell(row=separator, column=col), top=MEDIUM_BLACK)

    # merged ranges only render an edge reliably when every underlying cell carries it
    for col in range(LABEL_COL, SCORE_COL + 1):
        cell = ws.cell(row=separator, column=col)
        if col == SCORE_COL:
            patch_border(cell, left=MEDIUM_BLACK, right=MEDIUM_BLACK)
        else:
            patch_border(cell, left=MEDIUM_BLACK)
