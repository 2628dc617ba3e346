from __future__ import annotations

from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.worksheet.worksheet import Worksheet


MARKER_COLOR = "FFFF00"
LIGHT_GRAY = "F5F5F5"
DARK_GRAY = "EAEAEA"

BOLD_FONT = Font(bold=True)
TITLE_FONT = Font(bold=True, size=20)
SECTION_FONT = Font(bold=True, size=14)
INPUT_FONT = Font(color="FF0000")
SCORE_FONT = Font(size=20, color="FF0000")

MARKER_FILL = PatternFill(fill_type="solid", start_color=MARKER_COLOR, end_color=MARKER_COLOR)
LIGHT_FILL = PatternFill(fill_type="solid", start_color=LIGHT_GRAY, end_color=LIGHT_GRAY)
DARK_FILL = PatternFill(fill_type="solid", start_color=DARK_GRAY, end_color=DARK_GRAY)

DEFAULT_ALIGN = Alignment(wrap_text=True, horizontal="left", vertical="top")
CENTER_ALIGN = Alignment(wrap_text=True, horizontal="center", vertical="center")
CENTER_TOP_ALIGN = Alignment(wrap_text=True, horizontal="center", vertical="top")
CENTER_BOTTOM_ALIGN = Alignment(wrap_text=True, horizontal="center", vertical="bottom")
LEFT_CENTER_ALIGN = Alignment(wrap_text=True, horizontal="left", vertical="center")
RIGHT_CENTER_ALIGN = Alignment(horizontal="right", vertical="center")

MEDIUM_BLACK = Side(style="medium", color="000000")
THIN_WHITE = Side(style="thin", color="FFFFFF")
NO_SIDE = Side()
WHITE_BORDER = Border(left=THIN_WHITE, right=THIN_WHITE, top=THIN_WHITE, bottom=THIN_WHITE)


def paint_grid(ws: Worksheet, max_row: int, max_col: int) -> None:
    for row in ws.iter_rows(min_row=1, max_row=max_row, min_col=1, max_col=max_col):
        for cell in row:
            cell.border = WHITE_BORDER
            cell.alignment = DEFAULT_ALIGN


def outline_range(
    ws: Worksheet,
    min_row: int,
    max_row: int,
    min_col: int,
    max_col: int,
    edge: Side = MEDIUM_BLACK,
    inner: Side = THIN_WHITE,
) -> None:
    """Draw ``edge`` around the rectangle and ``inner`` on every internal edge."""
    for r in range(min_row, max_row + 1):
        for c in range(min_col, max_col + 1):
            ws.cell(row=r, column=c).border = Border(
                left=edge if c == min_col else inner,
                right=edge if c == max_col else inner,
                top=edge if r == min_row else inner,
                bottom=edge if r == max_row else inner,
            )


def patch_border(cell, **sides: Side) -> None:
    current = cell.border
    cell.border = Border(
        left=sides.get("left", current.left),
        right=sides.get("right", current.right),
        top=sides.get("top", current.top),
        bottom=sides.get("bottom", current.bottom),
    )
