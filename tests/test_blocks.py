from openpyxl import Workbook

from review_forms.blocks import TemplateRow, append_kpi_blocks, read_template_rows, score_validation

from .conftest import ENGINEER_ROWS, add_sheet


def _source(rows):
    wb = Workbook()
    return add_sheet(wb, "Engineer KPI", rows)


def _layout(rows, start_row=2):
    out = Workbook().active
    validation = score_validation()
    next_row = append_kpi_blocks(out, list(read_template_rows(_source(rows))), start_row, validation)
    return out, validation, next_row


def test_template_row_pads_short_rows():
    row = TemplateRow.from_values(("Title", "Comp"))
    assert row.description == ""
    assert row.ratings == ("", "", "", "", "")


def test_blank_rows_are_skipped():
    rows = list(read_template_rows(_source(ENGINEER_ROWS)))
    assert [r.title for r in rows] == ["Communication", "Delivery"]


def test_sample_block_content():
    out, _, _ = _layout(ENGINEER_ROWS[:1])

    assert out["B2"].value == "KPI - Communication"
    assert out["C2"].value == "Description of Work"
    assert out["D2"].value == "Score (1–5)"
    assert out["F2"].value == "Notes"
    assert out["G2"].value == "Goals"
    assert out["B2"].font.bold

    assert out["B3"].value == "Teamwork"
    assert out["C3"].value == "Responds promptly"
    assert out["D3"].value is None

    assert out["B4"].value == "Rating Scale (1–5)"
    assert "B4:D4" in [str(r) for r in out.merged_cells.ranges]

    labels = [out[f"B{r}"].value for r in range(5, 10)]
    ratings = [out[f"C{r}"].value for r in range(5, 10)]
    assert labels == [
        "1 – Unsatisfactory",
        "2 – Needs Improvement",
        "3 – Proficient",
        "4 – Strong",
        "5 – Exemplary",
    ]
    assert ratings == ["rarely", "sometimes", "usually", "often", "always"]
    assert all(out[f"D{r}"].value is None for r in range(5, 10))


def test_input_cells_are_marked():
    out, validation, _ = _layout(ENGINEER_ROWS[:1])

    for address in ("D3", "F3", "G3"):
        fill = out[address].fill
        assert fill.fill_type == "solid"
        assert fill.fgColor.rgb.endswith("FFFF00")
    assert out["D3"].font.sz == 20
    assert out["F3"].alignment.wrap_text

    assert validation.type == "whole"
    assert validation.formula1 == "1" and validation.formula2 == "5"
    assert "D3" in str(validation.sqref).split()


def test_legend_rows_alternate_shades():
    out, _, _ = _layout(ENGINEER_ROWS[:1])
    colors = [out[f"B{r}"].fill.fgColor.rgb[-6:] for r in range(5, 10)]
    assert colors == ["F5F5F5", "EAEAEA", "F5F5F5", "EAEAEA", "F5F5F5"]


def test_cursor_advances_nine_rows_per_block():
    _, _, next_row = _layout(ENGINEER_ROWS)
    assert next_row == 2 + 2 * 9


def test_blank_rows_do_not_advance_cursor():
    _, _, next_row = _layout([ENGINEER_ROWS[1], ENGINEER_ROWS[1]])
    assert next_row == 2


def test_blocks_are_contiguous_with_spacer():
    out, _, _ = _layout(ENGINEER_ROWS)
    assert out["B2"].value == "KPI - Communication"
    assert out["B11"].value == "KPI - Delivery"
    assert out["B10"].value is None
    long_text = "x" * 500
    out2, _, next_row = _layout([("Long", "c", long_text, "a", "b", "c", "d", "e")])
    assert out2["C3"].value == long_text
    assert next_row == 11


def test_main_block_border_outline():
    out, _, _ = _layout(ENGINEER_ROWS[:1])

    assert out["B2"].border.left.style == "medium"
    assert out["B2"].border.top.style == "medium"
    assert out["D9"].border.right.style == "medium"
    assert out["D9"].border.bottom.style == "medium"
    assert out["C3"].border.left.style == "thin"
    assert out["C3"].border.left.color.rgb.endswith("FFFFFF")
    assert out["C6"].border.bottom.style == "thin"


def test_separator_and_merged_row_edges():
    out, _, _ = _layout(ENGINEER_ROWS[:1])

    for address in ("B4", "C4", "D4"):
        border = out[address].border
        assert border.top.style == "medium"
        assert border.left.style == "medium"
    assert out["D4"].border.right.style == "medium"


def test_notes_region_outline_only_spans_inputs():
    out, _, _ = _layout(ENGINEER_ROWS[:1])

    assert out["F2"].border.top.style == "medium"
    assert out["F2"].border.left.style == "medium"
    assert out["G3"].border.right.style == "medium"
    assert out["G3"].border.bottom.style == "medium"
    assert out["F2"].border.right.style == "thin"

    for r in range(4, 10):
        for col in "FG":
            border = out[f"{col}{r}"].border
            assert {border.left.style, border.right.style, border.top.style, border.bottom.style} == {"thin"}
