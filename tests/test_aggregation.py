import pytest

from review_forms.aggregation import identity_key, merge_rows, summary_frame, to_tsv
from review_forms.extraction import ImportedRow


def _row(first, last, role, percent, file_name="f.xlsx", **identity):
    return ImportedRow(
        file_name=file_name,
        job_title=identity.get("job_title", "Engineer"),
        fiscal_year=identity.get("fiscal_year", "FY25"),
        period=identity.get("period", "Middle of Year"),
        first_name=first,
        last_name=last,
        completed_by=role,
        avg_score=None if percent is None else percent / 20,
        percent=percent,
        employee_score_percent=percent if role == "Employee" else None,
        coordinator_score_percent=percent if role == "Coordinator" else None,
    )


def test_identity_key_normalizes_names():
    assert identity_key("John", "Doe") == identity_key("JOHN", " doe ")
    assert identity_key("Mary  Ann", "Lee") == identity_key("mary ann", "LEE")


def test_employee_and_coordinator_merge_into_one_row():
    rows = merge_rows([
        _row("John", "Doe", "Employee", 80.0, "a.xlsx"),
        _row("JOHN", " doe ", "Coordinator", 60.0, "b.xlsx"),
    ])

    assert len(rows) == 1
    combined = rows[0]
    assert combined.first_name == "John"
    assert combined.last_name == "Doe"
    assert combined.employee_score_percent == pytest.approx(80.0)
    assert combined.coordinator_score_percent == pytest.approx(60.0)
    assert combined.source_files == ["a.xlsx", "b.xlsx"]


def test_same_role_last_write_wins():
    rows = merge_rows([
        _row("John", "Doe", "Employee", 40.0),
        _row("John", "Doe", "Employee", 90.0),
    ])
    assert rows[0].employee_score_percent == pytest.approx(90.0)
    assert rows[0].coordinator_score_percent is None


def test_unknown_role_leaves_slots_untouched():
    rows = merge_rows([
        _row("John", "Doe", "Coordinator", 70.0),
        _row("John", "Doe", "Unknown", 20.0),
    ])
    assert rows[0].coordinator_score_percent == pytest.approx(70.0)
    assert rows[0].employee_score_percent is None


def test_identity_fields_first_non_empty_wins():
    rows = merge_rows([
        _row("John", "Doe", "Employee", 80.0, job_title="", fiscal_year="FY25"),
        _row("John", "Doe", "Coordinator", 60.0, job_title="Engineer", fiscal_year="FY26"),
    ])
    assert rows[0].job_title == "Engineer"
    assert rows[0].fiscal_year == "FY25"


def test_output_follows_first_appearance():
    rows = merge_rows([
        _row("Zed", "Last", "Employee", 50.0),
        _row("Amy", "First", "Employee", 60.0),
        _row("zed", "last", "Coordinator", 70.0),
    ])
    assert [r.first_name for r in rows] == ["Zed", "Amy"]


def test_summary_frame_columns():
    df = summary_frame(merge_rows([_row("John", "Doe", "Employee", 80.0)]))
    assert list(df.columns) == [
        "Job Title",
        "Fiscal Year",
        "Period",
        "First Name",
        "Last Name",
        "Employee Score",
        "Coordinator Score",
    ]
    assert df.loc[0, "Employee Score"] == pytest.approx(80.0)


def test_to_tsv_formats_percentages_without_header():
    rows = merge_rows([
        _row("John", "Doe", "Employee", 80.0),
        _row("Amy", "Lee", "Coordinator", 66.666, job_title="Data\nAnalyst"),
    ])
    lines = to_tsv(rows).split("\n")

    assert lines == [
        "Engineer\tFY25\tMiddle of Year\tJohn\tDoe\t80.0%\t",
        "Data Analyst\tFY25\tMiddle of Year\tAmy\tLee\t\t66.7%",
    ]


def test_to_tsv_empty():
    assert to_tsv([]) == ""
