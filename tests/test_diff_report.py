from schedule_checker.domain.keys import make_identity_key
from schedule_checker.domain.models import CanonicalClassRecord, ComparisonOutcome, ExtractedClassRecord
from schedule_checker.domain.ordering import parse_time_of_day
from schedule_checker.domain.results import DUPLICATE_IN_CANONICAL, MISSING_IN_EXTRACTED, NOT_IN_CANONICAL
from schedule_checker.presentation.diff_report import (
    REPORT_COLUMNS,
    outcome_status,
    records_to_dataframe,
    render_csv,
    render_html,
)

LOCATION = "Kenkere House"


def make_canonical(time_value="7:00 AM", trainer="Raunak Khemuka"):
    return CanonicalClassRecord(
        day="Friday",
        time_raw=time_value,
        time_of_day=parse_time_of_day(time_value),
        time=time_value,
        location=LOCATION,
        class_name="Studio PowerCycle",
        trainer=trainer,
        cover="",
        notes="",
        identity_key=make_identity_key("Friday", time_value, "Studio PowerCycle", trainer, LOCATION),
    )


def make_extracted(time_value="7:00 AM", trainer="Raunak Khemuka", theme=None):
    return ExtractedClassRecord(
        day="Friday",
        time=time_value,
        class_name="Studio PowerCycle",
        trainer=trainer,
        location=LOCATION,
        identity_key=make_identity_key("Friday", time_value, "Studio PowerCycle", trainer, LOCATION),
        theme=theme,
    )


def make_outcomes():
    return [
        ComparisonOutcome(canonical=make_canonical(), extracted=make_extracted(), is_match=True, reason=""),
        ComparisonOutcome(
            canonical=make_canonical("8:00 AM"),
            extracted=make_extracted("8:00 AM", trainer="<Guest>", theme="Disco & Drums"),
            is_match=False,
            reason="trainer mismatch (canonical: Raunak Khemuka, extracted: <Guest>)",
            discrepancy_fields=("trainer",),
        ),
        ComparisonOutcome(
            canonical=make_canonical("9:00 AM"), extracted=None, is_match=False, reason=MISSING_IN_EXTRACTED
        ),
        ComparisonOutcome(
            canonical=None, extracted=make_extracted("6:00 PM"), is_match=False, reason=NOT_IN_CANONICAL
        ),
    ]


def test_outcome_status_labels():
    assert [outcome_status(o) for o in make_outcomes()] == [
        "match",
        "mismatch",
        "missing_in_extracted",
        "not_in_canonical",
    ]


def test_render_csv_writes_every_outcome():
    lines = render_csv(make_outcomes()).decode("utf-8").splitlines()

    assert lines[0] == ",".join(REPORT_COLUMNS)
    assert len(lines) == 5
    assert "Disco & Drums" in lines[2]


def test_render_csv_keeps_header_when_empty():
    assert render_csv([]).decode("utf-8").splitlines() == [",".join(REPORT_COLUMNS)]


def test_render_html_lists_only_discrepancies_escaped():
    html = render_html(make_outcomes())

    assert html.count("<tr>") == 4
    assert "&lt;Guest&gt;" in html
    assert "Disco &amp; Drums" in html
    assert "7:00 AM" not in html


def test_render_html_without_discrepancies():
    assert render_html(make_outcomes()[:1]) == "<p>No discrepancies detected.</p>"


def test_records_to_dataframe_columns():
    frame = records_to_dataframe([make_extracted(theme="Throwback")])

    assert list(frame.columns) == ["day", "time", "class_name", "trainer", "location", "theme", "identity_key"]
    assert frame.iloc[0]["theme"] == "Throwback"
    assert records_to_dataframe([]).empty


def test_duplicate_canonical_entries_have_their_own_status():
    outcome = ComparisonOutcome(
        canonical=make_canonical(),
        extracted=None,
        is_match=False,
        reason=f"{DUPLICATE_IN_CANONICAL} (2 records share the same identity)",
    )

    assert outcome_status(outcome) == "duplicate_in_canonical"
