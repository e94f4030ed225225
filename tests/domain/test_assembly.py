from schedule_checker.domain.assembly import assemble_records, build_record
from schedule_checker.domain.keys import make_identity_key

LOCATION = "Kwality House, Kemps Corner"


def make_entry(**overrides):
    entry = {
        "day": "Monday",
        "time": "7:30 AM",
        "className": "Barre 57",
        "trainer": "Anisha",
        "theme": None,
    }
    entry.update(overrides)
    return entry


def test_build_record_normalizes_every_field():
    record = build_record(
        make_entry(day="monday", time="730AM", className="BARRES7", trainer="anisha", theme=" GLUTES GALORE "),
        LOCATION,
    )

    assert record is not None
    assert record.day == "Monday"
    assert record.time == "7:30 AM"
    assert record.class_name == "Studio Barre 57"
    assert record.trainer == "Anisha Shah"
    assert record.location == LOCATION
    assert record.theme == "GLUTES GALORE"
    assert record.identity_key == make_identity_key(
        "Monday", "7:30 AM", "Studio Barre 57", "Anisha Shah", LOCATION
    )


def test_incomplete_entries_are_skipped():
    entries = [
        make_entry(trainer=""),
        make_entry(day=None),
        {"day": "Tuesday", "time": "6:00 PM", "className": "FIT"},
        make_entry(time="   "),
        "MONDAY 7:30 AM BARRE 57",
        make_entry(),
    ]

    records = assemble_records(entries, LOCATION)

    assert len(records) == 1
    assert records[0].day == "Monday"


def test_first_duplicate_survives():
    first = make_entry(day="MONDAY", time="730AM", className="BARRES7", trainer="anisha", theme="SLAY")
    second = make_entry(day="Monday", time="7:30 AM", className="Studio Barre 57", trainer="Anisha Shah")

    records = assemble_records([first, second], LOCATION)

    assert len(records) == 1
    assert records[0].theme == "SLAY"


def test_distinct_entries_keep_extraction_order():
    entries = [
        make_entry(day="Tuesday", time="9:00 AM"),
        make_entry(day="Monday", time="6:00 PM", className="Mat 57", trainer="Richard"),
    ]

    records = assemble_records(entries, LOCATION)

    assert [(r.day, r.class_name) for r in records] == [
        ("Tuesday", "Studio Barre 57"),
        ("Monday", "Studio Mat 57"),
    ]


def test_missing_theme_is_none():
    records = assemble_records([make_entry(theme=None), make_entry(day="Friday", theme="")], LOCATION)

    assert [r.theme for r in records] == [None, None]
