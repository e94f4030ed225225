import json
from pathlib import Path

import pytest

from schedule_checker.cli import main

CANONICAL = """Day,Time,Location,Class,Trainer
Monday,7:00 AM,Bandra,Barre 57,Anisha
Monday,9:00 AM,Bandra,FIT,Anmol
"""


def write_inputs(tmp_path: Path, classes) -> tuple[Path, Path]:
    canonical = tmp_path / "canonical.csv"
    canonical.write_text(CANONICAL, encoding="utf-8")
    response = tmp_path / "response.json"
    response.write_text(json.dumps({"classes": classes, "rawText": ""}), encoding="utf-8")
    return canonical, response


MATCHING = [
    {"day": "Monday", "time": "7:00 AM", "className": "BARRES7", "trainer": "anisha"},
    {"day": "Monday", "time": "9:00 AM", "className": "FT", "trainer": "anmol"},
]


def test_clean_run_exits_zero(tmp_path, capsys):
    canonical, response = write_inputs(tmp_path, MATCHING)

    code = main([str(canonical), "--response-file", str(response), "--location", "bandra", "--fail-on-issues"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Matched: 2" in out
    assert "No discrepancies detected." in out


def test_discrepancies_exit_two_with_flag(tmp_path, capsys):
    canonical, response = write_inputs(tmp_path, MATCHING[:1])
    report_csv = tmp_path / "report.csv"
    report_html = tmp_path / "report.html"
    extracted_csv = tmp_path / "extracted.csv"

    code = main(
        [
            str(canonical),
            "--response-file",
            str(response),
            "--location",
            "bandra",
            "--report-csv",
            str(report_csv),
            "--report-html",
            str(report_html),
            "--extracted-csv",
            str(extracted_csv),
            "--fail-on-issues",
        ]
    )

    out = capsys.readouterr().out
    assert code == 2
    assert "Missing in extracted: 1" in out
    assert "Discrepancies detected:" in out
    assert "missing_in_extracted" in report_csv.read_text(encoding="utf-8")
    assert "<table>" in report_html.read_text(encoding="utf-8")
    assert "Studio Barre 57" in extracted_csv.read_text(encoding="utf-8")


def test_discrepancies_exit_zero_without_flag(tmp_path):
    canonical, response = write_inputs(tmp_path, MATCHING[:1])

    assert main([str(canonical), "--response-file", str(response), "--location", "bandra"]) == 0


def test_day_filter_limits_reported_issues(tmp_path):
    canonical, response = write_inputs(tmp_path, MATCHING[:1])

    code = main(
        [str(canonical), "--response-file", str(response), "--location", "bandra", "--day", "Tuesday", "--fail-on-issues"]
    )

    assert code == 0


def test_malformed_response_exits_one(tmp_path, capsys):
    canonical, response = write_inputs(tmp_path, MATCHING)
    response.write_text('{"classes": [', encoding="utf-8")

    code = main([str(canonical), "--response-file", str(response)])

    assert code == 1
    assert "malformed payload" in capsys.readouterr().err


def test_missing_canonical_exits_one(tmp_path, capsys):
    _, response = write_inputs(tmp_path, MATCHING)

    code = main([str(tmp_path / "nope.csv"), "--response-file", str(response)])

    assert code == 1
    assert "Canonical schedule error" in capsys.readouterr().err


def test_image_or_response_required(tmp_path):
    canonical, _ = write_inputs(tmp_path, MATCHING)

    with pytest.raises(SystemExit):
        main([str(canonical)])


def test_day_filter_accepts_lowercase_days(tmp_path):
    canonical, response = write_inputs(tmp_path, MATCHING[:1])

    code = main(
        [str(canonical), "--response-file", str(response), "--location", "bandra", "--day", "monday", "--fail-on-issues"]
    )

    assert code == 2


def test_negative_tolerance_is_rejected(tmp_path, capsys):
    canonical, response = write_inputs(tmp_path, MATCHING)

    with pytest.raises(SystemExit) as excinfo:
        main([str(canonical), "--response-file", str(response), "--tolerance", "-1"])

    assert excinfo.value.code == 2
    assert "must not be negative" in capsys.readouterr().err


def test_corrupt_workbook_exits_one(tmp_path, capsys):
    _, response = write_inputs(tmp_path, MATCHING)
    workbook = tmp_path / "canonical.xlsx"
    workbook.write_bytes(b"not a zip archive")

    code = main([str(workbook), "--response-file", str(response)])

    assert code == 1
    assert "Canonical schedule error" in capsys.readouterr().err


def test_duplicate_canonical_rows_are_counted(tmp_path, capsys):
    canonical, response = write_inputs(tmp_path, MATCHING)
    with canonical.open("a", encoding="utf-8") as handle:
        handle.write("monday,700AM,bandra,BARRES7,anisha\n")

    code = main([str(canonical), "--response-file", str(response), "--location", "bandra"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Matched: 2" in out
    assert "Missing in extracted: 0" in out
    assert "Duplicate canonical entries: 1" in out
