"""Report generators for schedule comparison outcomes."""
from __future__ import annotations

import csv
import html
import io
from typing import Sequence

import pandas as pd

from schedule_checker.domain.models import ComparisonOutcome, ExtractedClassRecord
from schedule_checker.domain.results import DUPLICATE_IN_CANONICAL

REPORT_COLUMNS = (
    "day",
    "location",
    "status",
    "reason",
    "discrepancies",
    "canonical_time",
    "extracted_time",
    "canonical_class",
    "extracted_class",
    "canonical_trainer",
    "extracted_trainer",
    "theme",
)


def outcome_status(outcome: ComparisonOutcome) -> str:
    if outcome.is_match:
        return "match"
    if outcome.reason.startswith(DUPLICATE_IN_CANONICAL):
        return "duplicate_in_canonical"
    if outcome.extracted is None:
        return "missing_in_extracted"
    if outcome.canonical is None:
        return "not_in_canonical"
    return "mismatch"


def outcomes_to_rows(outcomes: Sequence[ComparisonOutcome]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for item in outcomes:
        canonical = item.canonical
        extracted = item.extracted
        rows.append(
            {
                "day": item.day,
                "location": item.location,
                "status": outcome_status(item),
                "reason": item.reason,
                "discrepancies": ", ".join(item.discrepancy_fields),
                "canonical_time": canonical.time if canonical else "",
                "extracted_time": extracted.time if extracted else "",
                "canonical_class": canonical.class_name if canonical else "",
                "extracted_class": extracted.class_name if extracted else "",
                "canonical_trainer": canonical.trainer if canonical else "",
                "extracted_trainer": extracted.trainer if extracted else "",
                "theme": (extracted.theme or "") if extracted else "",
            }
        )
    return rows


def render_csv(outcomes: Sequence[ComparisonOutcome]) -> bytes:
    rows = outcomes_to_rows(outcomes)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(REPORT_COLUMNS))
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_html(outcomes: Sequence[ComparisonOutcome]) -> str:
    rows = outcomes_to_rows([outcome for outcome in outcomes if not outcome.is_match])
    if not rows:
        return "<p>No discrepancies detected.</p>"
    header = "".join(f"<th>{col}</th>" for col in REPORT_COLUMNS)
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{html.escape(row[col])}</td>" for col in REPORT_COLUMNS) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"


def records_to_dataframe(records: Sequence[ExtractedClassRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "day": r.day,
                "time": r.time,
                "class_name": r.class_name,
                "trainer": r.trainer,
                "location": r.location,
                "theme": r.theme or "",
                "identity_key": r.identity_key,
            }
            for r in records
        ],
        columns=["day", "time", "class_name", "trainer", "location", "theme", "identity_key"],
    )
