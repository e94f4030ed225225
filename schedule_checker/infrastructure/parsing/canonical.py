"""Canonical schedule table parser producing canonical class records."""
from __future__ import annotations

import logging
import re
import zipfile
from io import BytesIO
from pathlib import Path
from typing import Sequence

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from schedule_checker.domain.errors import CanonicalScheduleError
from schedule_checker.domain.keys import make_identity_key
from schedule_checker.domain.models import CanonicalClassRecord
from schedule_checker.domain.normalizers import (
    collapse_whitespace,
    normalize_class_name,
    normalize_day,
    normalize_location,
    normalize_time,
    normalize_trainer_name,
)
from schedule_checker.domain.ordering import parse_time_of_day
from schedule_checker.infrastructure.parsing.utils import ensure_bytes, pick_sheet

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "Schedule"

KNOWN_COLUMNS: dict[str, tuple[str, ...]] = {
    "day": ("Day", "Weekday"),
    "time": ("Time", "Class Time", "Start Time"),
    "location": ("Location", "Studio"),
    "class_name": ("Class", "Class Name", "ClassName"),
    "trainer": ("Trainer", "Trainer 1", "Trainer1", "Instructor"),
    "cover": ("Cover", "Cover Trainer"),
    "notes": ("Notes", "Note", "Comments"),
}
REQUIRED_COLUMNS = ("day", "time", "class_name", "trainer")

# spreadsheet clock cells come through as "07:30:00" or "2024-01-01 07:30:00"
_TWENTY_FOUR_HOUR = re.compile(r"^(?:\d{4}-\d{2}-\d{2}[ T])?(\d{1,2}):(\d{2})(?::\d{2}(?:\.\d+)?)?$")


def read_canonical_csv(source: BytesIO | Path | str) -> pd.DataFrame:
    return pd.read_csv(source, dtype=str, keep_default_na=False, skipinitialspace=True, encoding="utf-8-sig")


def read_canonical_excel(source: BytesIO | Path | str, sheet_name: str | None = None) -> pd.DataFrame:
    raw_bytes = ensure_bytes(source)
    chosen = pick_sheet(BytesIO(raw_bytes), sheet_name or DEFAULT_SHEET_NAME)
    return pd.read_excel(
        BytesIO(raw_bytes),
        sheet_name=chosen,
        engine="openpyxl",
        dtype=str,
        keep_default_na=False,
    )


def resolve_columns(df: pd.DataFrame) -> dict[str, str]:
    """Map logical field names to the table's actual headers, case-insensitively."""
    lookup = {str(column).strip().lower(): column for column in df.columns}
    resolved: dict[str, str] = {}
    for field_name, aliases in KNOWN_COLUMNS.items():
        for alias in aliases:
            column = lookup.get(alias.lower())
            if column is not None:
                resolved[field_name] = column
                break
    missing = [name for name in REQUIRED_COLUMNS if name not in resolved]
    if missing:
        raise CanonicalScheduleError(
            f"Canonical schedule is missing required column(s): {', '.join(missing)}"
        )
    return resolved


def twenty_four_hour_to_clock(value: str) -> str:
    """Rewrite period-less ``HH:MM[:SS]`` text as ``H:MM AM|PM``; other text is returned as is."""
    match = _TWENTY_FOUR_HOUR.match(value)
    if not match:
        return value
    hours = int(match.group(1))
    minutes = int(match.group(2))
    if hours > 23 or minutes > 59:
        return value
    period = "AM" if hours < 12 else "PM"
    return f"{hours % 12 or 12}:{minutes:02d} {period}"


def normalize_canonical(df: pd.DataFrame, default_location: str = "") -> pd.DataFrame:
    columns = resolve_columns(df)
    work = pd.DataFrame(index=df.index)
    for field_name in KNOWN_COLUMNS:
        column = columns.get(field_name)
        if column is None:
            work[field_name] = ""
        else:
            work[field_name] = df[column].fillna("").astype(str).map(collapse_whitespace)

    if "location" not in columns:
        work["location"] = default_location
    work.loc[work["location"] == "", "location"] = default_location

    work = work[(work["day"] != "") & (work["class_name"] != "")].copy()

    work["time_raw"] = work["time"]
    work["day"] = work["day"].map(normalize_day)
    work["time"] = work["time_raw"].map(twenty_four_hour_to_clock).map(normalize_time)
    work["class_name"] = work["class_name"].map(normalize_class_name)
    work["trainer"] = work["trainer"].map(normalize_trainer_name)
    work["cover"] = work["cover"].map(normalize_trainer_name)
    work["location"] = work["location"].map(normalize_location)
    return work


def canonical_to_records(df: pd.DataFrame, default_location: str = "") -> Sequence[CanonicalClassRecord]:
    normalized = normalize_canonical(df, default_location=default_location)
    records: list[CanonicalClassRecord] = []
    for _, row in normalized.iterrows():
        records.append(
            CanonicalClassRecord(
                day=row["day"],
                time_raw=row["time_raw"],
                time_of_day=parse_time_of_day(row["time"]),
                time=row["time"],
                location=row["location"],
                class_name=row["class_name"],
                trainer=row["trainer"],
                cover=row["cover"],
                notes=row["notes"],
                identity_key=make_identity_key(
                    row["day"], row["time"], row["class_name"], row["trainer"], row["location"]
                ),
            )
        )
    logger.info("Loaded %d canonical class records (%d rows skipped)", len(records), len(df) - len(records))
    return records


def load_canonical_records(
    source: BytesIO | Path | str,
    *,
    excel: bool = False,
    sheet_name: str | None = None,
    default_location: str = "",
) -> Sequence[CanonicalClassRecord]:
    try:
        if excel:
            dataframe = read_canonical_excel(source, sheet_name=sheet_name)
        else:
            dataframe = read_canonical_csv(source)
    except (OSError, ValueError, pd.errors.ParserError, zipfile.BadZipFile, InvalidFileException) as exc:
        raise CanonicalScheduleError(f"Could not read canonical schedule: {exc}") from exc
    return canonical_to_records(dataframe, default_location=default_location)
