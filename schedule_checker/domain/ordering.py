"""Chronological ordering of class records."""
from __future__ import annotations

import re
from datetime import time
from typing import Iterable, Protocol, Sequence, TypeVar

from .rules import DAY_ORDINALS, UNKNOWN_DAY_ORDINAL

_CLOCK = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)", re.IGNORECASE)


class Scheduled(Protocol):
    day: str
    time: str


RecordT = TypeVar("RecordT", bound=Scheduled)


def day_ordinal(day: str) -> int:
    return DAY_ORDINALS.get(day, UNKNOWN_DAY_ORDINAL)


def time_to_minutes(value: str) -> int | None:
    """Minutes since midnight for an ``H:MM AM|PM`` string, or ``None``."""
    match = _CLOCK.search(value or "")
    if not match:
        return None
    hours = int(match.group(1))
    minutes = int(match.group(2))
    is_pm = match.group(3).upper() == "PM"
    if is_pm and hours != 12:
        hours += 12
    if not is_pm and hours == 12:
        hours = 0
    return hours * 60 + minutes


def parse_time_of_day(value: str) -> time | None:
    minutes = time_to_minutes(value)
    if minutes is None or minutes >= 24 * 60:
        return None
    return time(minutes // 60, minutes % 60)


def chronological_key(record: Scheduled) -> tuple[int, int]:
    return day_ordinal(record.day), time_to_minutes(record.time) or 0


def sort_chronologically(records: Iterable[RecordT]) -> Sequence[RecordT]:
    # sorted() is stable: equal day and time keep their extraction order
    return sorted(records, key=chronological_key)
