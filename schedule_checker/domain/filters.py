"""Attribute filters over records and comparison outcomes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .models import CanonicalClassRecord, ComparisonOutcome, ExtractedClassRecord

ClassRecord = CanonicalClassRecord | ExtractedClassRecord


@dataclass(frozen=True)
class ScheduleFilter:
    """Allowed values per attribute; an empty set lets everything through."""

    days: frozenset[str] = field(default_factory=frozenset)
    locations: frozenset[str] = field(default_factory=frozenset)
    trainers: frozenset[str] = field(default_factory=frozenset)
    class_names: frozenset[str] = field(default_factory=frozenset)

    def is_empty(self) -> bool:
        return not (self.days or self.locations or self.trainers or self.class_names)

    def matches(self, record: ClassRecord) -> bool:
        if self.days and record.day not in self.days:
            return False
        if self.locations and record.location not in self.locations:
            return False
        if self.trainers and record.trainer not in self.trainers:
            return False
        if self.class_names and record.class_name not in self.class_names:
            return False
        return True

    def matches_outcome(self, outcome: ComparisonOutcome) -> bool:
        record = outcome.canonical or outcome.extracted
        return record is not None and self.matches(record)


def filter_records(records: Iterable[ClassRecord], schedule_filter: ScheduleFilter) -> Sequence[ClassRecord]:
    return [record for record in records if schedule_filter.matches(record)]


def filter_outcomes(
    outcomes: Iterable[ComparisonOutcome], schedule_filter: ScheduleFilter
) -> Sequence[ComparisonOutcome]:
    return [outcome for outcome in outcomes if schedule_filter.matches_outcome(outcome)]
