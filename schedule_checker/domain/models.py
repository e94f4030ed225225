"""Domain models for schedule reconciliation.

These dataclasses capture the canonical schema for normalized class records.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time


@dataclass(frozen=True)
class CanonicalClassRecord:
    """Class session as listed in the studio's trusted schedule table."""

    day: str
    time_raw: str
    time_of_day: time | None
    time: str
    location: str
    class_name: str
    trainer: str
    cover: str
    notes: str
    identity_key: str


@dataclass(frozen=True)
class ExtractedClassRecord:
    """Class session recovered from a photographed schedule board."""

    day: str
    time: str
    class_name: str
    trainer: str
    location: str
    identity_key: str
    theme: str | None = None


@dataclass(frozen=True)
class ComparisonOutcome:
    """Result of pairing (or failing to pair) one canonical and one extracted record."""

    canonical: CanonicalClassRecord | None
    extracted: ExtractedClassRecord | None
    is_match: bool
    reason: str
    discrepancy_fields: tuple[str, ...] = field(default_factory=tuple)

    @property
    def day(self) -> str:
        record = self.canonical or self.extracted
        return record.day if record else ""

    @property
    def location(self) -> str:
        record = self.canonical or self.extracted
        return record.location if record else ""
