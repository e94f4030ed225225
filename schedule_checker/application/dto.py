"""Application-level DTOs for schedule extraction and reconciliation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from schedule_checker.domain.models import CanonicalClassRecord, ExtractedClassRecord
from schedule_checker.domain.results import ReconciliationReport

ProgressCallback = Callable[[int, str], None]
CancellationCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class ExtractionRequest:
    image: bytes
    mime_type: str
    location: str


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    success: bool
    records: Sequence[ExtractedClassRecord] = field(default_factory=tuple)
    raw_text: str = ""
    error: str | None = None


@dataclass(slots=True, frozen=True)
class ReconciliationResponse:
    report: ReconciliationReport
    canonical: Sequence[CanonicalClassRecord]
    extracted: Sequence[ExtractedClassRecord]
