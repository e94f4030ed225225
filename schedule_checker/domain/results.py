"""Domain-level results for schedule reconciliation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Sequence

from .models import ComparisonOutcome

MISSING_IN_EXTRACTED = "missing in extracted schedule"
NOT_IN_CANONICAL = "not present in canonical schedule"
DUPLICATE_IN_CANONICAL = "duplicate canonical entry"


@dataclass(frozen=True)
class ReconciliationSummary:
    total_canonical: int
    total_extracted: int
    matched: int
    mismatched: int
    missing_in_extracted: int
    not_in_canonical: int
    duplicates_in_canonical: int
    generated_at: datetime


@dataclass(frozen=True)
class ReconciliationReport:
    summary: ReconciliationSummary
    outcomes: Sequence[ComparisonOutcome] = field(default_factory=tuple)

    def has_issues(self) -> bool:
        return any(not outcome.is_match for outcome in self.outcomes)

    def iter_matches(self) -> Iterable[ComparisonOutcome]:
        return (outcome for outcome in self.outcomes if outcome.is_match)

    def iter_mismatches(self) -> Iterable[ComparisonOutcome]:
        """Paired outcomes whose fields disagree."""
        return (
            outcome
            for outcome in self.outcomes
            if not outcome.is_match and outcome.canonical is not None and outcome.extracted is not None
        )

    def iter_unmatched(self) -> Iterable[ComparisonOutcome]:
        return (
            outcome for outcome in self.outcomes if outcome.canonical is None or outcome.extracted is None
        )

    def iter_issues(self) -> Iterable[ComparisonOutcome]:
        return (outcome for outcome in self.outcomes if not outcome.is_match)
