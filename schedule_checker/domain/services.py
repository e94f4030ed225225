"""Domain services implementing the schedule comparison rules."""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Mapping, Sequence

from .keys import comparable
from .models import CanonicalClassRecord, ComparisonOutcome, ExtractedClassRecord
from .normalizers import normalize_class_name
from .ordering import chronological_key, day_ordinal, time_to_minutes
from .results import (
    DUPLICATE_IN_CANONICAL,
    MISSING_IN_EXTRACTED,
    NOT_IN_CANONICAL,
    ReconciliationReport,
    ReconciliationSummary,
)

logger = logging.getLogger(__name__)

PARTITION_ORDERS = ("chronological", "input")
DEFAULT_PARTITION_ORDER = "chronological"
DEFAULT_TIME_TOLERANCE_MINUTES = 15

COMPARED_FIELDS = ("time", "class_name", "trainer", "location")

PartitionKey = tuple[str, str]
Member = tuple[int, CanonicalClassRecord]


def partition_key(record: CanonicalClassRecord | ExtractedClassRecord) -> PartitionKey:
    return comparable(record.day), comparable(record.location)


class ScheduleReconciler:
    """Pairs canonical class records with extracted ones, one (day, location) partition at a time.

    Inside a partition every exact identity-key match is taken first. The
    canonical records left over then take the closest unconsumed extracted
    record with the same class name whose time lies within
    ``time_tolerance_minutes``; equal distances prefer a trainer match, then
    extraction order. An extracted record is consumed by at most one
    canonical record. Canonical records repeating an earlier identity key
    are not paired; they are reported as duplicates.

    ``partition_order`` is ``"chronological"`` (partitions by weekday then
    location, members by time) or ``"input"`` (order of first appearance in
    the canonical sequence). It decides which canonical record gets first
    pick when two compete for the same extracted record.
    """

    def __init__(
        self,
        time_tolerance_minutes: int = DEFAULT_TIME_TOLERANCE_MINUTES,
        partition_order: str = DEFAULT_PARTITION_ORDER,
        accept_cover_trainer: bool = False,
    ) -> None:
        if time_tolerance_minutes < 0:
            raise ValueError("time_tolerance_minutes must not be negative")
        if partition_order not in PARTITION_ORDERS:
            raise ValueError(f"Unknown partition order {partition_order!r}")
        self._tolerance = time_tolerance_minutes
        self._partition_order = partition_order
        self._accept_cover = accept_cover_trainer

    @property
    def time_tolerance_minutes(self) -> int:
        return self._tolerance

    @property
    def partition_order(self) -> str:
        return self._partition_order

    def reconcile(
        self,
        canonical: Sequence[CanonicalClassRecord],
        extracted: Sequence[ExtractedClassRecord],
    ) -> ReconciliationReport:
        candidates_by_partition: dict[PartitionKey, list[int]] = defaultdict(list)
        for index, record in enumerate(extracted):
            candidates_by_partition[partition_key(record)].append(index)

        duplicate_counts = self._detect_duplicates(canonical)
        duplicate_positions = self._later_copies(canonical, duplicate_counts)
        for identity_key, count in duplicate_counts.items():
            logger.warning("%d canonical records share identity %s", count, identity_key)

        consumed: set[int] = set()
        outcomes: list[ComparisonOutcome] = []

        for key, members in self._partitions(canonical):
            candidates = candidates_by_partition.get(key, [])
            distinct = [member for member in members if member[0] not in duplicate_positions]
            pairs = self._pair_partition(distinct, candidates, extracted, consumed)
            logger.debug("Partition %s: %d canonical, %d paired", key, len(members), len(pairs))
            for position, record in members:
                index = pairs.get(position)
                if position in duplicate_positions:
                    outcomes.append(
                        ComparisonOutcome(
                            canonical=record,
                            extracted=None,
                            is_match=False,
                            reason=(
                                f"{DUPLICATE_IN_CANONICAL} "
                                f"({duplicate_counts[record.identity_key]} records share the same identity)"
                            ),
                        )
                    )
                elif index is None:
                    outcomes.append(
                        ComparisonOutcome(
                            canonical=record,
                            extracted=None,
                            is_match=False,
                            reason=MISSING_IN_EXTRACTED,
                        )
                    )
                else:
                    outcomes.append(self._compare(record, extracted[index]))

        for index, record in enumerate(extracted):
            if index not in consumed:
                outcomes.append(
                    ComparisonOutcome(
                        canonical=None,
                        extracted=record,
                        is_match=False,
                        reason=NOT_IN_CANONICAL,
                    )
                )

        report = ReconciliationReport(
            summary=self._summarize(canonical, extracted, outcomes, len(duplicate_positions)),
            outcomes=tuple(outcomes),
        )
        summary = report.summary
        logger.info(
            "Reconciled %d canonical / %d extracted: %d matched, %d mismatched, %d missing, %d extra, %d duplicate",
            summary.total_canonical,
            summary.total_extracted,
            summary.matched,
            summary.mismatched,
            summary.missing_in_extracted,
            summary.not_in_canonical,
            summary.duplicates_in_canonical,
        )
        return report

    def _partitions(self, canonical: Sequence[CanonicalClassRecord]) -> list[tuple[PartitionKey, list[Member]]]:
        grouped: dict[PartitionKey, list[Member]] = {}
        for position, record in enumerate(canonical):
            grouped.setdefault(partition_key(record), []).append((position, record))

        partitions = list(grouped.items())
        if self._partition_order == "chronological":
            partitions.sort(key=lambda item: (day_ordinal(item[1][0][1].day), item[0][1]))
            partitions = [
                (key, sorted(members, key=lambda member: chronological_key(member[1])))
                for key, members in partitions
            ]
        return partitions

    def _pair_partition(
        self,
        members: Sequence[Member],
        candidates: Sequence[int],
        extracted: Sequence[ExtractedClassRecord],
        consumed: set[int],
    ) -> Mapping[int, int]:
        pairs: dict[int, int] = {}

        for position, record in members:
            for index in candidates:
                if index not in consumed and extracted[index].identity_key == record.identity_key:
                    pairs[position] = index
                    consumed.add(index)
                    break

        for position, record in members:
            if position in pairs:
                continue
            index = self._closest_candidate(record, candidates, extracted, consumed)
            if index is not None:
                pairs[position] = index
                consumed.add(index)
        return pairs

    def _closest_candidate(
        self,
        record: CanonicalClassRecord,
        candidates: Sequence[int],
        extracted: Sequence[ExtractedClassRecord],
        consumed: set[int],
    ) -> int | None:
        canonical_minutes = time_to_minutes(record.time)
        if canonical_minutes is None:
            return None
        class_name = comparable(normalize_class_name(record.class_name))

        best: tuple[int, int, int] | None = None
        for index in candidates:
            if index in consumed:
                continue
            candidate = extracted[index]
            if comparable(normalize_class_name(candidate.class_name)) != class_name:
                continue
            candidate_minutes = time_to_minutes(candidate.time)
            if candidate_minutes is None:
                continue
            distance = abs(candidate_minutes - canonical_minutes)
            if distance > self._tolerance:
                continue
            rank = (distance, 0 if self._trainer_matches(record, candidate) else 1, index)
            if best is None or rank < best:
                best = rank
        return best[2] if best else None

    def _trainer_matches(self, canonical: CanonicalClassRecord, extracted: ExtractedClassRecord) -> bool:
        trainer = comparable(extracted.trainer)
        if trainer == comparable(canonical.trainer):
            return True
        return self._accept_cover and bool(canonical.cover) and trainer == comparable(canonical.cover)

    def _compare(self, canonical: CanonicalClassRecord, extracted: ExtractedClassRecord) -> ComparisonOutcome:
        differing: list[str] = []
        for name in COMPARED_FIELDS:
            if name == "trainer":
                equal = self._trainer_matches(canonical, extracted)
            else:
                equal = comparable(getattr(canonical, name)) == comparable(getattr(extracted, name))
            if not equal:
                differing.append(name)

        if not differing:
            return ComparisonOutcome(canonical=canonical, extracted=extracted, is_match=True, reason="")

        first = differing[0]
        reason = (
            f"{first} mismatch (canonical: {getattr(canonical, first)!s}, "
            f"extracted: {getattr(extracted, first)!s})"
        )
        return ComparisonOutcome(
            canonical=canonical,
            extracted=extracted,
            is_match=False,
            reason=reason,
            discrepancy_fields=tuple(differing),
        )

    @staticmethod
    def _detect_duplicates(records: Sequence[CanonicalClassRecord]) -> Mapping[str, int]:
        counts: dict[str, int] = defaultdict(int)
        for record in records:
            counts[record.identity_key] += 1
        return {identity_key: count for identity_key, count in counts.items() if count > 1}

    @staticmethod
    def _later_copies(records: Sequence[CanonicalClassRecord], duplicate_counts: Mapping[str, int]) -> set[int]:
        """Positions of every duplicate after the first; the first copy is reconciled normally."""
        seen: set[str] = set()
        positions: set[int] = set()
        for position, record in enumerate(records):
            if record.identity_key not in duplicate_counts:
                continue
            if record.identity_key in seen:
                positions.add(position)
            seen.add(record.identity_key)
        return positions

    @staticmethod
    def _summarize(
        canonical: Sequence[CanonicalClassRecord],
        extracted: Sequence[ExtractedClassRecord],
        outcomes: Sequence[ComparisonOutcome],
        duplicates: int,
    ) -> ReconciliationSummary:
        return ReconciliationSummary(
            total_canonical=len(canonical),
            total_extracted=len(extracted),
            matched=sum(1 for outcome in outcomes if outcome.is_match),
            mismatched=sum(
                1
                for outcome in outcomes
                if not outcome.is_match and outcome.canonical is not None and outcome.extracted is not None
            ),
            missing_in_extracted=sum(1 for outcome in outcomes if outcome.extracted is None) - duplicates,
            not_in_canonical=sum(1 for outcome in outcomes if outcome.canonical is None),
            duplicates_in_canonical=duplicates,
            generated_at=datetime.now(timezone.utc),
        )
