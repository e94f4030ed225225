"""Application services orchestrating schedule extraction and reconciliation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from schedule_checker.application.dto import (
    CancellationCheck,
    ExtractionRequest,
    ExtractionResult,
    ProgressCallback,
    ReconciliationResponse,
)
from schedule_checker.domain.assembly import assemble_records
from schedule_checker.domain.errors import ResponseDecodeError, VisionServiceError
from schedule_checker.domain.models import ExtractedClassRecord
from schedule_checker.domain.normalizers import normalize_location
from schedule_checker.domain.ordering import sort_chronologically
from schedule_checker.domain.repositories import CanonicalScheduleRepository, VisionExtractionClient
from schedule_checker.domain.services import ScheduleReconciler
from schedule_checker.infrastructure.parsing.model_response import decode_response
from schedule_checker.infrastructure.vision.prompts import SCHEDULE_EXTRACTION_PROMPT

logger = logging.getLogger(__name__)

CANCELLED = "extraction cancelled"


class _Progress:
    """Forwards milestones to the caller's callback, never letting the percentage go backwards."""

    def __init__(self, callback: ProgressCallback | None) -> None:
        self._callback = callback
        self._last = 0

    def __call__(self, percent: int, message: str) -> None:
        self._last = max(self._last, min(100, percent))
        logger.debug("Progress %d%%: %s", self._last, message)
        if self._callback is not None:
            self._callback(self._last, message)


class ExtractScheduleUseCase:
    """Runs one image through the vision model and normalizes what comes back."""

    def __init__(self, client: VisionExtractionClient, prompt: str = SCHEDULE_EXTRACTION_PROMPT) -> None:
        self._client = client
        self._prompt = prompt

    def execute(
        self,
        request: ExtractionRequest,
        on_progress: ProgressCallback | None = None,
        is_cancelled: CancellationCheck | None = None,
    ) -> ExtractionResult:
        progress = _Progress(on_progress)
        cancelled = is_cancelled or (lambda: False)
        location = normalize_location(request.location)

        progress(0, "Starting schedule extraction...")
        if cancelled():
            return self._cancelled()

        progress(10, "Analyzing schedule image with AI...")
        try:
            response_text = self._client.extract(request.image, request.mime_type, self._prompt)
        except VisionServiceError as exc:
            logger.warning("Extraction failed talking to the vision model: %s", exc)
            return ExtractionResult(success=False, error=str(exc))

        if cancelled():
            return self._cancelled()

        progress(60, "Decoding model response...")
        try:
            payload = decode_response(response_text)
        except ResponseDecodeError as exc:
            logger.warning("Could not decode model response: %s", exc.reason)
            return ExtractionResult(success=False, raw_text=exc.raw_text, error=exc.reason)
        logger.info("Decoded %d candidate entries", len(payload.classes))

        progress(75, f"Normalizing {len(payload.classes)} entries...")
        records = assemble_records(payload.classes, location)

        progress(90, "Sorting classes by day and time...")
        ordered: Sequence[ExtractedClassRecord] = tuple(sort_chronologically(records))

        progress(100, f"Completed! Found {len(ordered)} classes.")
        return ExtractionResult(
            success=True,
            records=ordered,
            raw_text=payload.raw_text or response_text,
        )

    @staticmethod
    def _cancelled() -> ExtractionResult:
        logger.warning("Extraction cancelled by caller")
        return ExtractionResult(success=False, error=CANCELLED)


@dataclass(slots=True)
class ScheduleReconciliationContext:
    canonical_repository: CanonicalScheduleRepository
    reconciler: ScheduleReconciler


class ReconcileScheduleUseCase:
    def __init__(self, context: ScheduleReconciliationContext) -> None:
        self._context = context

    def execute(self, extracted: Sequence[ExtractedClassRecord]) -> ReconciliationResponse:
        canonical = self._context.canonical_repository.list_class_records()
        report = self._context.reconciler.reconcile(canonical, extracted)
        return ReconciliationResponse(report=report, canonical=canonical, extracted=extracted)
