"""Reconcile a photographed class schedule board against the canonical schedule."""
from schedule_checker.application.use_cases import (
    ExtractScheduleUseCase,
    ReconcileScheduleUseCase,
    ScheduleReconciliationContext,
)
from schedule_checker.domain.services import ScheduleReconciler
from schedule_checker.infrastructure.repositories.file_repositories import (
    CsvCanonicalRepository,
    ExcelCanonicalRepository,
)

__all__ = [
    "ExtractScheduleUseCase",
    "ReconcileScheduleUseCase",
    "ScheduleReconciliationContext",
    "ScheduleReconciler",
    "CsvCanonicalRepository",
    "ExcelCanonicalRepository",
]
