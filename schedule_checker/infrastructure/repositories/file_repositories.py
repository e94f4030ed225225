"""File-backed repositories for canonical schedule data."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Sequence

from schedule_checker.domain.models import CanonicalClassRecord
from schedule_checker.domain.repositories import CanonicalScheduleRepository
from schedule_checker.infrastructure.parsing.canonical import load_canonical_records
from schedule_checker.infrastructure.parsing.utils import ensure_bytes, is_excel_path


class CsvCanonicalRepository(CanonicalScheduleRepository):
    def __init__(self, source: BytesIO | Path | str | bytes, default_location: str = "") -> None:
        self._source = ensure_bytes(source)
        self._default_location = default_location

    def list_class_records(self) -> Sequence[CanonicalClassRecord]:
        return load_canonical_records(BytesIO(self._source), default_location=self._default_location)


class ExcelCanonicalRepository(CanonicalScheduleRepository):
    def __init__(
        self,
        source: BytesIO | Path | str | bytes,
        sheet_name: str | None = None,
        default_location: str = "",
    ) -> None:
        self._source = ensure_bytes(source)
        self._sheet_name = sheet_name
        self._default_location = default_location

    def list_class_records(self) -> Sequence[CanonicalClassRecord]:
        return load_canonical_records(
            BytesIO(self._source),
            excel=True,
            sheet_name=self._sheet_name,
            default_location=self._default_location,
        )


def repository_for_path(
    path: Path | str, sheet_name: str | None = None, default_location: str = ""
) -> CanonicalScheduleRepository:
    if is_excel_path(path):
        return ExcelCanonicalRepository(Path(path), sheet_name=sheet_name, default_location=default_location)
    return CsvCanonicalRepository(Path(path), default_location=default_location)
