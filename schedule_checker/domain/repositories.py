"""Repository and collaborator interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import CanonicalClassRecord


class CanonicalScheduleRepository(Protocol):
    """Provides the trusted class schedule."""

    def list_class_records(self) -> Sequence[CanonicalClassRecord]:
        ...


class VisionExtractionClient(Protocol):
    """Sends one image and one instruction to a vision model and returns its text.

    Implementations raise ``VisionServiceError`` on any transport failure.
    """

    def extract(self, image: bytes, mime_type: str, prompt: str) -> str:
        ...
