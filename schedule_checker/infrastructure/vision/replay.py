"""Vision client that replays a previously captured model response."""
from __future__ import annotations

import logging
from pathlib import Path

from schedule_checker.domain.errors import VisionServiceError
from schedule_checker.domain.repositories import VisionExtractionClient

logger = logging.getLogger(__name__)


class ReplayVisionClient(VisionExtractionClient):
    def __init__(self, response_text: str) -> None:
        self._response_text = response_text

    @classmethod
    def from_file(cls, path: Path | str) -> "ReplayVisionClient":
        try:
            return cls(Path(path).read_text(encoding="utf-8"))
        except OSError as exc:
            raise VisionServiceError(f"Could not read saved response {path}: {exc}") from exc

    def extract(self, image: bytes, mime_type: str, prompt: str) -> str:
        logger.info("Replaying saved model response (%d chars)", len(self._response_text))
        return self._response_text
