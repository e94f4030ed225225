"""Exception hierarchy for schedule extraction and reconciliation."""
from __future__ import annotations

NO_RESPONSE = "no response"
MALFORMED_PAYLOAD = "malformed payload"


class ScheduleCheckerError(Exception):
    """Base class for all schedule checker failures."""


class VisionServiceError(ScheduleCheckerError):
    """The vision model could not be reached or refused the request."""


class ResponseDecodeError(ScheduleCheckerError):
    """The model answered, but its text could not be turned into a payload."""

    def __init__(self, reason: str, raw_text: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.raw_text = raw_text


class CanonicalScheduleError(ScheduleCheckerError):
    """The canonical schedule table is unreadable or missing required columns."""
