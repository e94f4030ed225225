"""Decoding of the vision model's raw text into a schedule payload."""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from schedule_checker.domain.errors import MALFORMED_PAYLOAD, NO_RESPONSE, ResponseDecodeError

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\r?\n?")
_TRAILING_FENCE = re.compile(r"\r?\n?```$")


@dataclass(frozen=True)
class DecodedPayload:
    classes: Sequence[Any] = field(default_factory=tuple)
    raw_text: str = ""


def strip_code_fence(text: str) -> str:
    """Remove a leading ```/```json fence and a trailing ``` fence, if present."""
    stripped = text.strip()
    stripped = _LEADING_FENCE.sub("", stripped, count=1)
    stripped = _TRAILING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def decode_response(text: str | None) -> DecodedPayload:
    if text is None or not text.strip():
        raise ResponseDecodeError(NO_RESPONSE, text or "")

    body = strip_code_fence(text)
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as exc:
        logger.warning("Model response is not valid JSON (%s)", exc)
        raise ResponseDecodeError(MALFORMED_PAYLOAD, text) from exc

    if isinstance(parsed, list):
        return DecodedPayload(classes=tuple(parsed))
    if not isinstance(parsed, dict):
        logger.warning("Model response decoded to %s, expected an object", type(parsed).__name__)
        raise ResponseDecodeError(MALFORMED_PAYLOAD, text)

    classes = parsed.get("classes") or []
    if not isinstance(classes, list):
        raise ResponseDecodeError(MALFORMED_PAYLOAD, text)
    raw_text = parsed.get("rawText")
    return DecodedPayload(
        classes=tuple(classes),
        raw_text=raw_text if isinstance(raw_text, str) else "",
    )
