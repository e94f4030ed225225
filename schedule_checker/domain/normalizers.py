"""Pure normalizers turning noisy schedule text into canonical field values.

None of these raise: input they do not recognise is passed through in a
best-effort cleaned form.
"""
from __future__ import annotations

import re

from .rules import (
    BRAND_TOKEN,
    CANONICAL_CLASS_NAMES,
    LOCATION_SUBSTRINGS,
    OCR_SUBSTITUTIONS,
    STUDIO_PREFIX,
    TRAINER_ALIASES,
    UNKNOWN_LOCATION,
    WEEKDAYS,
)

_WHITESPACE = re.compile(r"\s+")
_TIME_PATTERN = re.compile(r"^(\d{1,2})(?:[:.]?(\d{2}))?\s*([AP])\.?\s*M\.?$")


def collapse_whitespace(value: str) -> str:
    return _WHITESPACE.sub(" ", value).strip()


def normalize_time(raw: str) -> str:
    """Canonicalise a class time to ``H:MM AM`` / ``H:MM PM``.

    Accepts ``730AM``, ``7.30 PM``, ``7 PM`` and ``7:30PM``. Hours past 12
    wrap back into 1-12 and hour 0 becomes 12. Anything else comes back
    upper-cased with its whitespace collapsed.
    """
    if not raw:
        return ""
    text = collapse_whitespace(raw).upper()
    match = _TIME_PATTERN.match(text)
    if not match:
        return text
    hours = int(match.group(1))
    minutes = match.group(2) or "00"
    if int(minutes) > 59:
        return text
    hours = hours % 12 or 12
    period = f"{match.group(3)}M"
    return f"{hours}:{minutes} {period}"


def normalize_day(raw: str) -> str:
    if not raw:
        return ""
    stripped = raw.strip()
    capitalized = stripped[:1].upper() + stripped[1:].lower()
    if capitalized in WEEKDAYS:
        return capitalized
    return stripped


def normalize_class_name(raw: str) -> str:
    if not raw:
        return ""
    normalized = collapse_whitespace(raw)
    for pattern, replacement in OCR_SUBSTITUTIONS:
        normalized = pattern.sub(replacement, normalized)

    brand_pattern, brand = BRAND_TOKEN
    normalized = brand_pattern.sub(brand, normalized)
    normalized = collapse_whitespace(normalized)

    if not normalized.lower().startswith(STUDIO_PREFIX.lower()):
        normalized = STUDIO_PREFIX + normalized

    for pattern, canonical in CANONICAL_CLASS_NAMES:
        if pattern.search(normalized):
            return canonical
    return normalized


def _title_token(token: str) -> str:
    return token[:1].upper() + token[1:].lower()


def normalize_trainer_name(raw: str) -> str:
    if not raw:
        return ""
    normalized = collapse_whitespace(raw)
    lowered = normalized.lower()
    for alias, full_name in TRAINER_ALIASES.items():
        # "kabir" must not claim "kabirathan"
        if lowered == alias or lowered.startswith(alias + " "):
            return full_name
    return " ".join(_title_token(token) for token in normalized.split(" "))


def normalize_location(raw: str) -> str:
    if not raw or not raw.strip():
        return UNKNOWN_LOCATION
    lowered = raw.lower()
    for needles, canonical in LOCATION_SUBSTRINGS:
        if any(needle in lowered for needle in needles):
            return canonical
    return raw
