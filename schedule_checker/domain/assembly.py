"""Turn decoded model entries into deduplicated extracted class records."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from .keys import make_identity_key
from .models import ExtractedClassRecord
from .normalizers import (
    normalize_class_name,
    normalize_day,
    normalize_time,
    normalize_trainer_name,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("day", "time", "className", "trainer")


def _text(entry: Mapping[str, Any], name: str) -> str:
    value = entry.get(name)
    if value is None:
        return ""
    return str(value).strip()


def _theme(entry: Mapping[str, Any]) -> str | None:
    value = entry.get("theme")
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_record(entry: Mapping[str, Any], location: str) -> ExtractedClassRecord | None:
    """Normalize one candidate entry, or return ``None`` when a required field is empty."""
    missing = [name for name in REQUIRED_FIELDS if not _text(entry, name)]
    if missing:
        logger.debug("Skipping entry missing %s: %r", ", ".join(missing), dict(entry))
        return None

    day = normalize_day(_text(entry, "day"))
    time = normalize_time(_text(entry, "time"))
    class_name = normalize_class_name(_text(entry, "className"))
    trainer = normalize_trainer_name(_text(entry, "trainer"))
    return ExtractedClassRecord(
        day=day,
        time=time,
        class_name=class_name,
        trainer=trainer,
        location=location,
        identity_key=make_identity_key(day, time, class_name, trainer, location),
        theme=_theme(entry),
    )


def assemble_records(entries: Iterable[Any], location: str) -> Sequence[ExtractedClassRecord]:
    """Build records from candidate entries, keeping the first of each identity key.

    ``location`` must already be normalized; the model output carries none.
    """
    records: list[ExtractedClassRecord] = []
    seen_keys: set[str] = set()
    skipped = 0
    for entry in entries:
        if not isinstance(entry, Mapping):
            skipped += 1
            logger.debug("Skipping non-object entry: %r", entry)
            continue
        record = build_record(entry, location)
        if record is None:
            skipped += 1
            continue
        if record.identity_key in seen_keys:
            logger.debug("Dropping duplicate %s", record.identity_key)
            continue
        seen_keys.add(record.identity_key)
        records.append(record)

    logger.info("Assembled %d records (%d entries skipped)", len(records), skipped)
    return records
