"""Identity keys for class records."""
from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")


def comparable(value: str | None) -> str:
    """Lower-cased value with every whitespace character removed."""
    if not value:
        return ""
    return _WHITESPACE.sub("", value).lower()


def make_identity_key(day: str, time: str, class_name: str, trainer: str, location: str) -> str:
    return "".join(comparable(part) for part in (day, time, class_name, trainer, location))
