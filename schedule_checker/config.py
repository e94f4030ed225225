"""Central configuration for the schedule checker package."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from schedule_checker.domain.services import (
    DEFAULT_PARTITION_ORDER,
    DEFAULT_TIME_TOLERANCE_MINUTES,
    PARTITION_ORDERS,
)

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


@dataclass(slots=True, frozen=True)
class Settings:
    gemini_api_key: str | None
    gemini_model: str
    temperature: float
    max_output_tokens: int
    request_timeout_seconds: float
    time_tolerance_minutes: int
    partition_order: str
    accept_cover_trainer: bool


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_settings() -> Settings:
    partition_order = (os.getenv("SCHEDULE_PARTITION_ORDER") or DEFAULT_PARTITION_ORDER).strip().lower()
    if partition_order not in PARTITION_ORDERS:
        raise ValueError(
            f"SCHEDULE_PARTITION_ORDER must be one of {', '.join(PARTITION_ORDERS)}, got {partition_order!r}"
        )
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
        gemini_model=os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
        temperature=0.1,
        max_output_tokens=32768,
        request_timeout_seconds=_env_float("GEMINI_TIMEOUT", 60.0),
        time_tolerance_minutes=_env_int("SCHEDULE_TIME_TOLERANCE", DEFAULT_TIME_TOLERANCE_MINUTES),
        partition_order=partition_order,
        accept_cover_trainer=_env_flag("SCHEDULE_ACCEPT_COVER", False),
    )


SETTINGS = load_settings()
