"""Shared helpers for reading schedule sources."""
from __future__ import annotations

import hashlib
import mimetypes
from io import BytesIO
from pathlib import Path

import pandas as pd

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"


def ensure_bytes(source: BytesIO | Path | str | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, (Path, str)):
        return Path(source).read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def compute_file_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def guess_image_mime_type(path: Path | str) -> str:
    mime_type, _ = mimetypes.guess_type(str(path))
    if mime_type and mime_type.startswith("image/"):
        return mime_type
    return DEFAULT_IMAGE_MIME_TYPE


def is_excel_path(path: Path | str) -> bool:
    return Path(path).suffix.lower() in {".xlsx", ".xlsm"}


def pick_sheet(source: BytesIO | Path, preferred: str | None) -> str:
    sheets = pd.ExcelFile(source, engine="openpyxl").sheet_names
    if not sheets:
        raise ValueError("Workbook has no sheets")
    if not preferred:
        return sheets[0]
    if preferred in sheets:
        return preferred
    lower_map = {name.lower(): name for name in sheets}
    if preferred.lower() in lower_map:
        return lower_map[preferred.lower()]
    for name in sheets:
        if preferred.lower() in name.lower():
            return name
    return sheets[0]
