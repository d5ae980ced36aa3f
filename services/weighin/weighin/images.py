"""Helpers for base64-encoded scale photos."""

from __future__ import annotations

import base64
import re
from pathlib import Path

__all__ = ["MAX_IMAGE_BYTES", "strip_data_url", "approx_base64_bytes", "encode_image"]

MAX_IMAGE_BYTES = 10 * 1024 * 1024

_DATA_URL_PREFIX = re.compile(r"^data:image/[\w.+-]+;base64,", re.IGNORECASE)
_NON_BASE64 = re.compile(r"[^A-Za-z0-9+/=]")


def strip_data_url(image_base64: str) -> str:
    """Remove a leading 'data:image/...;base64,' prefix if present."""
    return _DATA_URL_PREFIX.sub("", image_base64.strip())


def approx_base64_bytes(image_base64: str) -> int:
    """Decoded size of a base64 payload without decoding it."""
    raw = image_base64.split(",", 1)[1] if "," in image_base64 else image_base64
    raw = _NON_BASE64.sub("", raw)
    padding = 2 if raw.endswith("==") else 1 if raw.endswith("=") else 0
    return max(0, len(raw) * 3 // 4 - padding)


def encode_image(path: Path) -> str:
    return base64.b64encode(path.read_bytes()).decode("ascii")
