"""Configuration loader for the WeighIn service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TypeVar

from .images import MAX_IMAGE_BYTES
from .logging import LOG_FORMATS

DEFAULT_VISION_URL = "https://vision.googleapis.com/v1/images:annotate"
DEFAULT_USER_AGENT = "weighin-ocr/1.0"
DEFAULT_MAX_IMAGE_BYTES = MAX_IMAGE_BYTES

Number = TypeVar("Number", int, float)


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is not None:
        value = value.strip()
        if value == "":
            return default
        return value
    return default


def _get_number(key: str, default: Number, cast: Callable[[str], Number], kind: str) -> Number:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return cast(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be {kind}") from exc


def _get_choice(key: str, default: str, choices: Sequence[str]) -> str:
    value = _get_env(key)
    if value is None:
        return default
    value_lower = value.lower()
    if value_lower in choices:
        return value_lower
    raise ValueError(f"Environment variable {key} must be one of {', '.join(choices)}")


@dataclass(slots=True)
class AppConfig:
    vision_api_key: Optional[str]
    vision_url: str
    http_timeout: float
    http_retries: int
    http_user_agent: str
    max_image_bytes: int
    static_text: str
    log_level: str
    log_format: str = "json"

    @property
    def uses_vision(self) -> bool:
        return bool(self.vision_api_key)


def load_config() -> AppConfig:
    return AppConfig(
        vision_api_key=_get_env("GOOGLE_VISION_API_KEY"),
        vision_url=_get_env("GOOGLE_VISION_URL", DEFAULT_VISION_URL),
        http_timeout=max(1.0, _get_number("HTTP_TIMEOUT_SECONDS", 30.0, float, "a number")),
        http_retries=max(1, _get_number("HTTP_RETRIES", 3, int, "an integer")),
        http_user_agent=_get_env("HTTP_USER_AGENT", DEFAULT_USER_AGENT),
        max_image_bytes=max(1, _get_number("MAX_IMAGE_BYTES", DEFAULT_MAX_IMAGE_BYTES, int, "an integer")),
        static_text=_get_env("OCR_STATIC_TEXT", "85.5 kg"),
        log_level=_get_env("LOG_LEVEL", "INFO").upper(),
        log_format=_get_choice("LOG_FORMAT", "json", LOG_FORMATS),
    )
