"""Runtime wiring for CLI and service entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from .config import AppConfig, load_config
from .logging import configure_logging, get_logger
from .service import WeighInService
from .vision import GoogleVisionRecognizer, StaticTextRecognizer, TextRecognizer

logger = get_logger(__name__)


@dataclass(slots=True)
class Runtime:
    config: AppConfig
    recognizer: TextRecognizer
    service: WeighInService

    def close(self) -> None:
        self.recognizer.close()


def build_recognizer(cfg: AppConfig) -> TextRecognizer:
    if cfg.uses_vision:
        return GoogleVisionRecognizer(
            api_key=cfg.vision_api_key,
            url=cfg.vision_url,
            timeout=cfg.http_timeout,
            retries=cfg.http_retries,
            user_agent=cfg.http_user_agent,
        )
    logger.warning("vision_disabled", reason="GOOGLE_VISION_API_KEY not set")
    return StaticTextRecognizer(cfg.static_text)


def build_runtime(config: AppConfig | None = None) -> Runtime:
    cfg = config or load_config()
    configure_logging(cfg.log_level, cfg.log_format)

    recognizer = build_recognizer(cfg)
    service = WeighInService(recognizer, max_image_bytes=cfg.max_image_bytes)
    return Runtime(config=cfg, recognizer=recognizer, service=service)
