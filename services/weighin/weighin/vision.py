"""Text recognition clients for scale photos."""

from __future__ import annotations

import threading
import time
from typing import Any, Optional, Protocol

import httpx

from .images import strip_data_url
from .logging import get_logger
from .models import RecognitionResult

logger = get_logger(__name__)

NO_TEXT_ERROR = "No text detected in image. Please ensure the scale display is clearly visible."
PROVIDER_ERROR = "Failed to process image with OCR service. Please try again."
DEFAULT_CONFIDENCE = 0.9


class RecognitionError(RuntimeError):
    """Raised when the recognition provider rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TextRecognizer(Protocol):
    def recognize(self, image_base64: str) -> RecognitionResult:
        ...

    def close(self) -> None:
        ...


class StaticTextRecognizer:
    """Development recognizer that answers every photo with fixed text."""

    def __init__(self, text: str, confidence: float = DEFAULT_CONFIDENCE) -> None:
        self.text = text
        self.confidence = confidence

    def recognize(self, image_base64: str) -> RecognitionResult:
        if not self.text.strip():
            return RecognitionResult(success=False, error=NO_TEXT_ERROR)
        return RecognitionResult(success=True, raw_text=self.text, confidence=self.confidence)

    def close(self) -> None:
        return None


class GoogleVisionRecognizer:
    """Calls the Google Vision images:annotate endpoint with TEXT_DETECTION."""

    def __init__(
        self,
        api_key: str,
        url: str,
        timeout: float,
        retries: int,
        user_agent: str,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.retries = max(1, retries)
        self._client = httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            transport=transport,
        )
        self._lock = threading.Lock()

    def close(self) -> None:
        with self._lock:
            self._client.close()

    def recognize(self, image_base64: str) -> RecognitionResult:
        payload = {
            "requests": [
                {
                    "image": {"content": strip_data_url(image_base64)},
                    "features": [{"type": "TEXT_DETECTION"}],
                }
            ]
        }
        try:
            data = self._post(payload)
        except (RecognitionError, httpx.HTTPError, ValueError) as exc:
            logger.error("vision_request_failed", error=str(exc))
            return RecognitionResult(success=False, error=PROVIDER_ERROR)
        return _parse_annotations(data)

    def _post(self, payload: dict) -> dict:
        for attempt in range(1, self.retries + 1):
            try:
                with self._lock:
                    response = self._client.post(self.url, params={"key": self.api_key}, json=payload)
                if 400 <= response.status_code < 500:
                    raise RecognitionError(
                        f"vision request rejected with status {response.status_code}",
                        status_code=response.status_code,
                    )
                response.raise_for_status()
                return response.json()
            except (httpx.TransportError, httpx.HTTPStatusError) as exc:
                logger.warning(
                    "vision_retry",
                    attempt=attempt,
                    retries=self.retries,
                    error=str(exc),
                )
                if attempt == self.retries:
                    raise
                backoff = min(10.0, 2 ** (attempt - 1))
                time.sleep(backoff)
        raise RecognitionError("vision request exhausted retries")


def _parse_annotations(data: Any) -> RecognitionResult:
    responses = data.get("responses") if isinstance(data, dict) else None
    if responses is None or responses == []:
        return RecognitionResult(success=False, error=NO_TEXT_ERROR)
    if not isinstance(responses, list) or not isinstance(responses[0], dict):
        logger.error("vision_response_malformed", field="responses")
        return RecognitionResult(success=False, error=PROVIDER_ERROR)
    first = responses[0]

    if first.get("error"):
        logger.error("vision_response_error", error=first["error"])
        return RecognitionResult(success=False, error=PROVIDER_ERROR)

    annotations = first.get("textAnnotations") or []
    if not annotations:
        return RecognitionResult(success=False, error=NO_TEXT_ERROR)
    if not isinstance(annotations, list) or not isinstance(annotations[0], dict):
        logger.error("vision_response_malformed", field="textAnnotations")
        return RecognitionResult(success=False, error=PROVIDER_ERROR)

    text = annotations[0].get("description") or ""
    if not isinstance(text, str):
        logger.error("vision_response_malformed", field="description")
        return RecognitionResult(success=False, error=PROVIDER_ERROR)
    try:
        confidence = float(annotations[0].get("confidence") or DEFAULT_CONFIDENCE)
    except (TypeError, ValueError):
        confidence = DEFAULT_CONFIDENCE
    return RecognitionResult(success=True, raw_text=text, confidence=confidence)
