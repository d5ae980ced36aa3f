"""Turn a scale photo into a verified weigh-in reading."""

from __future__ import annotations

from .engine import extract_weight
from .images import approx_base64_bytes
from .logging import get_logger
from .models import WeightReading
from .vision import TextRecognizer

logger = get_logger(__name__)

NO_WEIGHT_ERROR = "Could not find weight reading in image. Please ensure the numbers are clearly visible."
EMPTY_IMAGE_ERROR = "No image provided."
DEFAULT_RECOGNITION_ERROR = "Unable to extract weight from image"


class ImageTooLargeError(ValueError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"image is {size} bytes, limit is {limit}")
        self.size = size
        self.limit = limit


class WeighInService:
    def __init__(self, recognizer: TextRecognizer, max_image_bytes: int) -> None:
        self.recognizer = recognizer
        self.max_image_bytes = max_image_bytes

    def parse_text(self, text: str, confidence: float | None = None) -> WeightReading:
        extraction = extract_weight(text)
        if not extraction.found:
            logger.info("weight_not_found", tokens=len(extraction.tokens))
            return WeightReading(success=False, raw_text=text, error=NO_WEIGHT_ERROR)

        logger.info(
            "weight_extracted",
            weight=extraction.weight_kg,
            origin=extraction.winner.origin.value,
        )
        return WeightReading(
            success=True,
            weight_kg=extraction.weight_kg,
            confidence=confidence,
            raw_text=text,
        )

    def process_image(self, image_base64: str) -> WeightReading:
        """Recognise the photo and extract the weight.

        Raises ImageTooLargeError for payloads over the configured limit; every
        other failure comes back as an unsuccessful reading.
        """
        if not image_base64 or not image_base64.strip():
            return WeightReading(success=False, error=EMPTY_IMAGE_ERROR)

        size = approx_base64_bytes(image_base64)
        if size > self.max_image_bytes:
            raise ImageTooLargeError(size, self.max_image_bytes)

        result = self.recognizer.recognize(image_base64)
        if not result.success:
            logger.info("recognition_failed", error=result.error)
            return WeightReading(
                success=False,
                raw_text=result.raw_text or None,
                error=result.error or DEFAULT_RECOGNITION_ERROR,
            )
        return self.parse_text(result.raw_text, confidence=result.confidence)
