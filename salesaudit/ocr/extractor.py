from salesaudit.ingestion.exceptions import InsufficientTextError, RecognitionError
from salesaudit.logging.logger import Log
from salesaudit.ocr.base import BaseOcrEngine

MIN_OCR_CHARS = 10


class ImageTextExtractor:
    """Runs OCR over an uploaded screenshot and rejects near-empty results."""

    def __init__(self, engine: BaseOcrEngine, min_chars: int = MIN_OCR_CHARS) -> None:
        self._engine = engine
        self._min_chars = min_chars

    def extract(self, image_bytes: bytes) -> str:
        """Return the recognized text verbatim.

        Raises:
            RecognitionError: if the OCR engine fails.
            InsufficientTextError: if fewer than ``min_chars`` characters remain
                after trimming.
        """
        try:
            text = self._engine.recognize(image_bytes)
        except RecognitionError as exc:
            raise RecognitionError(f"Error while processing the image (OCR): {exc}") from exc
        except Exception as exc:
            Log.error(f"OCR engine raised unexpectedly: {exc!r}")
            raise RecognitionError(f"Error while processing the image (OCR): {exc}") from exc

        recognized = len(text.strip())
        if recognized < self._min_chars:
            Log.warning(
                f"OCR recognized {recognized} chars, below the {self._min_chars} minimum"
            )
            raise InsufficientTextError(
                "Could not read enough text in the image. "
                "Try a sharper screenshot with better quality."
            )
        Log.info(f"OCR recognized {recognized} chars")
        return text
