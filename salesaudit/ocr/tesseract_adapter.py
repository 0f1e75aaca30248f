import io

import pytesseract
from PIL import Image, UnidentifiedImageError

from salesaudit.ingestion.exceptions import RecognitionError
from salesaudit.logging.logger import Log
from salesaudit.ocr.base import BaseOcrEngine


class TesseractAdapter(BaseOcrEngine):
    """Recognizes text with Tesseract through pytesseract."""

    def __init__(self, language: str = "por") -> None:
        self._language = language

    def recognize(self, image_bytes: bytes) -> str:
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                image.load()
                text = pytesseract.image_to_string(image.convert("RGB"), lang=self._language)
        # TesseractNotFoundError is an OSError, so it must be handled first.
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            Log.error(f"Tesseract failed: {exc}", ocr_engine="tesseract")
            raise RecognitionError(f"tesseract failed ({exc})") from exc
        except (UnidentifiedImageError, OSError) as exc:
            Log.warning(f"Image could not be decoded for OCR: {exc}", ocr_engine="tesseract")
            raise RecognitionError(f"the image could not be read ({exc})") from exc
        return text or ""
