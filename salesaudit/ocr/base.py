from abc import ABC, abstractmethod


class BaseOcrEngine(ABC):
    """Contract for all OCR adapters."""

    @abstractmethod
    def recognize(self, image_bytes: bytes) -> str:
        """Recognize the text of a single image.

        Args:
            image_bytes: Raw image file content (PNG, JPEG, BMP, WebP).

        Returns:
            Recognized text, untrimmed.

        Raises:
            RecognitionError: if the image cannot be decoded or the engine fails.
        """
