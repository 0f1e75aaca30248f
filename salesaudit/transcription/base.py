from abc import ABC, abstractmethod

from salesaudit.ingestion.models import MediaKind


class BaseMediaTranscriber(ABC):
    """Contract for turning one embedded media blob into text."""

    @abstractmethod
    def transcribe(self, data: bytes, mime_type: str, kind: MediaKind) -> str:
        """Transcribe audio or describe an image.

        Args:
            data: Raw media bytes read from the archive.
            mime_type: MIME type declared to the provider.
            kind: Whether the blob is audio or an image.

        Returns:
            Short free-text transcription or description.

        Raises:
            TranscriptionFailedError: on any failure for this item.
        """
