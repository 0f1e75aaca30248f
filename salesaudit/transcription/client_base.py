from abc import ABC, abstractmethod

from salesaudit.ingestion.models import MediaKind


class BaseTranscriptionClient(ABC):
    """Contract for provider-specific multimodal clients."""

    @abstractmethod
    def create_media_transcription(
        self,
        *,
        model: str,
        kind: MediaKind,
        mime_type: str,
        media_base64: str,
        prompt: str,
    ) -> str:
        """Return the provider's text answer for one base64-encoded media blob."""
