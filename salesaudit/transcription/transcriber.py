"""Adapter between archive media and the external multimodal model."""

import base64

from salesaudit.ingestion.exceptions import TranscriptionFailedError
from salesaudit.ingestion.models import MediaKind
from salesaudit.logging.logger import Log
from salesaudit.transcription.base import BaseMediaTranscriber
from salesaudit.transcription.client_base import BaseTranscriptionClient

AUDIO_PROMPT = (
    "Transcribe this WhatsApp voice note verbatim, in the language it was spoken."
)
IMAGE_PROMPT = (
    "This image was sent during a WhatsApp sales conversation. Describe it in at "
    "most three sentences and transcribe any visible text, prices or product names."
)


def media_mime_type(kind: MediaKind, extension: str) -> str:
    """MIME type declared to the provider for an archive media extension.

    Deliberately coarse: only ``mp3`` and ``png`` are told apart, every other
    audio file is sent as ``audio/ogg`` (WhatsApp voice notes are Opus in Ogg)
    and every other image as ``image/jpeg``.
    """
    ext = extension.lower().lstrip(".")
    if kind is MediaKind.AUDIO:
        return "audio/mp3" if ext == "mp3" else "audio/ogg"
    return "image/png" if ext == "png" else "image/jpeg"


class MediaTranscriber(BaseMediaTranscriber):
    """Base64-encodes media and asks the provider for a short transcription."""

    def __init__(
        self,
        *,
        client: BaseTranscriptionClient,
        image_model: str,
        audio_model: str,
    ) -> None:
        self._client = client
        self._image_model = image_model
        self._audio_model = audio_model

    def transcribe(self, data: bytes, mime_type: str, kind: MediaKind) -> str:
        if not data:
            raise TranscriptionFailedError("media file is empty")
        model = self._audio_model if kind is MediaKind.AUDIO else self._image_model
        prompt = AUDIO_PROMPT if kind is MediaKind.AUDIO else IMAGE_PROMPT
        Log.debug(f"Transcribing {kind.value} media ({len(data)} bytes, {mime_type})")
        text = self._client.create_media_transcription(
            model=model,
            kind=kind,
            mime_type=mime_type,
            media_base64=base64.b64encode(data).decode("ascii"),
            prompt=prompt,
        )
        if not text.strip():
            raise TranscriptionFailedError("provider returned an empty response")
        return text.strip()
