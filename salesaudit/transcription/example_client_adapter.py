"""Offline transcription client.

Selected with ``TRANSCRIPTION_PROVIDER=example``; makes no network calls and
answers deterministically, which keeps local runs and tests reproducible.
"""

import base64
import hashlib

from salesaudit.ingestion.models import MediaKind
from salesaudit.transcription.client_base import BaseTranscriptionClient


class ExampleClientAdapter(BaseTranscriptionClient):
    """Returns a fixed description derived from the media digest."""

    def create_media_transcription(
        self,
        *,
        model: str,
        kind: MediaKind,
        mime_type: str,
        media_base64: str,
        prompt: str,
    ) -> str:
        _ = model, prompt
        digest = hashlib.sha256(base64.b64decode(media_base64)).hexdigest()[:12]
        label = "voice note" if kind is MediaKind.AUDIO else "image"
        return f"Example {label} ({mime_type}, sha256 {digest})"
