import base64

import httpx
import openai

from salesaudit.ingestion.exceptions import TranscriptionFailedError
from salesaudit.ingestion.models import MediaKind
from salesaudit.transcription.client_base import BaseTranscriptionClient

_AUDIO_FILENAMES = {
    "audio/mp3": "voice-note.mp3",
    "audio/ogg": "voice-note.ogg",
}


class OpenAIClientAdapter(BaseTranscriptionClient):
    """Media client built on the OpenAI-compatible audio and chat APIs.

    Audio goes through the transcription endpoint, images through a chat
    completion with an inline data URL. Retries are disabled so the client
    timeout bounds every single call.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_media_transcription(
        self,
        *,
        model: str,
        kind: MediaKind,
        mime_type: str,
        media_base64: str,
        prompt: str,
    ) -> str:
        try:
            if kind is MediaKind.AUDIO:
                content = self._transcribe_audio(model, mime_type, media_base64, prompt)
            else:
                content = self._describe_image(model, mime_type, media_base64, prompt)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise TranscriptionFailedError(f"provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise TranscriptionFailedError(f"provider API error: {exc}") from exc

        if not content or not content.strip():
            raise TranscriptionFailedError("provider returned an empty response")
        return content.strip()

    def _transcribe_audio(
        self, model: str, mime_type: str, media_base64: str, prompt: str
    ) -> str | None:
        filename = _AUDIO_FILENAMES.get(mime_type, "voice-note.ogg")
        response = self._client.audio.transcriptions.create(
            model=model,
            file=(filename, base64.b64decode(media_base64), mime_type),
            prompt=prompt,
        )
        return response.text

    def _describe_image(
        self, model: str, mime_type: str, media_base64: str, prompt: str
    ) -> str | None:
        response = self._client.chat.completions.create(
            model=model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {
                            "type": "image_url",
                            "image_url": {"url": f"data:{mime_type};base64,{media_base64}"},
                        },
                    ],
                }
            ],
        )
        if not response.choices:
            return None
        return response.choices[0].message.content
