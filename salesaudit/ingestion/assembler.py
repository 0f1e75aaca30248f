"""Builds the composite transcript for a scanned archive.

The composite transcript is the conversation export followed by one block
per transcribed media file::

    <primary text>

    ===== MEDIA TRANSCRIPTIONS =====

    [Audio: PTT-20240101-WA0001.opus]
    Hi, is the blue model still available?

    [Image: IMG-20240101-WA0002.jpg]
    [transcription failed: provider API error: ...]

    [2 more media files were not transcribed: the limit is 8 per conversation]

Media is processed one item at a time in archive order, so two runs over the
same archive produce identical output.
"""

import threading
from collections.abc import Sequence

from salesaudit.ingestion.exceptions import IngestionCancelledError
from salesaudit.ingestion.models import (
    MediaItem,
    MediaKind,
    TranscriptionFailure,
    TranscriptionOutcome,
    TranscriptionSuccess,
)
from salesaudit.logging.logger import Log
from salesaudit.transcription.base import BaseMediaTranscriber
from salesaudit.transcription.transcriber import media_mime_type

MAX_MEDIA = 8
MEDIA_SECTION_HEADER = "\n\n===== MEDIA TRANSCRIPTIONS =====\n\n"

_KIND_LABELS = {MediaKind.AUDIO: "Audio", MediaKind.IMAGE: "Image"}


class TranscriptAssembler:
    """Combines the primary transcript with per-media transcriptions."""

    def __init__(self, transcriber: BaseMediaTranscriber, max_media: int = MAX_MEDIA) -> None:
        self._transcriber = transcriber
        self._max_media = max_media

    def assemble(
        self,
        primary_text: str,
        media_items: Sequence[MediaItem],
        cancel_event: threading.Event | None = None,
    ) -> str:
        """Return the composite transcript.

        Individual media failures become failure blocks; the only exception
        this method raises is IngestionCancelledError, when ``cancel_event``
        is set before the next item starts.
        """
        if not media_items:
            return primary_text

        selected = list(media_items[: self._max_media])
        skipped = len(media_items) - len(selected)

        blocks: list[str] = []
        for index, item in enumerate(selected, start=1):
            if cancel_event is not None and cancel_event.is_set():
                Log.info(f"Ingestion cancelled before media {index}/{len(selected)}")
                raise IngestionCancelledError("The upload was cancelled before it finished.")
            outcome = self._transcribe(item)
            blocks.append(self._format_block(item, outcome))

        if skipped > 0:
            Log.info(
                f"Media budget reached: {skipped} of {len(media_items)} media files skipped",
                max_media=self._max_media,
            )
            blocks.append(self._skip_notice(skipped))

        return primary_text + MEDIA_SECTION_HEADER + "\n\n".join(blocks)

    def _transcribe(self, item: MediaItem) -> TranscriptionOutcome:
        mime_type = media_mime_type(item.kind, item.extension)
        try:
            text = self._transcriber.transcribe(item.read(), mime_type, item.kind)
        except Exception as exc:  # noqa: BLE001 - every media fault becomes a failure block
            reason = str(exc) or type(exc).__name__
            Log.warning(
                f"Could not transcribe media '{item.name}': {reason}",
                media_kind=item.kind.value,
                mime_type=mime_type,
            )
            return TranscriptionFailure(reason=reason)
        Log.debug(f"Transcribed media '{item.name}' ({len(text)} chars)")
        return TranscriptionSuccess(text=text)

    @staticmethod
    def _format_block(item: MediaItem, outcome: TranscriptionOutcome) -> str:
        header = f"[{_KIND_LABELS[item.kind]}: {item.name}]"
        if isinstance(outcome, TranscriptionSuccess):
            return f"{header}\n{outcome.text}"
        return f"{header}\n[transcription failed: {outcome.reason}]"

    def _skip_notice(self, skipped: int) -> str:
        noun = "file was" if skipped == 1 else "files were"
        return (
            f"[{skipped} more media {noun} not transcribed: "
            f"the limit is {self._max_media} per conversation]"
        )
