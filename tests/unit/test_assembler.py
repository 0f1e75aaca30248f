import threading
from unittest.mock import MagicMock

import pytest

from salesaudit.ingestion.assembler import MEDIA_SECTION_HEADER, TranscriptAssembler
from salesaudit.ingestion.exceptions import IngestionCancelledError, TranscriptionFailedError
from salesaudit.ingestion.models import ArchiveEntry, EntryKind, MediaItem, MediaKind


def _make_item(name: str, data: bytes = b"media") -> MediaItem:
    ext = name.rsplit(".", 1)[-1]
    kind = EntryKind.AUDIO_MEDIA if ext in {"opus", "mp3", "ogg"} else EntryKind.IMAGE_MEDIA
    entry = ArchiveEntry(path=name, kind=kind, reader=lambda: data)
    return MediaItem.from_entry(entry)


def _echo_transcriber() -> MagicMock:
    transcriber = MagicMock()
    transcriber.transcribe.side_effect = lambda data, mime, kind: f"text of {data.decode()}"
    return transcriber


class TestAssembleWithoutMedia:
    def test_returns_primary_text_unchanged(self) -> None:
        transcriber = MagicMock()
        assembler = TranscriptAssembler(transcriber)
        assert assembler.assemble("chat", []) == "chat"
        transcriber.transcribe.assert_not_called()


class TestAssembleBlocks:
    def test_appends_header_and_blocks_in_order(self) -> None:
        items = [_make_item("PTT-1.opus", b"one"), _make_item("IMG-2.jpg", b"two")]
        result = TranscriptAssembler(_echo_transcriber()).assemble("chat", items)
        assert result == (
            "chat"
            + MEDIA_SECTION_HEADER
            + "[Audio: PTT-1.opus]\ntext of one\n\n[Image: IMG-2.jpg]\ntext of two"
        )

    def test_passes_inferred_mime_types(self) -> None:
        transcriber = _echo_transcriber()
        items = [
            _make_item("a.opus"),
            _make_item("b.mp3"),
            _make_item("c.png"),
            _make_item("d.webp"),
        ]
        TranscriptAssembler(transcriber).assemble("chat", items)
        calls = [(c.args[1], c.args[2]) for c in transcriber.transcribe.call_args_list]
        assert calls == [
            ("audio/ogg", MediaKind.AUDIO),
            ("audio/mp3", MediaKind.AUDIO),
            ("image/png", MediaKind.IMAGE),
            ("image/jpeg", MediaKind.IMAGE),
        ]

    def test_is_deterministic(self) -> None:
        items = [_make_item(f"IMG-{i}.jpg", str(i).encode()) for i in range(4)]
        assembler = TranscriptAssembler(_echo_transcriber())
        assert assembler.assemble("chat", items) == assembler.assemble("chat", items)


class TestPartialFailure:
    def test_failed_item_becomes_failure_block(self) -> None:
        transcriber = MagicMock()
        transcriber.transcribe.side_effect = [
            "first",
            TranscriptionFailedError("provider API error: 500"),
            "third",
        ]
        items = [_make_item("a.opus"), _make_item("b.jpg"), _make_item("c.mp3")]

        result = TranscriptAssembler(transcriber).assemble("chat", items)

        assert "[Audio: a.opus]\nfirst" in result
        assert "[Image: b.jpg]\n[transcription failed: provider API error: 500]" in result
        assert "[Audio: c.mp3]\nthird" in result
        assert transcriber.transcribe.call_count == 3

    def test_unexpected_exception_is_contained(self) -> None:
        transcriber = MagicMock()
        transcriber.transcribe.side_effect = [RuntimeError(), "ok"]
        items = [_make_item("a.jpg"), _make_item("b.jpg")]

        result = TranscriptAssembler(transcriber).assemble("chat", items)

        assert "[transcription failed: RuntimeError]" in result
        assert result.endswith("[Image: b.jpg]\nok")

    def test_unreadable_entry_becomes_failure_block(self) -> None:
        def broken() -> bytes:
            raise OSError("Bad CRC-32")

        entry = ArchiveEntry(path="a.opus", kind=EntryKind.AUDIO_MEDIA, reader=broken)
        transcriber = _echo_transcriber()

        result = TranscriptAssembler(transcriber).assemble("chat", [MediaItem.from_entry(entry)])

        assert "[Audio: a.opus]\n[transcription failed: Bad CRC-32]" in result
        transcriber.transcribe.assert_not_called()


class TestMediaBudget:
    def test_transcribes_first_eight_of_ten(self) -> None:
        transcriber = _echo_transcriber()
        items = [_make_item(f"IMG-{i}.jpg", str(i).encode()) for i in range(10)]

        result = TranscriptAssembler(transcriber).assemble("chat", items)

        transcribed = [c.args[0] for c in transcriber.transcribe.call_args_list]
        assert transcribed == [str(i).encode() for i in range(8)]
        assert "IMG-8.jpg" not in result
        assert result.count("not transcribed") == 1
        assert result.endswith(
            "[2 more media files were not transcribed: the limit is 8 per conversation]"
        )

    def test_exactly_budget_has_no_notice(self) -> None:
        items = [_make_item(f"IMG-{i}.jpg") for i in range(8)]
        result = TranscriptAssembler(_echo_transcriber()).assemble("chat", items)
        assert "not transcribed" not in result

    def test_custom_budget_and_singular_notice(self) -> None:
        items = [_make_item(f"IMG-{i}.jpg") for i in range(3)]
        result = TranscriptAssembler(_echo_transcriber(), max_media=2).assemble("chat", items)
        assert result.endswith(
            "[1 more media file was not transcribed: the limit is 2 per conversation]"
        )


class TestCancellation:
    def test_stops_before_next_item_when_cancelled(self) -> None:
        cancel = threading.Event()
        transcriber = MagicMock()

        def transcribe_then_cancel(data: bytes, mime: str, kind: MediaKind) -> str:
            cancel.set()
            return "done"

        transcriber.transcribe.side_effect = transcribe_then_cancel
        items = [_make_item("a.jpg"), _make_item("b.jpg")]

        with pytest.raises(IngestionCancelledError):
            TranscriptAssembler(transcriber).assemble("chat", items, cancel)

        assert transcriber.transcribe.call_count == 1
