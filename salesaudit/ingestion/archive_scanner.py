"""Classifies the members of an uploaded ZIP export.

WhatsApp "export chat with media" archives hold one conversation text file
(``_chat.txt`` on iOS, ``WhatsApp Chat with <name>.txt`` on Android) next to
voice notes and pictures. Archives re-zipped on macOS or Windows also carry
OS metadata that must never be mistaken for content.
"""

import io
import zipfile
import zlib
from collections.abc import Callable
from typing import ClassVar

from salesaudit.ingestion.exceptions import CorruptArchiveError, NoTranscriptFoundError
from salesaudit.ingestion.models import ArchiveEntry, EntryKind, ScanResult
from salesaudit.logging.logger import Log

OFFICIAL_EXPORT_MARKER = "_chat.txt"

# Raised by ZipFile.read on damaged, encrypted or exotically compressed members.
ENTRY_READ_ERRORS: tuple[type[Exception], ...] = (
    zipfile.BadZipFile,
    zlib.error,
    NotImplementedError,
    RuntimeError,
    OSError,
)


class ArchiveScanner:
    """Enumerates archive entries and picks the authoritative transcript."""

    TEXT_EXTENSIONS: ClassVar[frozenset[str]] = frozenset({"txt"})
    AUDIO_EXTENSIONS: ClassVar[frozenset[str]] = frozenset({"opus", "mp3", "ogg"})
    IMAGE_EXTENSIONS: ClassVar[frozenset[str]] = frozenset(
        {"jpg", "jpeg", "png", "webp", "heic"}
    )
    METADATA_DIRS: ClassVar[tuple[str, ...]] = ("__macosx/",)
    METADATA_FILES: ClassVar[frozenset[str]] = frozenset(
        {".ds_store", "thumbs.db", "desktop.ini"}
    )

    def scan(self, data: bytes) -> ScanResult:
        """Open ``data`` as a ZIP archive and classify its entries.

        Raises:
            CorruptArchiveError: if the bytes are not a readable ZIP archive.
            NoTranscriptFoundError: if no conversation text file is present.
        """
        archive = self._open(data)
        entries = [
            ArchiveEntry(
                path=info.filename,
                kind=self.classify(info.filename),
                reader=self._make_reader(archive, info),
            )
            for info in archive.infolist()
            if not info.is_dir() and not self.is_metadata(info.filename)
        ]
        primary = self._select_primary(entries)
        if primary is None:
            archive.close()
            raise NoTranscriptFoundError(
                "No conversation text file (.txt) was found inside the ZIP archive."
            )
        Log.info(
            f"Scanned archive: {len(entries)} entries, primary transcript '{primary.path}'",
            text_candidates=self._count(entries, EntryKind.PRIMARY_TEXT),
            audio_items=self._count(entries, EntryKind.AUDIO_MEDIA),
            image_items=self._count(entries, EntryKind.IMAGE_MEDIA),
        )
        return ScanResult(entries=entries, primary=primary, archive=archive)

    def classify(self, path: str) -> EntryKind:
        _, dot, ext = path.lower().rpartition(".")
        if not dot:
            return EntryKind.IGNORED
        if ext in self.TEXT_EXTENSIONS:
            return EntryKind.PRIMARY_TEXT
        if ext in self.AUDIO_EXTENSIONS:
            return EntryKind.AUDIO_MEDIA
        if ext in self.IMAGE_EXTENSIONS:
            return EntryKind.IMAGE_MEDIA
        return EntryKind.IGNORED

    def is_metadata(self, path: str) -> bool:
        lowered = path.lower()
        if lowered.startswith(self.METADATA_DIRS):
            return True
        basename = lowered.rstrip("/").rsplit("/", 1)[-1]
        return basename in self.METADATA_FILES or basename.startswith("._")

    def read_primary_text(self, result: ScanResult) -> str:
        """Decode the chosen transcript; blank transcripts count as missing."""
        try:
            text = result.primary.read().decode("utf-8", errors="replace")
        except ENTRY_READ_ERRORS as exc:
            raise CorruptArchiveError(
                f"Could not read '{result.primary.path}' from the ZIP archive: {exc}"
            ) from exc
        if not text.strip():
            raise NoTranscriptFoundError(
                f"The conversation file '{result.primary.path}' in the ZIP archive is empty."
            )
        return text

    @staticmethod
    def _open(data: bytes) -> zipfile.ZipFile:
        try:
            return zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, OSError) as exc:
            raise CorruptArchiveError(f"Could not open the ZIP archive: {exc}") from exc

    @staticmethod
    def _make_reader(archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> Callable[[], bytes]:
        return lambda: archive.read(info)

    @staticmethod
    def _select_primary(entries: list[ArchiveEntry]) -> ArchiveEntry | None:
        candidates = [e for e in entries if e.kind is EntryKind.PRIMARY_TEXT]
        for candidate in candidates:
            if OFFICIAL_EXPORT_MARKER in candidate.path.lower():
                return candidate
        # First candidate in enumeration order wins when there is no official export.
        return candidates[0] if candidates else None

    @staticmethod
    def _count(entries: list[ArchiveEntry], kind: EntryKind) -> int:
        return sum(1 for e in entries if e.kind is kind)
