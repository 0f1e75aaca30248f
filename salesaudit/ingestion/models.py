import zipfile
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum


class EntryKind(str, Enum):
    PRIMARY_TEXT = "primary_text"
    AUDIO_MEDIA = "audio_media"
    IMAGE_MEDIA = "image_media"
    IGNORED = "ignored"


class MediaKind(str, Enum):
    AUDIO = "audio"
    IMAGE = "image"


@dataclass(frozen=True)
class UploadedFile:
    """One user upload: raw bytes plus the declared MIME type and file name."""

    data: bytes
    mime_type: str
    name: str


@dataclass(frozen=True)
class ArchiveEntry:
    """A classified archive member whose bytes are read on demand."""

    path: str
    kind: EntryKind
    reader: Callable[[], bytes] = field(repr=False, compare=False)

    @property
    def extension(self) -> str:
        _, dot, ext = self.path.rpartition(".")
        return ext.lower() if dot else ""

    @property
    def basename(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    def read(self) -> bytes:
        return self.reader()


@dataclass(frozen=True)
class MediaItem:
    """A processable audio or image entry of an archive."""

    name: str
    kind: MediaKind
    extension: str
    entry: ArchiveEntry = field(repr=False)

    @classmethod
    def from_entry(cls, entry: ArchiveEntry) -> "MediaItem":
        kind = MediaKind.AUDIO if entry.kind is EntryKind.AUDIO_MEDIA else MediaKind.IMAGE
        return cls(name=entry.basename, kind=kind, extension=entry.extension, entry=entry)

    def read(self) -> bytes:
        return self.entry.read()


@dataclass(frozen=True)
class TranscriptionSuccess:
    text: str


@dataclass(frozen=True)
class TranscriptionFailure:
    reason: str


TranscriptionOutcome = TranscriptionSuccess | TranscriptionFailure


@dataclass(frozen=True)
class ScanResult:
    """Output of the archive scanner.

    ``entries`` keeps archive enumeration order; ``primary`` is the single
    authoritative conversation export chosen among the text candidates.
    Entries read from ``archive`` lazily, so use the result as a context
    manager and read everything before it closes.
    """

    entries: list[ArchiveEntry]
    primary: ArchiveEntry
    archive: zipfile.ZipFile | None = field(default=None, repr=False, compare=False)

    def __enter__(self) -> "ScanResult":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self.archive is not None:
            self.archive.close()

    def media_items(self) -> list[MediaItem]:
        return list(self._iter_media())

    def _iter_media(self) -> Iterator[MediaItem]:
        for entry in self.entries:
            if entry.kind in (EntryKind.AUDIO_MEDIA, EntryKind.IMAGE_MEDIA):
                yield MediaItem.from_entry(entry)
