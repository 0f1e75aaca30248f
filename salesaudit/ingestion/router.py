import threading
from typing import ClassVar

from salesaudit.config.settings import Settings
from salesaudit.ingestion.archive_scanner import ArchiveScanner
from salesaudit.ingestion.assembler import TranscriptAssembler
from salesaudit.ingestion.exceptions import UnsupportedFormatError
from salesaudit.ingestion.models import UploadedFile
from salesaudit.logging.logger import Log
from salesaudit.ocr.extractor import ImageTextExtractor
from salesaudit.ocr.factory import OcrEngineFactory
from salesaudit.transcription.factory import TranscriberFactory


class IngestionRouter:
    """Turns one uploaded file into a single conversation transcript.

    Dispatch is decided by the declared MIME type or the file name,
    checked in this order: plain text, ZIP export, image.
    """

    ZIP_MIME_TYPES: ClassVar[frozenset[str]] = frozenset(
        {
            "application/zip",
            "application/x-zip-compressed",
            "application/x-zip",
            "multipart/x-zip",
        }
    )
    IMAGE_EXTENSIONS: ClassVar[tuple[str, ...]] = (".jpg", ".jpeg", ".png", ".bmp", ".webp")

    def __init__(
        self,
        scanner: ArchiveScanner,
        assembler: TranscriptAssembler,
        image_extractor: ImageTextExtractor,
    ) -> None:
        self._scanner = scanner
        self._assembler = assembler
        self._image_extractor = image_extractor

    def extract_text(
        self,
        file: UploadedFile,
        cancel_event: threading.Event | None = None,
    ) -> str:
        """Return the normalized transcript for ``file``.

        Raises:
            UnsupportedFormatError: if the file is not text, ZIP or image.
            IngestionError: subclasses raised by the archive or OCR paths.
        """
        mime_type = (file.mime_type or "").split(";", 1)[0].strip().lower()
        name = file.name.lower()

        if mime_type == "text/plain" or name.endswith(".txt"):
            Log.info(f"Routing '{file.name}' as plain text", file_size=len(file.data))
            return file.data.decode("utf-8", errors="replace")

        if mime_type in self.ZIP_MIME_TYPES or name.endswith(".zip"):
            Log.info(f"Routing '{file.name}' as ZIP export", file_size=len(file.data))
            return self._extract_from_archive(file.data, cancel_event)

        if mime_type.startswith("image/") or name.endswith(self.IMAGE_EXTENSIONS):
            Log.info(f"Routing '{file.name}' as image", file_size=len(file.data))
            return self._image_extractor.extract(file.data)

        declared = file.mime_type or "unknown"
        Log.warning(f"Rejected upload '{file.name}' with unsupported type {declared}")
        raise UnsupportedFormatError(
            f"Unsupported file format: {declared}. Upload a .txt, .zip or image file."
        )

    def _extract_from_archive(self, data: bytes, cancel_event: threading.Event | None) -> str:
        with self._scanner.scan(data) as result:
            primary_text = self._scanner.read_primary_text(result)
            return self._assembler.assemble(primary_text, result.media_items(), cancel_event)


def build_router(settings: Settings) -> IngestionRouter:
    """Build an IngestionRouter with all required adapters."""
    assembler = TranscriptAssembler(
        TranscriberFactory.create(settings),
        max_media=settings.max_media_items,
    )
    image_extractor = ImageTextExtractor(
        OcrEngineFactory.create(settings),
        min_chars=settings.min_ocr_chars,
    )
    return IngestionRouter(
        scanner=ArchiveScanner(),
        assembler=assembler,
        image_extractor=image_extractor,
    )
