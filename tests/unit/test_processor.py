from unittest.mock import MagicMock

import pytest

from salesaudit.analysis.example_client_adapter import ExampleClientAdapter
from salesaudit.analysis.validator import validate_and_build
from salesaudit.ingestion.exceptions import NoTranscriptFoundError, UnsupportedFormatError
from salesaudit.ingestion.models import UploadedFile
from salesaudit.ingestion.router import IngestionRouter
from salesaudit.processor.models import source_label
from salesaudit.processor.processor import AuditProcessor, build_processor
from salesaudit.processor.steps import AnalyzeStep, IngestStep


def _make_processor() -> tuple[AuditProcessor, MagicMock, MagicMock]:
    router = MagicMock(spec=IngestionRouter)
    analyzer = MagicMock()
    router.extract_text.return_value = "Cliente: oi"
    analyzer.analyze.return_value = validate_and_build(
        dict(ExampleClientAdapter.DEFAULT_RESPONSE)
    )
    processor = AuditProcessor(steps=[IngestStep(router), AnalyzeStep(analyzer)])
    return processor, router, analyzer


class TestAuditProcessor:
    def test_runs_ingest_then_analysis(self) -> None:
        processor, router, analyzer = _make_processor()
        upload = UploadedFile(data=b"Cliente: oi", mime_type="text/plain", name="c.txt")

        report = processor.process(upload)

        router.extract_text.assert_called_once_with(upload, None)
        analyzer.analyze.assert_called_once_with("Cliente: oi")
        assert report.file_name == "c.txt"
        assert report.source == "TXT"
        assert report.transcript == "Cliente: oi"
        assert report.score == 50

    def test_reraises_ingestion_failure_without_analysis(self) -> None:
        processor, router, analyzer = _make_processor()
        router.extract_text.side_effect = UnsupportedFormatError("Unsupported file format: x")
        upload = UploadedFile(data=b"", mime_type="application/pdf", name="x.pdf")

        with pytest.raises(UnsupportedFormatError, match="Unsupported"):
            processor.process(upload)

        analyzer.analyze.assert_not_called()

    @pytest.mark.parametrize("transcript", ["", "  \n\t "])
    def test_blank_transcript_is_not_analyzed(self, transcript: str) -> None:
        processor, router, analyzer = _make_processor()
        router.extract_text.return_value = transcript
        upload = UploadedFile(data=transcript.encode(), mime_type="text/plain", name="empty.txt")

        with pytest.raises(NoTranscriptFoundError, match="'empty.txt' is empty"):
            processor.process(upload)

        analyzer.analyze.assert_not_called()


class TestBuildProcessor:
    def test_end_to_end_with_example_providers(self, whatsapp_export_bytes: bytes) -> None:
        settings = MagicMock(
            transcription_provider="example",
            analysis_provider="example",
            max_media_items=8,
            min_ocr_chars=10,
            ocr_engine="tesseract",
            ocr_language="por",
            max_analysis_chars=500_000,
        )
        upload = UploadedFile(
            data=whatsapp_export_bytes, mime_type="application/zip", name="e.zip"
        )

        report = build_processor(settings).process(upload)

        assert report.source == "ZIP"
        transcript = report.transcript
        assert "[Audio: PTT-20240201-WA0001.opus]\nExample voice note (audio/ogg" in transcript
        assert "[Image: IMG-20240201-WA0002.jpg]\nExample image (image/jpeg" in transcript
        assert "[Audio: PTT-20240201-WA0003.mp3]\nExample voice note (audio/mp3" in transcript


class TestSourceLabel:
    def test_labels(self) -> None:
        assert source_label("print.png", "image/png") == "Imagem"
        assert source_label("export.zip", "application/zip") == "ZIP"
        assert source_label("chat.txt", "text/plain") == "TXT"
