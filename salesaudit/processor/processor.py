import threading

from salesaudit.analysis.factory import AnalyzerFactory
from salesaudit.config.settings import Settings
from salesaudit.ingestion.models import UploadedFile
from salesaudit.ingestion.router import build_router
from salesaudit.logging.logger import Log
from salesaudit.processor.models import AuditReport, source_label
from salesaudit.processor.pipeline import PipelineContext, PipelineStep
from salesaudit.processor.steps import AnalyzeStep, IngestStep


class AuditProcessor:
    """Orchestrates one audit.

    Pipeline: ingest -> analyze. The first failing step aborts the run; the
    error is logged with the upload name and re-raised to the caller.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(
        self,
        file: UploadedFile,
        cancel_event: threading.Event | None = None,
    ) -> AuditReport:
        Log.info(f"Processing upload '{file.name}' ({file.mime_type or 'unknown type'})")
        context = PipelineContext(file=file, cancel_event=cancel_event)
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                context.error_message = str(exc)
                Log.error(
                    f"Audit of '{file.name}' failed in {type(step).__name__}: {exc}",
                    step=type(step).__name__,
                )
                raise

        if context.analysis_result is None:
            raise ValueError("Pipeline finished without an analysis result")
        return AuditReport(
            file_name=file.name,
            source=source_label(file.name, file.mime_type),
            transcript=context.transcript,
            result=context.analysis_result,
        )


def build_processor(settings: Settings) -> AuditProcessor:
    """Build an AuditProcessor with all required adapters."""
    return AuditProcessor(
        steps=[
            IngestStep(build_router(settings)),
            AnalyzeStep(AnalyzerFactory.create(settings)),
        ]
    )
