from salesaudit.analysis.base import BaseAnalyzer
from salesaudit.ingestion.exceptions import NoTranscriptFoundError
from salesaudit.ingestion.router import IngestionRouter
from salesaudit.logging.logger import Log
from salesaudit.processor.pipeline import PipelineContext, PipelineStep


class IngestStep(PipelineStep):
    def __init__(self, router: IngestionRouter) -> None:
        self._router = router

    def run(self, context: PipelineContext) -> PipelineContext:
        context.transcript = self._router.extract_text(context.file, context.cancel_event)
        Log.info(
            f"Ingested '{context.file.name}': {len(context.transcript)} chars of transcript"
        )
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, analyzer: BaseAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.transcript.strip():
            raise NoTranscriptFoundError(
                f"The conversation in '{context.file.name}' is empty. Nothing to analyze."
            )
        context.analysis_result = self._analyzer.analyze(context.transcript)
        return context
