import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass

from salesaudit.analysis.models import AnalysisResult
from salesaudit.ingestion.models import UploadedFile


@dataclass(slots=True)
class PipelineContext:
    file: UploadedFile
    cancel_event: threading.Event | None = None
    transcript: str = ""
    analysis_result: AnalysisResult | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
