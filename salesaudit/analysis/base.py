from abc import ABC, abstractmethod

from salesaudit.analysis.models import AnalysisResult


class BaseAnalyzer(ABC):
    """Contract for all conversation analysis adapters."""

    @abstractmethod
    def analyze(self, text: str) -> AnalysisResult:
        """Audit a composite conversation transcript.

        Args:
            text: Transcript produced by the ingestion pipeline.

        Returns:
            AnalysisResult with summary, errors, metrics and recovery plan.

        Raises:
            AnalysisError: on any failure.
        """
