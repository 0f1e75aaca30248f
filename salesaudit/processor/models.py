from dataclasses import dataclass

from salesaudit.analysis.models import AnalysisResult


def source_label(file_name: str, mime_type: str) -> str:
    """Label shown next to an audit: ``Imagem``, ``ZIP`` or ``TXT``."""
    if "image" in mime_type.lower():
        return "Imagem"
    if file_name.lower().endswith(".zip"):
        return "ZIP"
    return "TXT"


@dataclass(frozen=True)
class AuditReport:
    """Final output of one audit run."""

    file_name: str
    source: str
    transcript: str
    result: AnalysisResult

    @property
    def score(self) -> int:
        return self.result.summary.score
