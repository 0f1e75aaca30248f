from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class Classification(str, Enum):
    CRITICAL = "CRÍTICO"
    REGULAR = "REGULAR"
    GOOD = "BOM"
    EXCELLENT = "EXCELENTE"


class RecoveryChance(str, Enum):
    HIGH = "ALTA"
    MEDIUM = "MÉDIA"
    LOW = "BAIXA"


class Severity(str, Enum):
    CRITICAL = "critico"
    MEDIUM = "medio"
    MINOR = "leve"


METRIC_NAMES = (
    "rapport",
    "escuta_ativa",
    "tratamento_objecoes",
    "clareza",
    "urgencia",
    "profissionalismo",
)


@dataclass(frozen=True)
class Statistics:
    total_messages: int
    average_response_time: str
    total_errors: int
    recovery_chance: RecoveryChance


@dataclass(frozen=True)
class ExecutiveSummary:
    """Headline of the audit: 0-100 score, classification and verdict."""

    score: int
    classification: Classification
    verdict: str
    statistics: Statistics


@dataclass(frozen=True)
class Correction:
    corrected_message: str
    why_it_works: str


@dataclass(frozen=True)
class SalesError:
    """A single mistake made by the seller, with a ready-to-send correction."""

    number: int
    code: str
    name: str
    severity: Severity
    message_number: int
    original_message: str
    why_wrong: str
    correction: Correction


@dataclass(frozen=True)
class Technique:
    name: str
    description: str
    how_to_apply: str


@dataclass(frozen=True)
class Metric:
    score: int
    meaning: str
    problem: str
    how_to_improve: str


@dataclass(frozen=True)
class FollowUpMessage:
    number: int
    when_to_send: str
    message: str
    strategy: str
    wait: str


@dataclass(frozen=True)
class RecoveryPlan:
    chance: RecoveryChance
    reason: str
    sequence: list[FollowUpMessage] = field(default_factory=list)


@dataclass(frozen=True)
class ChecklistCategory:
    category: str
    items: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    """Output of the conversation audit."""

    summary: ExecutiveSummary
    recovery_plan: RecoveryPlan
    errors: list[SalesError] = field(default_factory=list)
    unused_techniques: list[Technique] = field(default_factory=list)
    metrics: dict[str, Metric] = field(default_factory=dict)
    checklist: list[ChecklistCategory] = field(default_factory=list)


@dataclass(frozen=True)
class ChatMessage:
    """One turn of the follow-up chat; ``model`` turns are assistant replies."""

    role: Literal["user", "model"]
    text: str
