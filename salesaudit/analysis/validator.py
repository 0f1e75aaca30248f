"""Validates the provider's parsed JSON and builds a typed AnalysisResult.

The wire format keeps the Portuguese keys the audit prompt asks for; the
dataclasses expose English attribute names.
"""

from enum import Enum
from typing import Any, TypeVar

from salesaudit.analysis.exceptions import MalformedAnalysisResponseError
from salesaudit.analysis.models import (
    METRIC_NAMES,
    AnalysisResult,
    ChecklistCategory,
    Classification,
    Correction,
    ExecutiveSummary,
    FollowUpMessage,
    Metric,
    RecoveryChance,
    RecoveryPlan,
    SalesError,
    Severity,
    Statistics,
    Technique,
)

_E = TypeVar("_E", bound=Enum)

_TOP_LEVEL_FIELDS = (
    "resumo_executivo",
    "erros",
    "tecnicas_nao_usadas",
    "metricas",
    "plano_recuperacao",
    "checklist",
)


def validate_and_build(data: dict[str, Any]) -> AnalysisResult:
    """Validate raw parsed JSON and build an AnalysisResult.

    Raises:
        MalformedAnalysisResponseError: on any missing or mistyped field.
    """
    for name in _TOP_LEVEL_FIELDS:
        if name not in data:
            raise MalformedAnalysisResponseError(f"Missing required top-level field: {name}")
    techniques = _list(data["tecnicas_nao_usadas"], "tecnicas_nao_usadas")
    return AnalysisResult(
        summary=_build_summary(_object(data["resumo_executivo"], "resumo_executivo")),
        recovery_plan=_build_recovery_plan(
            _object(data["plano_recuperacao"], "plano_recuperacao")
        ),
        errors=[
            _build_error(item, f"erros[{i}]")
            for i, item in enumerate(_list(data["erros"], "erros"))
        ],
        unused_techniques=[
            _build_technique(item, f"tecnicas_nao_usadas[{i}]")
            for i, item in enumerate(techniques)
        ],
        metrics=_build_metrics(_object(data["metricas"], "metricas")),
        checklist=[
            _build_checklist(item, f"checklist[{i}]")
            for i, item in enumerate(_list(data["checklist"], "checklist"))
        ],
    )


def _build_summary(raw: dict[str, Any]) -> ExecutiveSummary:
    stats = _object(raw.get("estatisticas"), "resumo_executivo.estatisticas")
    return ExecutiveSummary(
        score=_score(raw.get("score"), "resumo_executivo.score"),
        classification=_enum(
            Classification, raw.get("classificacao"), "resumo_executivo.classificacao"
        ),
        verdict=_string(raw.get("veredicto"), "resumo_executivo.veredicto"),
        statistics=Statistics(
            total_messages=_int(stats.get("total_mensagens"), "estatisticas.total_mensagens"),
            average_response_time=_string(
                stats.get("tempo_medio_resposta"), "estatisticas.tempo_medio_resposta"
            ),
            total_errors=_int(stats.get("total_erros"), "estatisticas.total_erros"),
            recovery_chance=_enum(
                RecoveryChance, stats.get("chance_recuperacao"), "estatisticas.chance_recuperacao"
            ),
        ),
    )


def _build_error(item: Any, path: str) -> SalesError:
    raw = _object(item, path)
    correction = _object(raw.get("correcao"), f"{path}.correcao")
    return SalesError(
        number=_int(raw.get("numero"), f"{path}.numero"),
        code=_string(raw.get("tipo"), f"{path}.tipo"),
        name=_string(raw.get("nome"), f"{path}.nome", required=True),
        severity=_enum(Severity, raw.get("gravidade"), f"{path}.gravidade"),
        message_number=_int(raw.get("mensagem_numero"), f"{path}.mensagem_numero"),
        original_message=_string(raw.get("mensagem_original"), f"{path}.mensagem_original"),
        why_wrong=_string(raw.get("por_que_erro"), f"{path}.por_que_erro"),
        correction=Correction(
            corrected_message=_string(
                correction.get("mensagem_corrigida"), f"{path}.correcao.mensagem_corrigida"
            ),
            why_it_works=_string(
                correction.get("por_que_funciona"), f"{path}.correcao.por_que_funciona"
            ),
        ),
    )


def _build_technique(item: Any, path: str) -> Technique:
    raw = _object(item, path)
    return Technique(
        name=_string(raw.get("nome"), f"{path}.nome", required=True),
        description=_string(raw.get("descricao"), f"{path}.descricao"),
        how_to_apply=_string(raw.get("como_aplicar"), f"{path}.como_aplicar"),
    )


def _build_metrics(raw: dict[str, Any]) -> dict[str, Metric]:
    metrics: dict[str, Metric] = {}
    for name in METRIC_NAMES:
        path = f"metricas.{name}"
        item = _object(raw.get(name), path)
        metrics[name] = Metric(
            score=_score(item.get("nota"), f"{path}.nota"),
            meaning=_string(item.get("significado"), f"{path}.significado"),
            problem=_string(item.get("problema"), f"{path}.problema"),
            how_to_improve=_string(item.get("como_melhorar"), f"{path}.como_melhorar"),
        )
    return metrics


def _build_recovery_plan(raw: dict[str, Any]) -> RecoveryPlan:
    sequence = []
    for i, item in enumerate(_list(raw.get("sequencia"), "plano_recuperacao.sequencia")):
        path = f"plano_recuperacao.sequencia[{i}]"
        step = _object(item, path)
        sequence.append(
            FollowUpMessage(
                number=_int(step.get("numero"), f"{path}.numero"),
                when_to_send=_string(step.get("quando_enviar"), f"{path}.quando_enviar"),
                message=_string(step.get("mensagem"), f"{path}.mensagem", required=True),
                strategy=_string(step.get("estrategia"), f"{path}.estrategia"),
                wait=_string(step.get("aguardar"), f"{path}.aguardar"),
            )
        )
    return RecoveryPlan(
        chance=_enum(RecoveryChance, raw.get("chance"), "plano_recuperacao.chance"),
        reason=_string(raw.get("motivo_chance"), "plano_recuperacao.motivo_chance"),
        sequence=sequence,
    )


def _build_checklist(entry: Any, path: str) -> ChecklistCategory:
    raw = _object(entry, path)
    items = _list(raw.get("itens"), f"{path}.itens")
    return ChecklistCategory(
        category=_string(raw.get("categoria"), f"{path}.categoria", required=True),
        items=[_string(item, f"{path}.itens[{i}]") for i, item in enumerate(items)],
    )


def _object(raw: Any, path: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise MalformedAnalysisResponseError(f"'{path}' must be an object")
    return raw


def _list(raw: Any, path: str) -> list[Any]:
    if not isinstance(raw, list):
        raise MalformedAnalysisResponseError(f"'{path}' must be a list")
    return raw


def _string(raw: Any, path: str, required: bool = False) -> str:
    if not isinstance(raw, str):
        raise MalformedAnalysisResponseError(f"'{path}' must be a string")
    if required and not raw.strip():
        raise MalformedAnalysisResponseError(f"'{path}' must be a non-empty string")
    return raw


def _int(raw: Any, path: str) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedAnalysisResponseError(f"'{path}' must be a number")
    return int(raw)


def _score(raw: Any, path: str) -> int:
    value = _int(raw, path)
    if not 0 <= value <= 100:
        raise MalformedAnalysisResponseError(f"'{path}' must be between 0 and 100, got {value}")
    return value


def _enum(enum_cls: type[_E], raw: Any, path: str) -> _E:
    try:
        return enum_cls(raw)
    except ValueError as exc:
        allowed = [member.value for member in enum_cls]
        raise MalformedAnalysisResponseError(
            f"'{path}' must be one of {allowed}, got {raw!r}"
        ) from exc
