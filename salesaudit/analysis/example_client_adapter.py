"""Example analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalyzerFactory.
"""

import json
from typing import ClassVar

from salesaudit.analysis.client_base import BaseAnalysisClient
from salesaudit.analysis.models import METRIC_NAMES


def _metric(score: int) -> dict[str, object]:
    return {"nota": score, "significado": "", "problema": "", "como_melhorar": ""}


class ExampleClientAdapter(BaseAnalysisClient):
    """Example adapter that returns a fixed valid audit JSON.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "resumo_executivo": {
            "score": 50,
            "classificacao": "REGULAR",
            "veredicto": "Example audit: no model was called.",
            "estatisticas": {
                "total_mensagens": 0,
                "tempo_medio_resposta": "n/a",
                "total_erros": 0,
                "chance_recuperacao": "MÉDIA",
            },
        },
        "erros": [],
        "tecnicas_nao_usadas": [],
        "metricas": {name: _metric(50) for name in METRIC_NAMES},
        "plano_recuperacao": {
            "chance": "MÉDIA",
            "motivo_chance": "Example audit.",
            "sequencia": [],
        },
        "checklist": [],
    }
    DEFAULT_REPLY: ClassVar[str] = "Example reply: no model was called."

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema
        return json.dumps(self.DEFAULT_RESPONSE, ensure_ascii=False)

    def create_chat_reply(
        self,
        *,
        model: str,
        system_prompt: str,
        messages: list[dict[str, str]],
    ) -> str:
        _ = model, system_prompt, messages
        return self.DEFAULT_REPLY
