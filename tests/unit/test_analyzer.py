"""Tests for the Analyzer (AI-powered sales audit)."""

import json
from unittest.mock import MagicMock

import pytest

from salesaudit.analysis.analyzer import MAX_ANALYSIS_CHARS, Analyzer
from salesaudit.analysis.example_client_adapter import ExampleClientAdapter
from salesaudit.analysis.exceptions import AnalysisNetworkError, MalformedAnalysisResponseError


def _valid_json_response() -> str:
    return json.dumps(ExampleClientAdapter.DEFAULT_RESPONSE, ensure_ascii=False)


def _make_analyzer(client: MagicMock, **kwargs: object) -> Analyzer:
    return Analyzer(client=client, model="test-model", **kwargs)  # type: ignore[arg-type]


def _client_returning(content: str) -> MagicMock:
    client = MagicMock()
    client.create_chat_completion.return_value = content
    return client


class TestAnalyzeSuccess:
    def test_returns_analysis_result(self) -> None:
        analyzer = _make_analyzer(_client_returning(_valid_json_response()))
        result = analyzer.analyze("Cliente: oi")
        assert result.summary.score == 50
        assert result.errors == []

    def test_passes_conversation_and_schema_to_prompt(self) -> None:
        client = _client_returning(_valid_json_response())
        _make_analyzer(client).analyze("Cliente: quanto custa?")
        kwargs = client.create_chat_completion.call_args.kwargs
        assert "Cliente: quanto custa?" in kwargs["user_prompt"]
        assert '"resumo_executivo"' in kwargs["user_prompt"]
        assert kwargs["json_schema"]["type"] == "object"
        assert "FISCAL DE VENDA" in kwargs["system_prompt"]
        assert kwargs["model"] == "test-model"

    def test_conversation_with_braces_is_kept_literal(self) -> None:
        client = _client_returning(_valid_json_response())
        _make_analyzer(client).analyze("Vendedor: {cupom} 10%")
        prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "Vendedor: {cupom} 10%" in prompt

    def test_strips_markdown_code_fence(self) -> None:
        fenced = f"```json\n{_valid_json_response()}\n```"
        result = _make_analyzer(_client_returning(fenced)).analyze("text")
        assert result.summary.score == 50

    def test_clamps_temperature(self) -> None:
        client = _client_returning(_valid_json_response())
        _make_analyzer(client, temperature=3.0).analyze("text")
        assert client.create_chat_completion.call_args.kwargs["temperature"] == 1.0


class TestTruncation:
    def test_default_limit(self) -> None:
        assert MAX_ANALYSIS_CHARS == 500_000

    def test_truncates_once_at_boundary(self) -> None:
        client = _client_returning(_valid_json_response())
        _make_analyzer(client, max_chars=10).analyze("X" * 10 + "Z" * 5)
        prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "X" * 10 in prompt
        assert "XZ" not in prompt

    def test_short_text_is_untouched(self) -> None:
        client = _client_returning(_valid_json_response())
        _make_analyzer(client, max_chars=10).analyze("X" * 10)
        assert "X" * 10 in client.create_chat_completion.call_args.kwargs["user_prompt"]


class TestAnalyzeFailures:
    def test_invalid_json(self) -> None:
        analyzer = _make_analyzer(_client_returning("not json"))
        with pytest.raises(MalformedAnalysisResponseError, match="Invalid JSON"):
            analyzer.analyze("text")

    def test_json_array_is_rejected(self) -> None:
        analyzer = _make_analyzer(_client_returning("[]"))
        with pytest.raises(MalformedAnalysisResponseError, match="must be an object"):
            analyzer.analyze("text")

    def test_missing_fields(self) -> None:
        analyzer = _make_analyzer(_client_returning('{"resumo_executivo": {}}'))
        with pytest.raises(MalformedAnalysisResponseError, match="Missing required"):
            analyzer.analyze("text")

    def test_network_error_propagates(self) -> None:
        client = MagicMock()
        client.create_chat_completion.side_effect = AnalysisNetworkError("down")
        with pytest.raises(AnalysisNetworkError):
            _make_analyzer(client).analyze("text")
