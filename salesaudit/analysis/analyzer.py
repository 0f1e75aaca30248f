"""AI-powered sales conversation auditor."""

import json
from pathlib import Path

from salesaudit.analysis.base import BaseAnalyzer
from salesaudit.analysis.client_base import BaseAnalysisClient
from salesaudit.analysis.exceptions import MalformedAnalysisResponseError
from salesaudit.analysis.models import AnalysisResult
from salesaudit.analysis.prompt_loader import (
    load_json_schema,
    load_prompt_template,
    load_system_prompt,
)
from salesaudit.analysis.validator import validate_and_build
from salesaudit.logging.logger import Log

MAX_ANALYSIS_CHARS = 500_000


class Analyzer(BaseAnalyzer):
    """Audits a conversation transcript using an AI provider.

    The transcript is cut to ``max_chars`` here, once, right before the
    provider call; ingestion hands over the full transcript.
    """

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.2,
        max_chars: int = MAX_ANALYSIS_CHARS,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._max_chars = max_chars
        self._system_prompt = load_system_prompt(system_prompt_path)
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    def analyze(self, text: str) -> AnalysisResult:
        """Audit the conversation and return the validated result."""
        prompt = self._build_prompt(self._truncate(text))
        Log.debug(f"Analysis prompt:\n{prompt}")

        raw_response = self._call_ai(prompt)
        Log.debug(f"AI raw response:\n{raw_response}")

        parsed = self._parse_json(raw_response)
        result = validate_and_build(parsed)

        Log.info(
            f"Analysis complete: score {result.summary.score}, {len(result.errors)} errors"
        )
        return result

    def _truncate(self, text: str) -> str:
        if len(text) <= self._max_chars:
            return text
        Log.warning(
            f"Transcript truncated from {len(text)} to {self._max_chars} chars before analysis"
        )
        return text[: self._max_chars]

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(
            conversation=text,
            json_schema=self._json_schema,
        )

    def _call_ai(self, prompt: str) -> str:
        return self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise MalformedAnalysisResponseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise MalformedAnalysisResponseError("JSON response must be an object")
        return parsed
