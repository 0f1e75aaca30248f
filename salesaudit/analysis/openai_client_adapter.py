from typing import Any

import httpx
import openai

from salesaudit.analysis.client_base import BaseAnalysisClient
from salesaudit.analysis.exceptions import AnalysisError, AnalysisNetworkError


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis AI client adapter built on OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        return self._complete(
            model=model,
            temperature=temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "sales_audit",
                    "strict": True,
                    "schema": json_schema,
                },
            },
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )

    def create_chat_reply(
        self,
        *,
        model: str,
        system_prompt: str,
        messages: list[dict[str, str]],
    ) -> str:
        return self._complete(
            model=model,
            messages=[{"role": "system", "content": system_prompt}, *messages],
        )

    def _complete(self, **kwargs: Any) -> str:
        try:
            response = self._client.chat.completions.create(**kwargs)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise AnalysisError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise AnalysisError("AI returned empty response")
        return content
