from abc import ABC, abstractmethod


class BaseAnalysisClient(ABC):
    """Contract for provider-specific analysis AI clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        """Return the provider's structured (JSON) response as plain text."""

    @abstractmethod
    def create_chat_reply(
        self,
        *,
        model: str,
        system_prompt: str,
        messages: list[dict[str, str]],
    ) -> str:
        """Return a free-text assistant reply to an OpenAI-style message list."""
