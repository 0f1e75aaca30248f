from typing import ClassVar

from salesaudit.analysis.analyzer import Analyzer
from salesaudit.analysis.base import BaseAnalyzer
from salesaudit.analysis.chat import AuditChat
from salesaudit.analysis.client_base import BaseAnalysisClient
from salesaudit.analysis.example_client_adapter import ExampleClientAdapter
from salesaudit.analysis.openai_client_adapter import OpenAIClientAdapter
from salesaudit.config.settings import Settings


class AnalyzerFactory:
    """Creates the configured analyzer and chat adapters."""

    PROVIDERS: ClassVar[tuple[str, ...]] = ("example", "openai")

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalyzer:
        """Create a configured analyzer from application settings."""
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return Analyzer(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
                max_chars=settings.max_analysis_chars,
            )
        return Analyzer(
            client=cls._create_client(provider, settings),
            model=settings.analysis_openai_model_name,
            temperature=settings.analysis_temperature,
            max_chars=settings.max_analysis_chars,
        )

    @classmethod
    def create_chat(cls, settings: Settings) -> AuditChat:
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return AuditChat(client=ExampleClientAdapter(), model="example")
        return AuditChat(
            client=cls._create_client(provider, settings),
            model=settings.analysis_chat_model_name,
        )

    @classmethod
    def _create_client(cls, provider: str, settings: Settings) -> BaseAnalysisClient:
        if provider != "openai":
            raise ValueError(
                f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
            )
        return OpenAIClientAdapter(
            api_key=settings.analysis_openai_api_key,
            timeout_seconds=settings.analysis_openai_timeout_seconds,
            base_url=settings.analysis_openai_base_url,
        )
