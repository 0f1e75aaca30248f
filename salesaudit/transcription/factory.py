from salesaudit.config.settings import Settings
from salesaudit.transcription.base import BaseMediaTranscriber
from salesaudit.transcription.example_client_adapter import ExampleClientAdapter
from salesaudit.transcription.openai_client_adapter import OpenAIClientAdapter
from salesaudit.transcription.transcriber import MediaTranscriber


class TranscriberFactory:
    """Creates the configured media transcriber."""

    PROVIDERS = ("example", "openai")

    @classmethod
    def create(cls, settings: Settings) -> BaseMediaTranscriber:
        provider = settings.transcription_provider.lower()
        if provider == "example":
            return MediaTranscriber(
                client=ExampleClientAdapter(),
                image_model="example",
                audio_model="example",
            )
        if provider == "openai":
            client = OpenAIClientAdapter(
                api_key=settings.transcription_openai_api_key,
                timeout_seconds=settings.transcription_timeout_seconds,
                base_url=settings.transcription_openai_base_url,
            )
            return MediaTranscriber(
                client=client,
                image_model=settings.transcription_openai_model_name,
                audio_model=settings.transcription_openai_audio_model_name,
            )
        raise ValueError(
            f"Unknown transcription provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
