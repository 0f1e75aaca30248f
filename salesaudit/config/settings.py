from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_media_items: int = 8
    min_ocr_chars: int = 10

    ocr_engine: str = "tesseract"
    ocr_language: str = "por"

    transcription_provider: str = "openai"
    transcription_openai_api_key: str = ""
    transcription_openai_base_url: str | None = None
    transcription_openai_model_name: str = "gpt-4o-mini"
    transcription_openai_audio_model_name: str = "whisper-1"
    transcription_timeout_seconds: int = 60

    analysis_provider: str = "openai"
    analysis_openai_api_key: str = ""
    analysis_openai_base_url: str | None = None
    analysis_openai_model_name: str = "gpt-4o"
    analysis_chat_model_name: str = "gpt-4o-mini"
    analysis_openai_timeout_seconds: int = 120
    analysis_temperature: float = 0.2
    max_analysis_chars: int = 500_000
