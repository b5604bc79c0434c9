"""
Configuration management using Pydantic Settings.
Follows Single Responsibility Principle - only handles configuration.
"""

from functools import lru_cache

from pydantic import Field  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="Reflect AI Relay", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=True, alias="DEBUG")
    # Reported by the health endpoint
    platform: str = Field(default="FastAPI", alias="PLATFORM")

    # API Service
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    api_reload: bool = Field(default=False, alias="API_RELOAD")
    max_upload_size_mb: int = Field(default=25, alias="MAX_UPLOAD_SIZE_MB")
    max_prompt_chars: int = Field(default=15000, alias="MAX_PROMPT_CHARS")

    # Storage (temporary uploads)
    temp_dir: str = Field(default="/tmp/reflect_uploads", alias="TEMP_DIR")

    # Provider (OpenAI)
    # Empty key is allowed at startup; it is reported per request as a configuration error
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1", alias="OPENAI_BASE_URL"
    )
    analysis_model: str = Field(default="gpt-4", alias="ANALYSIS_MODEL")
    transcription_model: str = Field(
        default="whisper-1", alias="TRANSCRIPTION_MODEL"
    )
    provider_timeout_seconds: float = Field(
        default=120.0, alias="PROVIDER_TIMEOUT_SECONDS"
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    # Log format: "console" (colored, human-readable) or "json" (for log aggregation)
    log_format: str = Field(default="console", alias="LOG_FORMAT")
    log_file_enabled: bool = Field(default=False, alias="LOG_FILE_ENABLED")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Using lru_cache to ensure single instance (Singleton pattern).
    """
    return Settings()
