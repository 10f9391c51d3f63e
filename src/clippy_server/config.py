"""Configuration module for clippy-server using pydantic-settings."""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClippyServerSettings(BaseSettings):
    """Main configuration settings for clippy-server.

    All settings can be overridden via environment variables with the CLIPPY_ prefix.
    For example, CLIPPY_OLLAMA_HOST will override the ollama_host setting.
    The weather API key and holiday calendar link also accept the unprefixed
    WEATHER_API_KEY and HOLIDAY_CALENDAR_LINK variables.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # Ollama
    ollama_host: str = "http://localhost:11434"
    ollama_timeout: float = 120.0
    reply_model: str = "llama3.1:8b"
    title_model: str = "llama3.1:8b"

    # Data directories (relative to data_dir)
    data_dir: str = "."
    conversations_dir: str = "conversations"

    # Tools
    weather_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "weather_api_key", "CLIPPY_WEATHER_API_KEY", "WEATHER_API_KEY"
        ),
    )
    weather_api_url: str = "https://api.weatherapi.com/v1"
    holiday_calendar_link: str = Field(
        default="https://www.officeholidays.com/ics/spain/catalonia",
        validation_alias=AliasChoices(
            "holiday_calendar_link",
            "CLIPPY_HOLIDAY_CALENDAR_LINK",
            "HOLIDAY_CALENDAR_LINK",
        ),
    )
    http_timeout: float = 10.0

    # Deadline for a whole reply (all model rounds and tool calls), in seconds
    reply_timeout: float = 300.0

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="CLIPPY_", populate_by_name=True)

    @property
    def resolved_conversations_dir(self) -> Path:
        """Get the full path to the conversations directory."""
        return Path(self.data_dir) / self.conversations_dir
