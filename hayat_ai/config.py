"""Application configuration using Pydantic Settings."""

import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from hayat_ai.utils.exceptions import StartupConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    api_key: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("API_KEY", "GEMINI_API_KEY")
    )

    # Models
    chat_model: str = "gemini-2.5-flash"
    image_model: str = "imagen-4.0-generate-001"
    video_model: str = "veo-2.0-generate-001"
    document_model: str = "gemini-2.5-flash"

    # Video polling (unset max wait = poll until the backend reports done)
    video_poll_interval_seconds: float = 10.0
    video_max_wait_seconds: Optional[float] = None

    # File Settings
    artifact_dir: str = str(Path(tempfile.gettempdir()) / "hayat-ai")

    # Application Settings
    app_host: str = "127.0.0.1"
    app_port: int = 8000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once per process.

    Raises:
        StartupConfigError: API_KEY is not set
    """
    try:
        return Settings()
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise StartupConfigError(
            f"API_KEY environment variable is not set or invalid ({missing})."
        ) from e
