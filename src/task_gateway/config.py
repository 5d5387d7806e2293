"""Runtime configuration loaded from environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """Gateway settings, overridable with ``TASK_GATEWAY_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="TASK_GATEWAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = PROJECT_ROOT / "tasks.db"

    # Ingestion limits
    max_batch_size: int = Field(default=500, ge=1)
    max_title_length: int = Field(default=255, ge=1)
    priority_min: int = 1
    priority_max: int = 5

    # Logging
    log_level: str = "INFO"
    log_format: str = "dev"

    # uvicorn
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
