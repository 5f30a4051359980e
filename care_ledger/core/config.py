"""Configuration management for care_ledger."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage Configuration
    data_dir: Path = Field(
        default=Path.home() / ".care_ledger",
        description="Directory holding the persisted ledger blobs",
    )
    storage_key: str = Field(
        default="CareEntries",
        description="Blob key under which the full record collection is stored",
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="local", description="Deployment environment reported to Logfire")
    log_level: str = Field(default="INFO", description="Minimum level for stdlib logging")

    def resolved_data_dir(self) -> Path:
        """Return data_dir with the user's home expanded and made absolute."""
        return self.data_dir.expanduser().resolve()


# Application Constants
class Constants:
    """Application-wide constants."""

    # Emotional weight scale (slider bounds in the entry form)
    MIN_EMOTIONAL_WEIGHT: int = 1
    MAX_EMOTIONAL_WEIGHT: int = 5
    DEFAULT_EMOTIONAL_WEIGHT: int = 3

    # Time spent (stepper bounds in the entry form)
    MIN_TIME_SPENT_MINUTES: int = 5
    MAX_TIME_SPENT_MINUTES: int = 300
    TIME_SPENT_STEP_MINUTES: int = 5
    DEFAULT_TIME_SPENT_MINUTES: int = 30

    MINUTES_PER_HOUR: float = 60.0

    # Blob keys
    CORRUPT_BACKUP_SUFFIX: str = ".corrupt-"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
