"""Application configuration."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Allow extra env vars without error
    )

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    api_prefix: str = Field(default="/api/v1", description="API prefix")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./sleep_cycle.db",
        description="Async SQLAlchemy database URL (SQLite or PostgreSQL)",
    )

    # Recommendation candidates
    sleep_now_cycles: list[int] = Field(
        default=[3, 4, 5, 6, 7],
        description="Cycle counts offered when going to bed now",
    )
    wake_at_cycles: list[int] = Field(
        default=[3, 4, 5, 6],
        description="Cycle counts offered for a target wake time",
    )

    # Wake alarms
    alarms_enabled: bool = Field(
        default=True,
        description="Run the background wake alarm scheduler",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level",
    )

    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


# Global settings instance
settings = Settings()
