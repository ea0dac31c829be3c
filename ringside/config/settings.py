"""Application settings and configuration management."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RINGSIDE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/ringside.db",
        description="Async SQLite connection URL",
    )
    database_url_sync: str = Field(
        default="sqlite:///./data/ringside.db",
        description="Sync SQLite connection URL (for Alembic)",
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size")
    db_max_overflow: int = Field(default=10, description="Max overflow connections")
    db_begin_immediate: bool = Field(
        default=True,
        description="Take the SQLite write lock when a transaction begins",
    )
    db_create_schema: bool = Field(
        default=False,
        description="Create missing tables on startup instead of relying on Alembic",
    )

    # Application
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # Paths
    config_path: Path = Field(
        default=Path(__file__).parent / "defaults.yaml",
        description="Path to defaults.yaml configuration",
    )

    def load_defaults_config(self) -> dict[str, Any]:
        """Load the defaults.yaml configuration file."""
        if self.config_path.exists():
            with open(self.config_path) as f:
                return yaml.safe_load(f) or {}
        return {}


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
