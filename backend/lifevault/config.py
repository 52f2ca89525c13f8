from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

from lifevault.domain.entities import DataMode


_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "LifeVault Local Store"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///data/lifevault.db"

    # Bumping this wipes every persisted collection on next start
    storage_schema_version: str = "6"

    # Data mode: local-only keeps every read/write on-device
    local_only: bool = True
    graphql_url: str = "http://127.0.0.1:4000/graphql"

    # Opt-in per-entity lock around record read-modify-write cycles
    serialize_entity_writes: bool = False

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine / aiosqlite
    log_level_storage: str = "INFO"          # record, document and profile stores
    log_level_migration: str = "INFO"        # schema guard + legacy document migration

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "env_prefix": "LIFEVAULT_",
    }

    def data_mode(self) -> DataMode:
        """Build the data-mode value injected into the stores."""
        return DataMode(local_only=self.local_only, graphql_url=self.graphql_url)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
