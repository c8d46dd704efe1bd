"""Configuration settings for hubstate."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Store key the events hub has always persisted its state under
DEFAULT_STATE_KEY = "kanchana-events-hub-state"


class Settings(BaseSettings):
    """Settings loaded from HUBSTATE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HUBSTATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unrelated entries in a shared .env
    )

    home: Path = Path.home() / ".hubstate"
    db_path: Optional[Path] = None  # Defaults to <home>/state.db
    state_key: str = DEFAULT_STATE_KEY
    log_level: str = "WARNING"

    def resolved_db_path(self) -> Path:
        """Database file path, expanded and absolute."""
        path = self.db_path if self.db_path is not None else self.home / "state.db"
        return Path(path).expanduser().resolve()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
