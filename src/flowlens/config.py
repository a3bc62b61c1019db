from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FLOWLENS_",
        case_sensitive=False,
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = "INFO"
    log_file: Optional[str] = None  # rotating file handler when set

    # ------------------------------------------------------------------
    # Input-size guard, applied when a workflow document is loaded
    # ------------------------------------------------------------------
    max_nodes: int = 5000
    max_connections: int = 20000


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
