"""Configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kvvector.modules.distance import DistanceStrategy


class Settings(BaseSettings):
    """Settings loaded from ``KVVECTOR_``-prefixed environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="KVVECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identity (tracing resource attributes)
    service_name: str = "kvvector"
    service_version: str = "0.1.0"

    # Store
    namespace: str = Field(default="vectors", min_length=1)
    distance_strategy: DistanceStrategy = DistanceStrategy.COSINE
    on_dimension_mismatch: Literal["raise", "skip"] = "raise"

    # Backend
    backend: Literal["memory", "sqlite"] = "memory"
    sqlite_path: str = "./data/kvvector.db"

    # Observability
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    tracing_enabled: bool = False
    otlp_endpoint: str | None = None  # e.g. "http://localhost:4318"
    console_export: bool = False
    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
