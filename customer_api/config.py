"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden from the environment or a .env file
    - get_settings() is cached (lru_cache): single instance per process
    - PORT defaults to 8081

Design Decisions:
    - mongodb_database is only a fallback: a database named in the URI path wins
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    mongodb_uri: str = "mongodb://mongo:27017/helloworlddb"
    mongodb_database: str = "helloworlddb"
    mongodb_server_selection_timeout_ms: int = 5000
    customers_collection: str = "customers"

    # Server
    host: str = "0.0.0.0"
    port: int = 8081

    # API
    cors_origins: list[str] = ["*"]
    docs_url: str = "/customers/api-docs"
    error_policy: Literal["collapse", "http"] = "collapse"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("error_policy", mode="before")
    @classmethod
    def normalize_error_policy(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    return Settings()
