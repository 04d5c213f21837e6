"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - page_size >= 1 and 1 <= random_user_batch_limit <= 5000 (upstream cap)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box against randomuser.me
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from user_registry.core.domain_types import DEFAULT_PAGE_SIZE, GENERATOR_BATCH_LIMIT


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Registry
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1)

    # Random user generator
    random_user_api_url: str = "https://randomuser.me/api/"
    random_user_batch_limit: int = Field(
        GENERATOR_BATCH_LIMIT, ge=1, le=GENERATOR_BATCH_LIMIT,
    )
    random_user_timeout_seconds: float = 30.0
    max_import_count: int = Field(100_000, ge=1)

    @field_validator("random_user_api_url", mode="before")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """randomuser.me redirects /api to /api/; skip the round trip."""
        if isinstance(v, str) and not v.endswith("/"):
            return v + "/"
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
