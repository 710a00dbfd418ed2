"""Application configuration."""
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings from env."""

    serpapi_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("serpapi_api_key", "serpapi_key"),
    )
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"  # fast, cheap for structured summaries

    default_market: str = "SE"
    organic_results_num: int = 10
    ad_results_num: int = 20

    # Per-call upstream timeouts (seconds)
    serpapi_timeout_seconds: float = 15.0
    openai_timeout_seconds: float = 30.0

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
