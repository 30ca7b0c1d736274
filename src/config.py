"""Pydantic Settings — loads configuration from environment variables."""

import logging
from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore"}

    agentql_api_key: str = Field(min_length=1)
    agentql_api_url: str = "https://api.agentql.com/v1/query-data"
    upstream_timeout_seconds: float = 120.0

    scrape_concurrency: int = Field(default=1, ge=1)
    cors_origins: str = "https://alibaba-scraper.vercel.app"
    log_level: str = "INFO"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]


def load_settings() -> Settings:
    """Validate configuration once at startup; refuse to start without an API key."""
    try:
        return get_settings()
    except ValidationError as exc:
        fields = sorted({str(e["loc"][0]) for e in exc.errors() if e["loc"]})
        if "agentql_api_key" in fields:
            logger.error("missing AgentQL API key in environment variables")
        raise RuntimeError(
            f"Invalid configuration: {', '.join(fields) or 'settings'}"
        ) from exc
