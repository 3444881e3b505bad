"""Pydantic Settings loaded from environment variables and .env."""

from functools import lru_cache

from pydantic_settings import BaseSettings

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore"}

    anthropic_api_key: str = ""

    llm_provider: str = "anthropic"
    analysis_llm: str = "claude-sonnet-4-0"
    analysis_max_tokens: int = 1024
    analysis_temperature: float = 0.1
    analysis_timeout_seconds: float = 120.0

    scrape_timeout_seconds: float = 15.0
    scrape_user_agent: str = DEFAULT_USER_AGENT

    cors_allow_origins: str = "*"
    port: int = 3001
    log_level: str = "INFO"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    def missing_api_key(self) -> bool:
        """True when the Anthropic provider is selected without a key."""
        return self.llm_provider == "anthropic" and not self.anthropic_api_key


@lru_cache
def get_settings() -> Settings:
    return Settings()
