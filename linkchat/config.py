"""Pydantic Settings — loads configuration from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings

from linkchat.chat.prompts import SYSTEM_PROMPT


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore"}

    redis_url: str = "redis://localhost:6379"

    llm_provider: str = "openai"
    chat_llm: str = "gpt-4o-mini"
    system_prompt: str = SYSTEM_PROMPT
    max_context_turns: int = 10
    log_level: str = "INFO"

    scrape_cache_ttl_seconds: int = 7 * 24 * 60 * 60
    scrape_cache_max_bytes: int = 1_000_000
    cache_key_max_length: int = 200

    http_fetch_timeout: float = 10.0
    render_timeout: float = 10.0
    render_ready_timeout: float = 5.0
    browser_disable_sandbox: bool = True
    scrape_concurrency: int = 4

    @property
    def scrape_ceiling_seconds(self) -> float:
        """Upper bound on the wall time spent on a single URL."""
        return self.http_fetch_timeout + self.render_timeout + self.render_ready_timeout


@lru_cache
def get_settings() -> Settings:
    return Settings()
