from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # API Keys
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    brightdata_api_key: str = ""  # Optional; scrape trigger is disabled if absent

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""

    # Scraper
    brightdata_dataset_id: str = ""
    brightdata_webhook_url: str = ""
    brightdata_trigger_url: str = "https://api.brightdata.com/datasets/v3/trigger"

    # Models
    embedding_model: str = "text-embedding-3-small"
    llm_model: str = "claude-sonnet-4-20250514"
    max_output_tokens: int = 2048
    analyzer_temperature: float = 0.2
    summarizer_temperature: float = 0.3

    # Retrieval / chunking
    transcript_chunk_limit: int = 40
    topic_match_count: int = 4
    chunk_size: int = 180
    chunk_overlap: int = 35

    # Resolver
    default_video_duration_seconds: int = 10800

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
