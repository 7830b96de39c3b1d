"""Process configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    inkrec_env: str = "development"
    inkrec_log_level: str = "info"

    # Default budget for timed recognition when a caller passes none
    inkrec_default_timeout_ms: int = 2000

    # Upper bound on the candidate-corner pool searched exhaustively
    inkrec_max_search_candidates: int = 12

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
