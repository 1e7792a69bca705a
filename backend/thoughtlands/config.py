"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    thoughtlands_env: str = "development"
    thoughtlands_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "app://obsidian.md"]

    # Model routing
    model_cheap: str = "claude-haiku-4-5-20251001"
    model_mid: str = "claude-sonnet-4-5-20250929"

    # Summary cards: 4-6 sentences fit comfortably in 300 tokens
    summary_max_tokens: int = 300
    summary_temperature: float = 0.3

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
