"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]  # journal frontend dev server

    # Analytics
    risk_free_rate: float = 0.02  # annual, used by the Sharpe ratio endpoint

    model_config = {"env_prefix": "TJ_", "env_file": ".env"}


settings = Settings()
