"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./fintrack.db"
    seed_sample_data: bool = False

    # Service
    service_name: str = "fintrack"
    log_level: str = "INFO"
    default_currency: str = "USD"

    # AI insights (OpenAI-compatible chat completions endpoint)
    insights_api_base: str = "https://api.openai.com/v1"
    insights_api_key: Optional[str] = None
    insights_model: str = "gpt-4o-mini"
    insights_timeout_seconds: float = 30.0
    insights_max_retries: int = 2
    insights_temperature: float = 0.2


settings = Settings()
