"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./debt_advisor.db"

    # Service
    service_name: str = "debt-advisor"
    log_level: str = "INFO"

    # Projections
    default_currency: str = "USD"
    default_payoff_mode: str = "parallel"  # parallel | waterfall
    default_payoff_strategy: str = "avalanche"  # avalanche | snowball
    max_projection_months: int = 600


settings = Settings()
