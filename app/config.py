"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./dev.db"

    # App settings
    app_name: str = "Property Financials"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Defaults substituted for property assumptions that were never entered
    default_debt_interest_rate: float = 0.05
    default_debt_term_years: int = 30
    default_debt_amortization_years: int = 30
    default_vacancy_rate: float = 0.05
    default_expense_ratio: float = 0.40
    default_annual_rent_growth_rate: float = 0.03
    default_annual_expense_growth_rate: float = 0.03
    default_exit_cap_rate: float = 0.06
    default_sale_cost_percentage: float = 0.05

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
