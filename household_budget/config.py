"""Configuration management using Pydantic Settings"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./household_budget.db"

    # Service
    service_name: str = "household-budget"
    log_level: str = "INFO"

    # Budget
    payday: int = Field(default=25, ge=1, le=28)
    accounts: List[str] = ["Hushållskonto", "Sparkonto", "Buffert"]
    default_daily_rate_ore: int = 30_000  # 300 kr per weekday
    default_friday_rate_ore: int = 54_000  # 540 kr extra on Fridays
    balance_tolerance_ore: int = 1  # 0.01 kr


settings = Settings()
