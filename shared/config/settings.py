"""
Configuration management using Pydantic Settings
"""
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BacktestSettings(BaseSettings):
    """Backtest engine configuration"""

    initial_cash: Decimal = Field(default=Decimal("10000"), description="Starting cash balance")
    enable_detailed_logging: bool = Field(default=False, description="Log every step and action")
    step_timeout: Optional[float] = Field(default=None, description="Per-step rebalance timeout in seconds")

    model_config = SettingsConfigDict(env_prefix="BACKTEST_")

    @field_validator("initial_cash")
    @classmethod
    def _positive_cash(cls, value: Decimal) -> Decimal:
        if not value.is_finite() or value <= 0:
            raise ValueError("initial_cash must be a positive finite decimal")
        return value


class Settings(BaseSettings):
    """Main application settings"""

    app_name: str = Field(default="cryptoquant", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: str = Field(default="development", description="Environment")

    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    # Sub-configurations
    backtest: BacktestSettings = Field(default_factory=BacktestSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__"
    )


def get_settings() -> Settings:
    """Load settings from the environment and .env"""
    return Settings()
