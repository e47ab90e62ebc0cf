"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from trader_core.models import EngineConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Trading parameters
    min_profit_threshold: float = Field(default=0.015, gt=0, le=0.5)
    max_slippage: float = Field(default=0.005, gt=0, le=0.1)
    max_trade_amount: float = Field(default=0.1, ge=0.01)
    confidence_threshold: float = Field(default=0.65, ge=0, le=1)
    learning_rate: float = Field(default=0.01, ge=0.001, le=0.1)
    lookback_days: int = Field(default=90, gt=0)

    # Loop pacing (seconds)
    cycle_interval: float = Field(default=300.0, ge=0)
    instrument_delay: float = Field(default=10.0, ge=0)  # protects the market-data rate limit
    error_cooldown: float = Field(default=60.0, ge=0)

    # Persistence
    state_path: str = "bot_data.json"

    # Market data
    coingecko_base_url: str = "https://api.coingecko.com"
    coingecko_api_key: str = ""
    coingecko_calls_per_minute: int = Field(default=30, gt=0)

    # Paper execution fee when the caller passes no pool fee
    paper_fee_rate: float = Field(default=0.003, ge=0, lt=1)

    def to_engine_config(self) -> EngineConfig:
        """Values consumed by the core engine."""
        return EngineConfig(
            min_profit_threshold=self.min_profit_threshold,
            max_trade_amount=self.max_trade_amount,
            confidence_threshold=self.confidence_threshold,
            lookback_days=self.lookback_days,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
