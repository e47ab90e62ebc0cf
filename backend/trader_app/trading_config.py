"""Instrument configuration loaded from trading.yaml.

Supports:
- A list of instruments (market-data id plus the token pair it trades)
- Backward compatible: no YAML file = the default ETH/USDC and UNI/ETH pairs
"""

import logging
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, model_validator

from trader_core.models import DEFAULT_INSTRUMENTS, InstrumentConfig

logger = logging.getLogger(__name__)


class TradingConfig(BaseModel):
    """Top-level trading.yaml configuration."""

    instruments: list[InstrumentConfig] = list(DEFAULT_INSTRUMENTS)

    @model_validator(mode="after")
    def _validate(self):
        ids = [i.coingecko_id for i in self.instruments]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(
                f"instruments must have unique coingecko_id, duplicated: {duplicates}"
            )
        return self

    def get_enabled_instruments(self) -> list[InstrumentConfig]:
        return [i for i in self.instruments if i.enabled]


_DEFAULT_PATH = Path.cwd() / "trading.yaml"


def load_trading_config(path: Path | None = None) -> TradingConfig:
    """Load trading config from YAML file.

    Falls back to defaults if the file doesn't exist.
    """
    config_path = path or _DEFAULT_PATH

    # Load .env next to the config so Settings sees the same environment
    env_path = config_path.parent / ".env"
    load_dotenv(env_path, override=False)

    if not config_path.exists():
        logger.info(
            "No trading.yaml found at %s, using default instruments",
            config_path,
        )
        return TradingConfig()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    config = TradingConfig(**raw)
    logger.info(
        "Loaded trading config: %d instruments (%d enabled)",
        len(config.instruments),
        len(config.get_enabled_instruments()),
    )
    return config
