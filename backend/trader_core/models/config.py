"""Engine and instrument configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Values the core consumes. Loading them is the app layer's job."""

    # Net score must clear this before BUY/SELL is considered
    min_profit_threshold: float = Field(default=0.015, gt=0, le=0.5)

    # Position size ceiling (in input-asset units)
    max_trade_amount: float = Field(default=0.1, ge=0.01)

    # Execution gate on signal confidence
    confidence_threshold: float = Field(default=0.65, ge=0, le=1)

    # Price history window per instrument
    lookback_days: int = Field(default=90, gt=0)

    # Fewer points than this skips the instrument for the cycle
    min_history: int = Field(default=50, gt=0)


class TokenConfig(BaseModel):
    """One side of an on-chain trading pair."""

    symbol: str
    address: str
    decimals: int = 18


class InstrumentConfig(BaseModel):
    """A tradable pair: market-data id plus the asset pair it executes on.

    BUY swaps token1 into token0; SELL swaps token0 into token1.
    """

    pair: str
    token0: TokenConfig
    token1: TokenConfig
    coingecko_id: str
    fee_rate: int = Field(default=3000, ge=0, lt=1_000_000)  # hundredths of a bip (3000 = 0.3%)
    enabled: bool = True

    @property
    def pool_fee(self) -> float:
        """Pool fee as a fraction of the input amount."""
        return self.fee_rate / 1_000_000


DEFAULT_INSTRUMENTS: list[InstrumentConfig] = [
    InstrumentConfig(
        pair="ETH/USDC",
        token0=TokenConfig(symbol="WETH", address="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"),
        token1=TokenConfig(symbol="USDC", address="0xA0b86a33E6441E6B4C6b39A9D71f6BFF8FaD9F3C", decimals=6),
        coingecko_id="ethereum",
    ),
    InstrumentConfig(
        pair="UNI/ETH",
        token0=TokenConfig(symbol="UNI", address="0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984"),
        token1=TokenConfig(symbol="WETH", address="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"),
        coingecko_id="uniswap",
    ),
]
