"""Technical indicators (pure math, no I/O)."""

from trader_core.indicators.indicators import (
    sma,
    ema,
    rsi,
    macd,
    bollinger_bands,
    stochastic,
    volatility,
    IndicatorCalculator,
)

__all__ = [
    "sma",
    "ema",
    "rsi",
    "macd",
    "bollinger_bands",
    "stochastic",
    "volatility",
    "IndicatorCalculator",
]
