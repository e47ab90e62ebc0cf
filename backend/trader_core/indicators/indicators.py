"""Technical indicators for signal generation.

Every function takes an ascending sequence of prices and returns the
indicator value at the latest point. Short input never raises: it
yields None (or the documented sentinel) so callers can work with
partial results.
"""

import math
from typing import Sequence

import numpy as np

from trader_core.models import (
    BollingerBands,
    IndicatorSet,
    MacdValues,
    PricePoint,
    StochasticValues,
    closes,
)

TRADING_DAYS_PER_YEAR = 252


def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)


# =============================================================================
# Averages
# =============================================================================

def sma(values: Sequence[float], period: int) -> float | None:
    """Simple moving average of the last ``period`` values."""
    if len(values) < period:
        return None
    return float(np.mean(_as_array(values)[-period:]))


def ema(values: Sequence[float], period: int) -> float | None:
    """
    Exponential moving average at the latest value.

    Seeded with the SMA of the first ``period`` values, then
    ``ema = price * a + ema * (1 - a)`` with ``a = 2 / (period + 1)``.

    Args:
        values: Sequence of prices
        period: EMA period

    Returns:
        Latest EMA value, or None if there are fewer than ``period`` values
    """
    if len(values) < period:
        return None

    arr = _as_array(values)
    multiplier = 2.0 / (period + 1)
    result = float(np.mean(arr[:period]))

    for price in arr[period:]:
        result = float(price) * multiplier + result * (1 - multiplier)

    return result


# =============================================================================
# Oscillators
# =============================================================================

def rsi(values: Sequence[float], period: int = 14) -> float | None:
    """
    Relative strength index over the last ``period`` price changes.

    Gains and losses are each averaged over the full period. Returns
    100 when there are no losses (including a completely flat window).

    Returns:
        RSI in [0, 100], or None if there are fewer than ``period + 1`` values
    """
    if len(values) < period + 1:
        return None

    changes = np.diff(_as_array(values))[-period:]
    gains = float(changes[changes > 0].sum()) / period
    losses = abs(float(changes[changes < 0].sum())) / period

    if losses == 0:
        return 100.0
    rs = gains / losses
    return 100.0 - 100.0 / (1.0 + rs)


def macd(
    values: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
) -> MacdValues | None:
    """
    Trend-convergence measure: fast EMA minus slow EMA.

    The signal line and histogram are fixed fractions of the main line
    (0.9 and 0.1). This is an approximation, not a smoothed signal line.
    """
    fast = ema(values, fast_period)
    slow = ema(values, slow_period)
    if fast is None or slow is None:
        return None

    main = fast - slow
    return MacdValues(macd=main, signal=main * 0.9, histogram=main * 0.1)


def stochastic(values: Sequence[float], period: int = 14) -> StochasticValues | None:
    """
    Stochastic oscillator of the latest price within the last ``period``.

    %D is reported equal to %K (no smoothing). A flat window, where the
    range is zero, reports the neutral midpoint 50.
    """
    if len(values) < period:
        return None

    window = _as_array(values)[-period:]
    highest = float(window.max())
    lowest = float(window.min())
    current = float(window[-1])

    if highest == lowest:
        k = 50.0
    else:
        k = (current - lowest) / (highest - lowest) * 100.0
    return StochasticValues(k=k, d=k)


# =============================================================================
# Volatility
# =============================================================================

def bollinger_bands(
    values: Sequence[float],
    period: int = 20,
    num_std: float = 2.0,
) -> BollingerBands | None:
    """
    Bollinger bands: SMA midline plus/minus ``num_std`` population
    standard deviations of the last ``period`` prices.

    bandwidth = 2 * num_std * sigma / middle
    """
    middle = sma(values, period)
    if middle is None:
        return None

    sigma = float(np.std(_as_array(values)[-period:]))
    offset = sigma * num_std
    bandwidth = (offset * 2) / middle if middle != 0 else 0.0

    return BollingerBands(
        upper=middle + offset,
        middle=middle,
        lower=middle - offset,
        bandwidth=abs(bandwidth),
    )


def volatility(values: Sequence[float], period: int = 20) -> float:
    """
    Annualized volatility of the last ``period`` log returns.

    Returns 0.0 (a sentinel, not "no volatility") when there are fewer
    than ``period + 1`` prices.
    """
    if len(values) < period + 1:
        return 0.0

    window = _as_array(values)[-(period + 1):]
    log_returns = np.diff(np.log(window))
    variance = float(np.var(log_returns))
    return math.sqrt(variance * TRADING_DAYS_PER_YEAR)


# =============================================================================
# IndicatorCalculator class
# =============================================================================

class IndicatorCalculator:
    """Calculator for all technical indicators needed by the signal generator."""

    def __init__(
        self,
        sma_short_period: int = 20,
        sma_long_period: int = 50,
        rsi_period: int = 14,
        macd_fast_period: int = 12,
        macd_slow_period: int = 26,
        bollinger_period: int = 20,
        bollinger_std: float = 2.0,
        stochastic_period: int = 14,
        volatility_period: int = 20,
    ):
        self.sma_short_period = sma_short_period
        self.sma_long_period = sma_long_period
        self.rsi_period = rsi_period
        self.macd_fast_period = macd_fast_period
        self.macd_slow_period = macd_slow_period
        self.bollinger_period = bollinger_period
        self.bollinger_std = bollinger_std
        self.stochastic_period = stochastic_period
        self.volatility_period = volatility_period

    def calculate_values(self, values: Sequence[float]) -> IndicatorSet:
        """Calculate every indicator for a plain price sequence."""
        return IndicatorSet(
            sma_short=sma(values, self.sma_short_period),
            sma_long=sma(values, self.sma_long_period),
            rsi=rsi(values, self.rsi_period),
            macd=macd(values, self.macd_fast_period, self.macd_slow_period),
            bollinger=bollinger_bands(values, self.bollinger_period, self.bollinger_std),
            stochastic=stochastic(values, self.stochastic_period),
            volatility=volatility(values, self.volatility_period),
        )

    def calculate(self, prices: list[PricePoint]) -> IndicatorSet:
        """
        Calculate all indicators for the given price history.

        Args:
            prices: Ascending price series

        Returns:
            IndicatorSet with None for any indicator whose window is not filled
        """
        return self.calculate_values(closes(prices))
