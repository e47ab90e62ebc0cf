"""Indicator value objects produced by the indicator engine."""

from pydantic import BaseModel, ConfigDict


class MacdValues(BaseModel):
    """Trend-convergence values.

    ``signal`` and ``histogram`` are fixed fractions of the main line
    (0.9 and 0.1), not a smoothed signal line.
    """

    model_config = ConfigDict(frozen=True)

    macd: float
    signal: float
    histogram: float


class BollingerBands(BaseModel):
    """Volatility bands around a moving-average midline."""

    model_config = ConfigDict(frozen=True)

    upper: float
    middle: float
    lower: float
    bandwidth: float


class StochasticValues(BaseModel):
    """Stochastic oscillator (k and d are reported identically)."""

    model_config = ConfigDict(frozen=True)

    k: float
    d: float


class IndicatorSet(BaseModel):
    """All features computed from one price series.

    Optional fields are None when the series is shorter than the
    indicator's window. ``volatility`` is 0.0 in that case instead.
    """

    model_config = ConfigDict(frozen=True)

    sma_short: float | None = None
    sma_long: float | None = None
    rsi: float | None = None
    macd: MacdValues | None = None
    bollinger: BollingerBands | None = None
    stochastic: StochasticValues | None = None
    volatility: float = 0.0
