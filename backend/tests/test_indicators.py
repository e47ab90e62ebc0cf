"""Tests for technical indicators."""

import math
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from trader_core.indicators import (
    sma,
    ema,
    rsi,
    macd,
    bollinger_bands,
    stochastic,
    volatility,
    IndicatorCalculator,
)
from trader_core.models import PricePoint


def make_points(values: list[float]) -> list[PricePoint]:
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return [
        PricePoint(timestamp=start + timedelta(days=i), price=v)
        for i, v in enumerate(values)
    ]


class TestSMA:
    """Tests for SMA calculation."""

    def test_sma_basic(self):
        values = [float(i) for i in range(1, 11)]  # 1-10
        # (8+9+10)/3
        assert sma(values, 3) == pytest.approx(9.0)

    def test_sma_full_window(self):
        assert sma([2.0, 4.0, 6.0], 3) == pytest.approx(4.0)

    def test_sma_insufficient_data(self):
        assert sma([1.0, 2.0], 3) is None


class TestEMA:
    """Tests for EMA calculation."""

    def test_ema_basic(self):
        """Seed = SMA(1..5) = 3, then a = 1/3 over 6..10."""
        values = [float(i) for i in range(1, 11)]
        # 3 -> 4 -> 5 -> 6 -> 7 -> 8
        assert ema(values, 5) == pytest.approx(8.0)

    def test_ema_exact_period_is_sma(self):
        values = [1.0, 2.0, 3.0, 4.0, 5.0]
        assert ema(values, 5) == pytest.approx(3.0)

    def test_ema_insufficient_data(self):
        assert ema([100.0, 101.0, 102.0], 10) is None


class TestRSI:
    """Tests for RSI calculation."""

    def test_rsi_insufficient_data(self):
        # Needs period + 1 values
        assert rsi([float(i) for i in range(14)], 14) is None

    def test_rsi_all_gains(self):
        assert rsi([float(i) for i in range(15)], 14) == 100.0

    def test_rsi_all_losses(self):
        assert rsi([float(15 - i) for i in range(15)], 14) == pytest.approx(0.0)

    def test_rsi_flat_is_100(self):
        """Zero losses (even with zero gains) reports 100."""
        assert rsi([50.0] * 20, 14) == 100.0

    def test_rsi_balanced(self):
        """Seven +1 and seven -1 moves -> RS = 1 -> RSI = 50."""
        values = [10.0 + (i % 2) for i in range(15)]
        assert rsi(values, 14) == pytest.approx(50.0)

    def test_rsi_uses_last_period_changes_only(self):
        """Older losses outside the window are ignored."""
        values = [100.0, 50.0] + [50.0 + i for i in range(1, 16)]
        assert rsi(values, 14) == 100.0

    def test_rsi_always_in_range(self):
        rng = np.random.default_rng(42)
        for _ in range(50):
            values = list(100 + np.cumsum(rng.normal(0, 2, size=40)))
            value = rsi(values, 14)
            assert 0.0 <= value <= 100.0


class TestMACD:
    """Tests for the trend-convergence measure."""

    def test_macd_insufficient_data(self):
        assert macd([float(i) for i in range(25)]) is None

    def test_macd_defined_at_slow_period(self):
        assert macd([float(i) for i in range(26)]) is not None

    def test_macd_fixed_fractions(self):
        values = [100.0 + i * 0.5 for i in range(60)]
        result = macd(values)

        assert result.signal == pytest.approx(result.macd * 0.9)
        assert result.histogram == pytest.approx(result.macd * 0.1)

    def test_macd_rising_series_positive(self):
        values = [100.0 + i for i in range(60)]
        result = macd(values)
        assert result.macd > 0
        assert result.histogram > 0

    def test_macd_matches_ema_difference(self):
        values = [100.0 + math.sin(i / 3) * 5 for i in range(60)]
        result = macd(values)
        assert result.macd == pytest.approx(ema(values, 12) - ema(values, 26))


class TestBollingerBands:
    """Tests for volatility bands."""

    def test_bollinger_insufficient_data(self):
        assert bollinger_bands([1.0] * 19, 20) is None

    def test_bollinger_known_values(self):
        """mean = 2.5, population std = sqrt(1.25)."""
        bands = bollinger_bands([1.0, 2.0, 3.0, 4.0], period=4, num_std=2)
        sigma = math.sqrt(1.25)

        assert bands.middle == pytest.approx(2.5)
        assert bands.upper == pytest.approx(2.5 + 2 * sigma)
        assert bands.lower == pytest.approx(2.5 - 2 * sigma)
        assert bands.bandwidth == pytest.approx(4 * sigma / 2.5)

    def test_bollinger_flat_collapses(self):
        bands = bollinger_bands([100.0] * 20)
        assert bands.upper == bands.middle == bands.lower == 100.0
        assert bands.bandwidth == 0.0

    def test_bandwidth_never_negative(self):
        rng = np.random.default_rng(7)
        for _ in range(50):
            values = list(np.abs(100 + np.cumsum(rng.normal(0, 3, size=30))) + 1)
            assert bollinger_bands(values).bandwidth >= 0


class TestStochastic:
    """Tests for the stochastic oscillator."""

    def test_stochastic_insufficient_data(self):
        assert stochastic([1.0] * 13, 14) is None

    def test_stochastic_at_high(self):
        result = stochastic([float(i) for i in range(1, 15)], 14)
        assert result.k == pytest.approx(100.0)
        assert result.d == result.k

    def test_stochastic_at_low(self):
        result = stochastic([float(15 - i) for i in range(14)], 14)
        assert result.k == pytest.approx(0.0)

    def test_stochastic_flat_is_midpoint(self):
        result = stochastic([42.0] * 14, 14)
        assert result.k == 50.0
        assert result.d == 50.0


class TestVolatility:
    """Tests for annualized volatility."""

    def test_volatility_insufficient_data_sentinel(self):
        assert volatility([100.0] * 20, 20) == 0.0

    def test_volatility_flat_is_zero(self):
        assert volatility([100.0] * 30, 20) == 0.0

    def test_volatility_constant_growth_is_zero(self):
        """Equal log returns have zero dispersion."""
        values = [100.0 * 1.01 ** i for i in range(30)]
        assert volatility(values, 20) == pytest.approx(0.0, abs=1e-9)

    def test_volatility_alternating_returns(self):
        """Log returns of +/-0.01 -> std 0.01 -> 0.01 * sqrt(252)."""
        values = [100.0]
        for i in range(20):
            step = 0.01 if i % 2 == 0 else -0.01
            values.append(values[-1] * math.exp(step))

        assert volatility(values, 20) == pytest.approx(0.01 * math.sqrt(252), rel=1e-6)


class TestIndicatorCalculator:
    """Tests for IndicatorCalculator."""

    def test_calculate_full_history(self):
        values = [100.0 + math.sin(i / 4) * 3 + i * 0.1 for i in range(60)]
        result = IndicatorCalculator().calculate(make_points(values))

        assert result.sma_short == pytest.approx(sma(values, 20))
        assert result.sma_long == pytest.approx(sma(values, 50))
        assert result.rsi is not None
        assert result.macd is not None
        assert result.bollinger is not None
        assert result.stochastic is not None
        assert result.volatility > 0

    def test_calculate_short_history_is_partial(self):
        result = IndicatorCalculator().calculate(make_points([100.0 + i for i in range(10)]))

        assert result.sma_short is None
        assert result.sma_long is None
        assert result.rsi is None
        assert result.macd is None
        assert result.bollinger is None
        assert result.stochastic is None
        assert result.volatility == 0.0

    def test_calculate_empty_history(self):
        result = IndicatorCalculator().calculate([])
        assert result.rsi is None
        assert result.volatility == 0.0

    def test_windows_fill_in_order(self):
        """SMA20/Bollinger at 20 points, volatility at 21, MACD at 26, SMA50 at 50."""
        calc = IndicatorCalculator()
        values = [100.0 + (i % 3) for i in range(50)]

        at_20 = calc.calculate_values(values[:20])
        assert at_20.sma_short is not None and at_20.bollinger is not None
        assert at_20.volatility == 0.0
        assert at_20.macd is None

        at_26 = calc.calculate_values(values[:26])
        assert at_26.macd is not None
        assert at_26.sma_long is None

        assert calc.calculate_values(values).sma_long is not None
