"""Signal generator fusing indicator votes into a trade decision.

This module is pure business logic with no I/O dependencies. It is a
rule-based ensemble: each indicator casts an independent vote
(direction, strength, fixed weight) and the weighted net score decides.
"""

import logging

from trader_core.models import (
    Action,
    IndicatorSet,
    PricePoint,
    SignalFactor,
    TradeSignal,
)

logger = logging.getLogger(__name__)

RSI_WEIGHT = 0.25
MACD_WEIGHT = 0.30
BOLLINGER_WEIGHT = 0.25

RSI_OVERSOLD = 30.0
RSI_OVERBOUGHT = 70.0

# Minimum |net score| before a directional decision is allowed
MIN_DECISION_CONFIDENCE = 0.6


class SignalGenerator:
    """Turn an IndicatorSet into a graded BUY/SELL/HOLD decision."""

    def __init__(self, min_profit_threshold: float = 0.015, rsi_period: int = 14):
        self.min_profit_threshold = min_profit_threshold
        self.rsi_period = rsi_period

    def rsi_vote(self, indicators: IndicatorSet, prices: list[PricePoint]) -> SignalFactor | None:
        """Oversold votes BUY, overbought votes SELL.

        A window with no price movement at all has RSI 100 only because
        it has no losses; it casts no vote.
        """
        value = indicators.rsi
        if value is None:
            return None

        window = prices[-(self.rsi_period + 1):]
        if len({p.price for p in window}) <= 1:
            return None

        if value < RSI_OVERSOLD:
            return SignalFactor(
                source="rsi",
                direction=Action.BUY,
                strength=(RSI_OVERSOLD - value) / 30.0,
                weight=RSI_WEIGHT,
            )
        if value > RSI_OVERBOUGHT:
            return SignalFactor(
                source="rsi",
                direction=Action.SELL,
                strength=(value - RSI_OVERBOUGHT) / 30.0,
                weight=RSI_WEIGHT,
            )
        return None

    def macd_vote(self, indicators: IndicatorSet) -> SignalFactor | None:
        """Histogram sign sets the direction, 10x its magnitude the strength."""
        if indicators.macd is None:
            return None

        histogram = indicators.macd.histogram
        if histogram == 0:
            return None

        return SignalFactor(
            source="macd",
            direction=Action.BUY if histogram > 0 else Action.SELL,
            strength=min(1.0, abs(histogram) * 10),
            weight=MACD_WEIGHT,
        )

    def bollinger_vote(self, indicators: IndicatorSet, price: float) -> SignalFactor | None:
        """Price outside the bands votes for reversion toward the midline."""
        bands = indicators.bollinger
        if bands is None:
            return None

        if price < bands.lower:
            # Distance below the band in units of the band half-width
            strength = (bands.lower - price) / (bands.middle - bands.lower)
            return SignalFactor(
                source="bollinger",
                direction=Action.BUY,
                strength=min(1.0, strength),
                weight=BOLLINGER_WEIGHT,
            )
        if price > bands.upper:
            strength = (price - bands.upper) / (bands.upper - bands.middle)
            return SignalFactor(
                source="bollinger",
                direction=Action.SELL,
                strength=min(1.0, strength),
                weight=BOLLINGER_WEIGHT,
            )
        return None

    @staticmethod
    def net_score(factors: list[SignalFactor]) -> float:
        """Weighted bullish minus bearish score over the cast votes."""
        total_weight = sum(f.weight for f in factors)
        if total_weight == 0:
            return 0.0

        bullish = sum(f.score for f in factors if f.direction == Action.BUY)
        bearish = sum(f.score for f in factors if f.direction == Action.SELL)
        return (bullish - bearish) / total_weight

    def decide(self, net_score: float) -> Action:
        confidence = abs(net_score)
        if confidence <= MIN_DECISION_CONFIDENCE:
            return Action.HOLD
        if net_score > self.min_profit_threshold:
            return Action.BUY
        if net_score < -self.min_profit_threshold:
            return Action.SELL
        return Action.HOLD

    def generate(self, indicators: IndicatorSet, prices: list[PricePoint]) -> TradeSignal:
        """
        Generate a trade signal from indicators and the underlying prices.

        Args:
            indicators: Features computed from ``prices``
            prices: Ascending price series (must not be empty)

        Returns:
            TradeSignal with the action, confidence, net score and the votes cast
        """
        current_price = prices[-1].price

        votes = [
            self.rsi_vote(indicators, prices),
            self.macd_vote(indicators),
            self.bollinger_vote(indicators, current_price),
        ]
        factors = [v for v in votes if v is not None]

        score = self.net_score(factors)
        signal = TradeSignal(
            action=self.decide(score),
            confidence=min(1.0, abs(score)),
            expected_return=score,
            factors=tuple(factors),
        )

        logger.debug(
            "Signal %s net=%.4f votes=%s",
            signal.action.value,
            score,
            [(f.source, f.direction.value, round(f.strength, 4)) for f in factors],
        )
        return signal
