"""Position sizing against signal confidence and engine risk state."""

from trader_core.models import RiskState, TradeSignal

MIN_POSITION = 0.01
MAX_KELLY_FRACTION = 0.5

# Keeps the Kelly denominator positive at confidence 1.0
KELLY_EPSILON = 0.01


class PositionSizer:
    """Kelly-style sizing capped by a trade-size ceiling."""

    def __init__(self, max_trade_amount: float = 0.1):
        self.max_trade_amount = max_trade_amount

    @staticmethod
    def kelly_fraction(signal: TradeSignal) -> float:
        risk_of_ruin = 1 - signal.confidence
        fraction = abs(signal.expected_return) / (risk_of_ruin + KELLY_EPSILON)
        return min(fraction, MAX_KELLY_FRACTION)

    def size(self, signal: TradeSignal, risk_state: RiskState) -> float:
        """
        Calculate the trade amount for a signal.

        size = ceiling * signal confidence * engine confidence * kelly,
        clamped to [0.01, ceiling].
        """
        raw = (
            self.max_trade_amount
            * signal.confidence
            * risk_state.confidence
            * self.kelly_fraction(signal)
        )
        return max(MIN_POSITION, min(self.max_trade_amount, raw))
