"""Trade signal models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Action(str, Enum):
    """Trade decision."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class SignalFactor(BaseModel):
    """One indicator's vote in the signal ensemble."""

    model_config = ConfigDict(frozen=True)

    source: str  # "rsi", "macd" or "bollinger"
    direction: Action
    strength: float = Field(ge=0.0, le=1.0)
    weight: float = Field(gt=0.0, le=1.0)

    @property
    def score(self) -> float:
        """Weighted strength of this vote."""
        return self.strength * self.weight


class TradeSignal(BaseModel):
    """Graded trade decision.

    ``expected_return`` is the net score of the ensemble; ``confidence``
    is its magnitude.
    """

    model_config = ConfigDict(frozen=True)

    action: Action
    confidence: float = Field(ge=0.0, le=1.0)
    expected_return: float
    factors: tuple[SignalFactor, ...] = ()

    @property
    def is_actionable(self) -> bool:
        return self.action != Action.HOLD

    def factor(self, source: str) -> SignalFactor | None:
        """Get the vote cast by an indicator, if any."""
        for f in self.factors:
            if f.source == source:
                return f
        return None
