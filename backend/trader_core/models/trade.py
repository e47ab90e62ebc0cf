"""Trade execution outcome model."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from trader_core.models.signal import Action


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TradeOutcome(BaseModel):
    """Result reported by a trade executor.

    Covers both shapes an executor can return: a fill
    (``success=True`` with a fractional ``profit``) and a failure
    (``success=False`` with an ``error`` message).
    """

    success: bool
    profit: float | None = None  # realized vs input, e.g. 0.02 = +2%
    timestamp: datetime = Field(default_factory=_utcnow)
    error: str | None = None
    amount: float = 0.0
    action: Action | None = None
    reference: str | None = None  # paper fill id or transaction hash

    @classmethod
    def failed(cls, error: str, amount: float = 0.0, action: Action | None = None) -> "TradeOutcome":
        return cls(success=False, error=error, amount=amount, action=action)

    @property
    def realized_profit(self) -> float:
        """Profit used for adaptation; missing profit counts as 0."""
        return self.profit if self.profit is not None else 0.0
