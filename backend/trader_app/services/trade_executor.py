"""Trade execution collaborators.

The engine hands an executor a decision, a size and the pool fee of the
instrument it trades, and gets back a TradeOutcome. On-chain swap
construction is outside this project; the paper executor fills at the
quote less the pool fee so the adaptation loop can run end to end.
"""

import logging
from typing import Protocol, runtime_checkable

from trader_core.models import TradeOutcome, TradeSignal

logger = logging.getLogger(__name__)


@runtime_checkable
class TradeExecutor(Protocol):
    """Anything that can execute a swap for a signal."""

    async def execute(
        self,
        input_asset: str,
        output_asset: str,
        amount: float,
        signal: TradeSignal,
        pool_fee: float | None = None,
    ) -> TradeOutcome:
        """Swap ``amount`` of ``input_asset`` into ``output_asset``.

        ``pool_fee`` is the fee fraction of the pool being traded, if known.
        Must not raise for ordinary failures; report them as
        ``TradeOutcome(success=False, error=...)`` instead.
        """
        ...


class PaperTradeExecutor:
    """Simulated executor.

    Every fill returns the input amount less the pool fee, so
    ``profit = (amount_out - amount_in) / amount_in = -fee``. The
    instrument's pool fee is used when given, ``fee_rate`` otherwise.
    """

    def __init__(self, fee_rate: float = 0.003):
        self.fee_rate = fee_rate
        self.fills: list[TradeOutcome] = []

    async def execute(
        self,
        input_asset: str,
        output_asset: str,
        amount: float,
        signal: TradeSignal,
        pool_fee: float | None = None,
    ) -> TradeOutcome:
        if amount <= 0:
            return TradeOutcome.failed(
                f"amount must be positive, got {amount}", amount=amount, action=signal.action
            )

        fee = self.fee_rate if pool_fee is None else pool_fee
        amount_out = amount * (1 - fee)
        profit = (amount_out - amount) / amount

        outcome = TradeOutcome(
            success=True,
            profit=profit,
            amount=amount,
            action=signal.action,
            reference=f"paper-{len(self.fills) + 1}",
        )
        self.fills.append(outcome)

        logger.info(
            "Paper %s: %.6f %s -> %.6f %s (fee %.2f%%)",
            signal.action.value,
            amount,
            input_asset,
            amount_out,
            output_asset,
            fee * 100,
        )
        return outcome
