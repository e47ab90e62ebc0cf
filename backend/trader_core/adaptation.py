"""Outcome-driven adaptation and performance tracking.

After each completed trade the tracker updates the engine's cumulative
statistics and nudges the risk state: accurate predictions raise
confidence a fixed step, inaccurate ones lower it in proportion to the
error. This is an error-proportional controller, not gradient descent;
there are no model weights to update.

Updates are unconditional once an outcome arrives. Failed trades feed
adaptation with a profit of 0, the same as a break-even fill.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from trader_core.context import EngineContext
from trader_core.models import TradeOutcome, TradeSignal

logger = logging.getLogger(__name__)


@dataclass
class AdaptationResult:
    """What one outcome did to the engine state."""

    error: float
    confidence_before: float
    confidence_after: float
    learning_rate: float

    @property
    def confidence_delta(self) -> float:
        return self.confidence_after - self.confidence_before


class AdaptationTracker:
    """Apply trade outcomes to an EngineContext."""

    def record_outcome(
        self,
        context: EngineContext,
        outcome: TradeOutcome,
        signal: TradeSignal,
    ) -> AdaptationResult:
        """
        Update performance statistics and risk state from one outcome.

        Args:
            context: Engine state to mutate
            outcome: Executor result (fill or failure)
            signal: The signal the trade was placed on

        Returns:
            AdaptationResult describing the update
        """
        context.performance.record(outcome)

        before = context.risk_state.confidence
        error = context.risk_state.adapt(outcome.realized_profit, signal.expected_return)
        result = AdaptationResult(
            error=error,
            confidence_before=before,
            confidence_after=context.risk_state.confidence,
            learning_rate=context.risk_state.learning_rate,
        )

        if not outcome.success:
            logger.warning("Trade failed (%s); adapting as break-even", outcome.error)

        logger.info(
            "Adapted: confidence=%.1f%% (%+.2f%%) error=%.4f learning_rate=%.4f",
            result.confidence_after * 100,
            result.confidence_delta * 100,
            error,
            result.learning_rate,
        )
        return result
