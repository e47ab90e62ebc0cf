"""Analysis cycle orchestrator.

Drives the engine one instrument at a time:

    fetch prices -> indicators -> signal -> memory
        -> (confidence gate) -> size -> execute -> adapt

``tick()`` runs one full pass over the enabled instruments. ``run()``
is the scheduler: it calls ``tick()``, then waits ``cycle_interval``
seconds on a stop event. ``stop()`` is cooperative and is honored
before the next instrument or the next sleep, never mid-computation.

Trade execution plus adaptation, and snapshot capture, share one lock
so a persisted snapshot never contains half of a trade.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from trader_core.adaptation import AdaptationTracker
from trader_core.context import EngineContext
from trader_core.indicators import IndicatorCalculator
from trader_core.models import (
    Action,
    EngineConfig,
    IndicatorSet,
    InstrumentConfig,
    MemoryTierName,
    PricePoint,
    TradeOutcome,
    TradeSignal,
)
from trader_core.position_sizer import PositionSizer
from trader_core.signal_generator import SignalGenerator

from trader_app.report import ReportFormatter
from trader_app.services.trade_executor import TradeExecutor
from trader_app.storage import StateStore

logger = logging.getLogger(__name__)

SAVE_EVERY_CYCLES = 5
REPORT_EVERY_CYCLES = 10


class PriceHistoryProvider(Protocol):
    """Source of ascending price history. Returns [] on failure."""

    async def get_price_history(self, instrument_id: str, days: int = 90) -> list[PricePoint]:
        ...


class OrchestratorState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    ANALYZING = "analyzing"
    DECIDING = "deciding"
    EXECUTING = "executing"
    SKIPPING = "skipping"
    SLEEPING = "sleeping"
    STOPPED = "stopped"


class AnalysisStatus(str, Enum):
    INSUFFICIENT_DATA = "insufficient_data"
    SKIPPED = "skipped"
    EXECUTED = "executed"
    FAILED = "failed"


@dataclass
class AnalysisResult:
    """Result of analyzing one instrument in one cycle."""

    instrument: str
    status: AnalysisStatus
    signal: TradeSignal | None = None
    indicators: IndicatorSet | None = None
    amount: float | None = None
    outcome: TradeOutcome | None = None
    error: str | None = None


class AnalysisOrchestrator:
    """Sequential analysis loop over a set of instruments."""

    def __init__(
        self,
        instruments: list[InstrumentConfig],
        provider: PriceHistoryProvider,
        executor: TradeExecutor,
        config: EngineConfig | None = None,
        context: EngineContext | None = None,
        state_store: StateStore | None = None,
        cycle_interval: float = 300.0,
        instrument_delay: float = 10.0,
        error_cooldown: float = 60.0,
    ):
        """
        Args:
            instruments: Instruments to analyze each cycle (disabled ones are skipped)
            provider: Price-history collaborator
            executor: Trade-execution collaborator
            config: Core engine configuration
            context: Engine state (a fresh one if omitted)
            state_store: Snapshot persistence (none = in-memory only)
            cycle_interval: Seconds to sleep between full cycles
            instrument_delay: Seconds to pause between instruments
            error_cooldown: Seconds to pause after a loop-level error
        """
        self.instruments = instruments
        self.provider = provider
        self.executor = executor
        self.config = config or EngineConfig()
        self.context = context or EngineContext()
        self.state_store = state_store
        self.cycle_interval = cycle_interval
        self.instrument_delay = instrument_delay
        self.error_cooldown = error_cooldown

        self.calculator = IndicatorCalculator()
        self.signal_generator = SignalGenerator(self.config.min_profit_threshold)
        self.sizer = PositionSizer(self.config.max_trade_amount)
        self.tracker = AdaptationTracker()

        self.state = OrchestratorState.IDLE
        self.cycle_count = 0
        self._running = False
        self._stop_requested = False
        self._stop_event = asyncio.Event()

        # Serializes trade+adaptation against snapshot capture
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load_state(self) -> bool:
        """Restore engine state from the store. Missing or bad state = fresh start."""
        if self.state_store is None:
            return False

        snapshot = self.state_store.load()
        if snapshot is None:
            return False

        self.context.restore(snapshot)
        logger.info(
            "Bot confidence: %.1f%%, total trades: %d, win rate: %.1f%%",
            self.context.risk_state.confidence * 100,
            self.context.performance.total_trades,
            self.context.performance.win_rate * 100,
        )
        return True

    async def save_state(self) -> bool:
        """Persist a consistent snapshot of the engine state."""
        if self.state_store is None:
            return False

        async with self._lock:
            snapshot = self.context.snapshot()
        return await asyncio.to_thread(self.state_store.save, snapshot)

    def performance_report(self) -> str:
        return ReportFormatter.format_performance(
            self.context.performance, self.context.risk_state
        )

    # ------------------------------------------------------------------
    # Per-instrument analysis
    # ------------------------------------------------------------------

    @staticmethod
    def route(instrument: InstrumentConfig, action: Action) -> tuple[str, str]:
        """(input_asset, output_asset) for a decision: BUY spends token1, SELL spends token0."""
        if action == Action.BUY:
            return instrument.token1.address, instrument.token0.address
        if action == Action.SELL:
            return instrument.token0.address, instrument.token1.address
        raise ValueError(f"No swap route for {action.value}")

    async def analyze_instrument(self, instrument: InstrumentConfig) -> AnalysisResult:
        """
        Run the full decision pipeline for one instrument.

        Returns:
            AnalysisResult describing what happened
        """
        self.state = OrchestratorState.ANALYZING
        key = instrument.coingecko_id
        logger.info("Analyzing %s...", instrument.pair)

        prices = await self.provider.get_price_history(key, self.config.lookback_days)
        if len(prices) < self.config.min_history:
            logger.warning(
                "Insufficient data for %s: %d points (need %d)",
                instrument.pair,
                len(prices),
                self.config.min_history,
            )
            return AnalysisResult(instrument=instrument.pair, status=AnalysisStatus.INSUFFICIENT_DATA)

        indicators = self.calculator.calculate(prices)

        self.state = OrchestratorState.DECIDING
        signal = self.signal_generator.generate(indicators, prices)
        current_price = prices[-1].price

        logger.info(
            "%s price=%.4f signal=%s (%.1f%%) expected=%.2f%% rsi=%s",
            instrument.pair,
            current_price,
            signal.action.value,
            signal.confidence * 100,
            signal.expected_return * 100,
            f"{indicators.rsi:.1f}" if indicators.rsi is not None else "N/A",
        )

        async with self._lock:
            self.context.memory.store(
                key,
                {
                    "price": current_price,
                    "signal": signal.action.value,
                    "confidence": signal.confidence,
                    "expected_return": signal.expected_return,
                    "volatility": indicators.volatility,
                },
                MemoryTierName.IMMEDIATE,
            )

        if signal.confidence > self.config.confidence_threshold and signal.is_actionable:
            self.state = OrchestratorState.EXECUTING
            input_asset, output_asset = self.route(instrument, signal.action)

            async with self._lock:
                amount = self.sizer.size(signal, self.context.risk_state)
                logger.info("Executing %s on %s: %.6f", signal.action.value, instrument.pair, amount)
                outcome = await self.executor.execute(
                    input_asset, output_asset, amount, signal, pool_fee=instrument.pool_fee
                )
                self.tracker.record_outcome(self.context, outcome, signal)

            return AnalysisResult(
                instrument=instrument.pair,
                status=AnalysisStatus.EXECUTED,
                signal=signal,
                indicators=indicators,
                amount=amount,
                outcome=outcome,
            )

        self.state = OrchestratorState.SKIPPING
        logger.info("Holding %s - signal too weak", instrument.pair)
        return AnalysisResult(
            instrument=instrument.pair,
            status=AnalysisStatus.SKIPPED,
            signal=signal,
            indicators=indicators,
        )

    # ------------------------------------------------------------------
    # Cycle and scheduler
    # ------------------------------------------------------------------

    async def _pause(self, seconds: float) -> None:
        """Sleep, waking early if stop() is called."""
        if seconds <= 0 or self._stop_requested:
            return
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    async def tick(self) -> list[AnalysisResult]:
        """Run one analysis pass over all enabled instruments.

        Only a pass that reaches every instrument counts as a cycle; one
        cut short by stop() neither counts nor triggers the periodic save.
        """
        cycle = self.cycle_count + 1
        logger.info(
            "Analysis cycle #%d (system confidence %.1f%%)",
            cycle,
            self.context.risk_state.confidence * 100,
        )

        results: list[AnalysisResult] = []
        enabled = [i for i in self.instruments if i.enabled]

        for index, instrument in enumerate(enabled):
            if index > 0:
                await self._pause(self.instrument_delay)
            if self._stop_requested:
                logger.info("Stop requested, ending cycle #%d early", cycle)
                return results

            try:
                results.append(await self.analyze_instrument(instrument))
            except Exception as e:
                logger.exception("Analysis failed for %s", instrument.pair)
                results.append(
                    AnalysisResult(
                        instrument=instrument.pair,
                        status=AnalysisStatus.FAILED,
                        error=str(e),
                    )
                )

        self.cycle_count = cycle
        if self.cycle_count % SAVE_EVERY_CYCLES == 0:
            await self.save_state()

        if self.cycle_count % REPORT_EVERY_CYCLES == 0:
            logger.info(self.performance_report())

        return results

    async def run(self) -> None:
        """Run cycles until stop() is called."""
        if self._running:
            logger.warning("Bot is already running")
            return
        if self._stop_requested:
            logger.info("Stop already requested, not starting")
            self.state = OrchestratorState.STOPPED
            return

        self._running = True
        logger.info("Trading engine started")
        logger.info(self.performance_report())

        try:
            while not self._stop_requested:
                self.state = OrchestratorState.RUNNING
                try:
                    await self.tick()
                except Exception:
                    logger.exception("Cycle error, cooling down %.0fs", self.error_cooldown)
                    await self._pause(self.error_cooldown)
                    continue

                if self._stop_requested:
                    break

                self.state = OrchestratorState.SLEEPING
                logger.info("Waiting %.0fs for next cycle...", self.cycle_interval)
                await self._pause(self.cycle_interval)
        finally:
            self._running = False
            self.state = OrchestratorState.STOPPED
            await self.save_state()
            logger.info(self.performance_report())

    def stop(self) -> None:
        """Request a cooperative stop at the next loop boundary."""
        if self._stop_requested:
            return
        self._stop_requested = True
        self._stop_event.set()
        if not self._running:
            self.state = OrchestratorState.STOPPED
        logger.info("Bot stop requested")
