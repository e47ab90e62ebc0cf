"""Command-line entry point for the adaptive trading engine.

Usage:
    python -m trader_app                     # run until Ctrl+C
    python -m trader_app --once              # one analysis cycle, then save
    python -m trader_app --report            # print the saved performance report
    python -m trader_app --config my.yaml --state data/bot.json --yes
"""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

# Configure logging FIRST, before any other imports
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)

# Reduce noise from third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)

from pydantic import ValidationError

from trader_core.context import EngineContext

from trader_app.clients import CoinGeckoClient
from trader_app.config import Settings, get_settings
from trader_app.report import ReportFormatter
from trader_app.services import AnalysisOrchestrator, PaperTradeExecutor
from trader_app.storage import StateStore
from trader_app.trading_config import load_trading_config

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Adaptive signal-generation trading engine (paper execution)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to trading.yaml (default: ./trading.yaml, else built-in pairs)",
    )
    parser.add_argument(
        "--state",
        type=str,
        default=None,
        help="Engine state file (default: STATE_PATH or bot_data.json)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single analysis cycle, save state, and exit",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Print the performance report from saved state and exit",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Skip the interactive start confirmation",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(argv)


def confirm_start() -> bool:
    """Ask for confirmation when attached to a terminal."""
    if not sys.stdin.isatty():
        return True
    answer = input("\nStart trading? (yes/no): ").strip().lower()
    return answer in ("yes", "y")


def build_orchestrator(
    settings: Settings,
    config_path: Path | None = None,
) -> tuple[AnalysisOrchestrator, CoinGeckoClient]:
    """Wire collaborators and restore saved state."""
    trading_config = load_trading_config(config_path)
    instruments = trading_config.get_enabled_instruments()

    client = CoinGeckoClient(
        base_url=settings.coingecko_base_url,
        api_key=settings.coingecko_api_key,
        calls_per_minute=settings.coingecko_calls_per_minute,
    )
    context = EngineContext()
    context.risk_state.learning_rate = settings.learning_rate

    orchestrator = AnalysisOrchestrator(
        instruments=instruments,
        provider=client,
        executor=PaperTradeExecutor(fee_rate=settings.paper_fee_rate),
        config=settings.to_engine_config(),
        context=context,
        state_store=StateStore(settings.state_path),
        cycle_interval=settings.cycle_interval,
        instrument_delay=settings.instrument_delay,
        error_cooldown=settings.error_cooldown,
    )
    orchestrator.load_state()

    print(ReportFormatter.format_configuration(settings, instruments))
    return orchestrator, client


async def run(args: argparse.Namespace, settings: Settings) -> int:
    orchestrator, client = build_orchestrator(settings, args.config)

    try:
        if args.once:
            await orchestrator.tick()
            await orchestrator.save_state()
            print(orchestrator.performance_report())
            return 0

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, orchestrator.stop)
            except NotImplementedError:
                # Windows: rely on KeyboardInterrupt
                pass

        await orchestrator.run()
        return 0
    finally:
        await client.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Configuration errors:\n{e}")
        print("Please check your .env file and fix the issues above.")
        return 2

    if args.state:
        settings = settings.model_copy(update={"state_path": args.state})

    if args.report:
        snapshot = StateStore(settings.state_path).load()
        if snapshot is None:
            print("No saved state found.")
            return 1
        context = EngineContext.from_snapshot(snapshot)
        print(ReportFormatter.format_performance(context.performance, context.risk_state))
        return 0

    print("Adaptive Trading Engine")
    print("=" * 40)
    print("Experimental software: trading involves significant financial risk.")

    if not args.once and not args.yes and not confirm_start():
        print("Startup cancelled")
        return 0

    try:
        return asyncio.run(run(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
