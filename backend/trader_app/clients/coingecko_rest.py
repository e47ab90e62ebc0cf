"""CoinGecko REST API client for fetching price history."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from trader_core.models import PricePoint

logger = logging.getLogger(__name__)

PUBLIC_URL = "https://api.coingecko.com"
PRO_URL = "https://pro-api.coingecko.com"


class RateLimiter:
    """Hands out evenly spaced call slots.

    Each acquire reserves the next slot ``60 / calls_per_minute`` seconds
    after the previous one and sleeps until it arrives.
    """

    def __init__(self, calls_per_minute: int = 30):
        self.calls_per_minute = calls_per_minute
        self.interval = 60.0 / calls_per_minute
        self._next_slot = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            loop = asyncio.get_running_loop()
            delay = self._next_slot - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)
            self._next_slot = loop.time() + self.interval


class CoinGeckoClient:
    """CoinGecko market-chart client.

    Implements the price-history provider used by the orchestrator.
    Failures are logged and reported as an empty series.

    The API key header depends on the plan: the pro host takes
    ``x-cg-pro-api-key``, the public host ``x-cg-demo-api-key``.
    """

    def __init__(
        self,
        base_url: str = PUBLIC_URL,
        api_key: str = "",
        vs_currency: str = "usd",
        calls_per_minute: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.vs_currency = vs_currency
        self.rate_limiter = RateLimiter(calls_per_minute)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def key_header(self) -> str:
        if self.base_url.startswith(PRO_URL):
            return "x-cg-pro-api-key"
        return "x-cg-demo-api-key"

    def _http(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self.api_key:
                headers[self.key_header] = self.api_key
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=30.0,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            if not self._client.is_closed:
                await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        """Rate-limited GET. Raises httpx.HTTPStatusError on non-2xx."""
        await self.rate_limiter.acquire()
        response = await self._http().get(path, params=params)
        if response.status_code == 429:
            logger.warning(
                "CoinGecko rate limit hit (retry-after=%s)",
                response.headers.get("retry-after", "?"),
            )
        response.raise_for_status()
        return response.json()

    @staticmethod
    def parse_prices(data: Any) -> list[PricePoint]:
        """Convert a market_chart payload into an ascending price series.

        ``data["prices"]`` is a list of ``[epoch_ms, price]`` pairs; pairs
        with a null price are dropped.
        """
        points = [
            PricePoint(
                timestamp=datetime.fromtimestamp(ts_ms / 1000, tz=timezone.utc),
                price=float(price),
            )
            for ts_ms, price in (item[:2] for item in data["prices"])
            if price is not None
        ]
        points.sort(key=lambda p: p.timestamp)
        return points

    async def get_price_history(self, instrument_id: str, days: int = 90) -> list[PricePoint]:
        """
        Fetch price history for a coin.

        Args:
            instrument_id: CoinGecko coin id (e.g., "ethereum")
            days: Lookback window; daily points above 30 days, hourly otherwise

        Returns:
            Ascending list of PricePoint, empty on any failure
        """
        params = {
            "vs_currency": self.vs_currency,
            "days": days,
            "interval": "daily" if days > 30 else "hourly",
        }

        try:
            data = await self._get_json(f"/api/v3/coins/{instrument_id}/market_chart", params)
            return self.parse_prices(data)
        except httpx.HTTPError as e:
            logger.warning("Error fetching data for %s: %s", instrument_id, e)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning("Malformed market data for %s: %s", instrument_id, e)
        return []
