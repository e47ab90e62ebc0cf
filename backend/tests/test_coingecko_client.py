"""Tests for the CoinGecko REST client."""

import asyncio

import httpx
import pytest

from trader_app.clients import CoinGeckoClient, RateLimiter

MARKET_CHART = {
    "prices": [
        [1_700_086_400_000, 2010.5],
        [1_700_000_000_000, 2000.0],
        [1_700_172_800_000, None],
        [1_700_259_200_000, 1995.25],
    ],
    "market_caps": [],
    "total_volumes": [],
}


def make_client(handler, **kwargs) -> CoinGeckoClient:
    return CoinGeckoClient(
        base_url="https://api.test",
        calls_per_minute=6000,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestParsePrices:
    def test_sorted_and_skips_missing(self):
        points = CoinGeckoClient.parse_prices(MARKET_CHART)

        assert [p.price for p in points] == [2000.0, 2010.5, 1995.25]
        assert points[0].timestamp.timestamp() == 1_700_000_000

    def test_missing_prices_key(self):
        with pytest.raises(KeyError):
            CoinGeckoClient.parse_prices({"market_caps": []})


class TestGetPriceHistory:
    @pytest.mark.asyncio
    async def test_fetches_daily_for_long_window(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=MARKET_CHART)

        client = make_client(handler)
        try:
            points = await client.get_price_history("ethereum", days=90)
        finally:
            await client.close()

        assert len(points) == 3
        assert len(requests) == 1
        request = requests[0]
        assert request.url.path == "/api/v3/coins/ethereum/market_chart"
        assert request.url.params["vs_currency"] == "usd"
        assert request.url.params["days"] == "90"
        assert request.url.params["interval"] == "daily"
        assert "x-cg-demo-api-key" not in request.headers

    @pytest.mark.asyncio
    async def test_fetches_hourly_for_short_window(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=MARKET_CHART)

        client = make_client(handler, api_key="demo-key")
        try:
            await client.get_price_history("uniswap", days=30)
        finally:
            await client.close()

        assert requests[0].url.params["interval"] == "hourly"
        assert requests[0].headers["x-cg-demo-api-key"] == "demo-key"

    @pytest.mark.asyncio
    async def test_pro_host_uses_pro_key_header(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=MARKET_CHART)

        client = CoinGeckoClient(
            base_url="https://pro-api.coingecko.com/",
            api_key="pro-key",
            calls_per_minute=6000,
            transport=httpx.MockTransport(handler),
        )
        try:
            await client.get_price_history("ethereum")
        finally:
            await client.close()

        assert requests[0].headers["x-cg-pro-api-key"] == "pro-key"
        assert "x-cg-demo-api-key" not in requests[0].headers
        assert requests[0].url.host == "pro-api.coingecko.com"

    @pytest.mark.asyncio
    async def test_server_error_returns_empty(self):
        client = make_client(lambda request: httpx.Response(500, json={"error": "down"}))
        try:
            assert await client.get_price_history("ethereum") == []
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_rate_limited_returns_empty(self):
        client = make_client(lambda request: httpx.Response(429))
        try:
            assert await client.get_price_history("ethereum") == []
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_transport_error_returns_empty(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        try:
            assert await client.get_price_history("ethereum") == []
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_malformed_payload_returns_empty(self):
        client = make_client(lambda request: httpx.Response(200, json={"prices": [[1]]}))
        try:
            assert await client.get_price_history("ethereum") == []
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_non_json_returns_empty(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))
        try:
            assert await client.get_price_history("ethereum") == []
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = make_client(lambda request: httpx.Response(200, json=MARKET_CHART))
        await client.get_price_history("ethereum")
        await client.close()
        await client.close()
        assert client._client is None


class TestRateLimiter:
    @pytest.mark.asyncio
    async def test_spaces_calls(self):
        limiter = RateLimiter(calls_per_minute=1200)  # 50ms apart
        loop = asyncio.get_running_loop()

        start = loop.time()
        await limiter.acquire()
        await limiter.acquire()
        await limiter.acquire()

        assert loop.time() - start >= 0.09
