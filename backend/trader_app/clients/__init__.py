"""External API clients."""

from trader_app.clients.coingecko_rest import CoinGeckoClient, RateLimiter

__all__ = [
    "CoinGeckoClient",
    "RateLimiter",
]
