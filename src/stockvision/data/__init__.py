"""Market data access, caching and fallback data."""

from .alpha_vantage import AlphaVantageClient
from .base import MarketDataSource, QuoteSource
from .cache import QuoteCache
from .fetcher import fetch_many
from .synthetic import SyntheticMarket

__all__ = [
    "AlphaVantageClient",
    "MarketDataSource",
    "QuoteCache",
    "QuoteSource",
    "SyntheticMarket",
    "fetch_many",
]
