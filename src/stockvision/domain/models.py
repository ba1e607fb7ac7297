"""Core market data domain models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

CompanyOverview = dict[str, str]


class Endpoint(StrEnum):
    """Upstream operation kinds, valued by their cache key prefix."""

    TIME_SERIES = "timeseries"
    OVERVIEW = "overview"
    QUOTE = "quote"
    SEARCH = "search"
    MARKET_STATUS = "market-status"

    @property
    def function(self) -> str:
        """Return the upstream `function` query parameter."""
        return _UPSTREAM_FUNCTIONS[self]

    def cache_key(self, subject: str | None = None) -> str:
        """Build the cache key for this endpoint and an optional symbol or keyword."""
        if subject is None:
            return self.value
        return f"{self.value}-{subject}"


_UPSTREAM_FUNCTIONS = {
    Endpoint.TIME_SERIES: "TIME_SERIES_DAILY",
    Endpoint.OVERVIEW: "OVERVIEW",
    Endpoint.QUOTE: "GLOBAL_QUOTE",
    Endpoint.SEARCH: "SYMBOL_SEARCH",
    # Market status is derived from a reference quote.
    Endpoint.MARKET_STATUS: "GLOBAL_QUOTE",
}


@dataclass(frozen=True)
class Quote:
    """Point-in-time price and volume snapshot for a symbol."""

    symbol: str
    price: float
    change: float
    change_percent: float
    volume: int
    open: float
    high: float
    low: float
    previous_close: float
    latest_trading_day: str


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Single daily OHLCV candle."""

    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class SearchMatch:
    """Symbol search hit."""

    symbol: str
    name: str
    type: str
    region: str
    market_open: str = ""
    market_close: str = ""
    timezone: str = ""
    currency: str = ""
    match_score: float = 0.0


@dataclass(frozen=True)
class MarketStatus:
    """Whether the US equity market is open, as of `current_time`."""

    is_open: bool
    current_time: str
    last_updated: str


@dataclass(frozen=True)
class StockInfo:
    """Catalogue entry naming a symbol."""

    symbol: str
    name: str
    sector: str = "N/A"


@dataclass(frozen=True)
class WatchlistEntry:
    """Quote enriched with catalogue metadata."""

    quote: Quote
    name: str
    sector: str

    @property
    def symbol(self) -> str:
        return self.quote.symbol


@dataclass(frozen=True)
class SectorChange:
    """Daily percentage change of a market sector."""

    name: str
    change: float


@dataclass(frozen=True)
class NewsItem:
    """Market headline."""

    id: int
    title: str
    summary: str
    source: str
    date: str


def overview_number(overview: Mapping[str, str], field: str) -> float | None:
    """Parse a numeric overview field, returning None for placeholders."""
    value = overview.get(field)
    if value is None:
        return None
    text = str(value).strip()
    if not text or text in {"None", "-"}:
        return None
    try:
        return float(text)
    except ValueError:
        return None
