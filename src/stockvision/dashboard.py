"""Dashboard loading routines with fallback to synthetic data."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

import pandas as pd

from stockvision.config import DEFAULT_WATCHLIST, Settings
from stockvision.data.alpha_vantage import AlphaVantageClient
from stockvision.data.base import MarketDataSource
from stockvision.data.cache import QuoteCache
from stockvision.data.catalog import MARKET_INDICES, POPULAR_STOCKS, lookup
from stockvision.data.fetcher import fetch_many
from stockvision.data.synthetic import SyntheticMarket
from stockvision.domain.models import (
    CompanyOverview,
    MarketStatus,
    NewsItem,
    Quote,
    SearchMatch,
    SectorChange,
    TimeSeriesPoint,
    WatchlistEntry,
)
from stockvision.errors import StockVisionError

T = TypeVar("T")
Source = Literal["live", "fallback"]

MIN_SEARCH_LENGTH = 2
TIME_RANGES = {"1W": 7, "1M": 30, "3M": 90, "1Y": None}
DEFAULT_TIME_RANGE = "1M"

logger = logging.getLogger("stockvision.dashboard")


@dataclass(frozen=True)
class Loaded(Generic[T]):
    """Loaded data tagged with where it came from."""

    data: T
    source: Source

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"


def enrich_quotes(quotes: Sequence[Quote]) -> list[WatchlistEntry]:
    """Attach catalogue name and sector to each quote."""
    entries: list[WatchlistEntry] = []
    for quote in quotes:
        info = lookup(quote.symbol)
        entries.append(
            WatchlistEntry(
                quote=quote,
                name=info.name if info else quote.symbol,
                sector=info.sector if info else "N/A",
            )
        )
    return entries


def select_time_range(points: Sequence[TimeSeriesPoint], time_range: str) -> list[TimeSeriesPoint]:
    """Keep the most recent points for `time_range`, returned oldest-first."""
    ordered = sorted(points, key=lambda point: point.date)
    limit = TIME_RANGES.get(time_range.upper(), TIME_RANGES[DEFAULT_TIME_RANGE])
    if limit is None:
        return ordered
    return ordered[-limit:]


def top_movers(quotes: Sequence[Quote], count: int = 5) -> tuple[list[Quote], list[Quote]]:
    """Return (gainers, losers) ranked by percentage change."""
    gainers = sorted(quotes, key=lambda quote: quote.change_percent, reverse=True)[:count]
    losers = sorted(quotes, key=lambda quote: quote.change_percent)[:count]
    return gainers, losers


def candles_frame(points: Sequence[TimeSeriesPoint]) -> pd.DataFrame:
    """Build an ascending OHLCV DataFrame indexed by date."""
    columns = ["open", "high", "low", "close", "volume"]
    if not points:
        return pd.DataFrame(columns=columns, index=pd.DatetimeIndex([], name="date"))
    frame = pd.DataFrame(
        [
            {
                "date": point.date,
                "open": point.open,
                "high": point.high,
                "low": point.low,
                "close": point.close,
                "volume": point.volume,
            }
            for point in points
        ]
    )
    frame["date"] = pd.to_datetime(frame["date"], format="%Y-%m-%d")
    return frame.set_index("date").sort_index()[columns]


class DashboardService:
    """Loads every dashboard panel, substituting synthetic data on failure."""

    def __init__(
        self,
        source: MarketDataSource,
        fallback: SyntheticMarket | None = None,
        request_delay_seconds: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.source = source
        self.fallback = fallback if fallback is not None else SyntheticMarket()
        self.request_delay_seconds = request_delay_seconds
        self.sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> DashboardService:
        client = AlphaVantageClient(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.request_timeout,
            outputsize=settings.outputsize,
            cache=QuoteCache(ttl_seconds=settings.cache_ttl_seconds),
        )
        return cls(client, request_delay_seconds=settings.request_delay_seconds)

    def watchlist(self, symbols: Sequence[str] | None = None) -> Loaded[list[WatchlistEntry]]:
        symbols = list(symbols) if symbols is not None else list(DEFAULT_WATCHLIST)
        try:
            quotes = self._fetch_quotes(symbols)
        except StockVisionError as exc:
            logger.warning("Watchlist fetch failed, using fallback data: %s", exc)
            quotes = []
        if quotes:
            return Loaded(enrich_quotes(quotes), "live")
        wanted = {symbol.upper() for symbol in symbols}
        fallback = [quote for quote in self.fallback.quotes() if quote.symbol in wanted]
        return Loaded(enrich_quotes(fallback or self.fallback.quotes()), "fallback")

    def market_overview(self) -> Loaded[list[WatchlistEntry]]:
        try:
            quotes = self._fetch_quotes([info.symbol for info in MARKET_INDICES])
        except StockVisionError as exc:
            logger.warning("Index fetch failed, using fallback data: %s", exc)
            quotes = []
        if quotes:
            return Loaded(enrich_quotes(quotes), "live")
        entries = [
            WatchlistEntry(quote=quote, name=index.name, sector="Index")
            for index, quote in zip(self.fallback.indices, self.fallback.index_quotes())
        ]
        return Loaded(entries, "fallback")

    def search(self, query: str) -> Loaded[list[SearchMatch]]:
        text = query.strip()
        if len(text) < MIN_SEARCH_LENGTH:
            popular = [
                SearchMatch(
                    symbol=info.symbol, name=info.name, type="Equity", region="United States"
                )
                for info in POPULAR_STOCKS
            ]
            return Loaded(popular, "live")
        try:
            return Loaded(self.source.search_symbols(text), "live")
        except StockVisionError as exc:
            logger.warning("Search for %r failed, using fallback data: %s", text, exc)
        matches = [
            SearchMatch(symbol=stock.symbol, name=stock.name, type="Equity", region="United States")
            for stock in self.fallback.search(text)
        ]
        return Loaded(matches, "fallback")

    def candles(
        self, symbol: str, time_range: str = DEFAULT_TIME_RANGE
    ) -> Loaded[list[TimeSeriesPoint]]:
        try:
            points = self.source.fetch_time_series(symbol)
            return Loaded(select_time_range(points, time_range), "live")
        except StockVisionError as exc:
            logger.warning("Candles for %s failed, using fallback data: %s", symbol, exc)
        stock = self.fallback.stock(symbol) or self.fallback.stocks[0]
        return Loaded(select_time_range(stock.history, time_range), "fallback")

    def company_overview(self, symbol: str) -> CompanyOverview:
        return self.source.fetch_company_overview(symbol)

    def market_status(self) -> MarketStatus:
        return self.source.fetch_market_status()

    def sector_performance(self) -> list[SectorChange]:
        return sorted(self.fallback.sector_performance(), key=lambda s: s.change, reverse=True)

    def top_movers(
        self, quotes: Sequence[Quote] | None = None, count: int = 5
    ) -> tuple[list[Quote], list[Quote]]:
        return top_movers(self.fallback.quotes() if quotes is None else quotes, count)

    def market_news(self) -> list[NewsItem]:
        return self.fallback.news()

    def _fetch_quotes(self, symbols: Sequence[str]) -> list[Quote]:
        return fetch_many(
            self.source,
            symbols,
            delay_seconds=self.request_delay_seconds,
            sleep=self.sleep,
        )
