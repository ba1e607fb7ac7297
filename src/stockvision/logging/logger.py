"""Concise human-readable dashboard logger."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from stockvision.domain.models import (
    MarketStatus,
    NewsItem,
    Quote,
    SearchMatch,
    SectorChange,
    TimeSeriesPoint,
    WatchlistEntry,
)


class DashboardLogger:
    """Console logger with fixed line types."""

    def __init__(self, level: str = "INFO") -> None:
        self._logger = logging.getLogger("stockvision")
        self._logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self._logger.propagate = False
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s | %(message)s", "%Y-%m-%d %H:%M:%S")
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

    def quote(self, quote: Quote, name: str | None = None) -> None:
        parts = [f"quote | {quote.symbol}"]
        if name and name != quote.symbol:
            parts.append(name)
        parts.append(f"${quote.price:,.2f}")
        parts.append(f"{quote.change:+,.2f} ({quote.change_percent:+.2f}%)")
        parts.append(f"vol {self._format_volume(quote.volume)}")
        self._logger.info(" | ".join(parts))

    def watchlist(self, entries: list[WatchlistEntry], source: str) -> None:
        self._logger.info("watchlist | %s symbols | source %s", len(entries), source)
        for entry in entries:
            self.quote(entry.quote, name=entry.name)

    def fallback(self, what: str, reason: str) -> None:
        self._logger.warning("fallback | %s | %s", what, reason)

    def status(self, status: MarketStatus) -> None:
        self._logger.info(
            "status | %s | market time %s",
            "open" if status.is_open else "closed",
            status.current_time,
        )

    def search(self, query: str, matches: list[SearchMatch], source: str) -> None:
        self._logger.info("search | %r | %s matches | source %s", query, len(matches), source)
        for match in matches:
            self._logger.info("match | %s | %s | %s", match.symbol, match.name, match.region)

    def candles(self, symbol: str, points: list[TimeSeriesPoint], source: str) -> None:
        if not points:
            self._logger.info("candles | %s | none | source %s", symbol, source)
            return
        first, last = points[0], points[-1]
        self._logger.info(
            "candles | %s | %s bars %s..%s | close $%s | source %s",
            symbol,
            len(points),
            first.date,
            last.date,
            f"{last.close:,.2f}",
            source,
        )

    def overview(self, symbol: str, overview: Mapping[str, str]) -> None:
        fields = ("Name", "Sector", "Industry", "MarketCapitalization", "PERatio")
        parts = [f"overview | {symbol}"]
        parts.extend(f"{key} {overview[key]}" for key in fields if overview.get(key))
        self._logger.info(" | ".join(parts))

    def sectors(self, sectors: list[SectorChange]) -> None:
        for sector in sectors:
            self._logger.info("sector | %s | %+.2f%%", sector.name, sector.change)

    def movers(self, gainers: list[Quote], losers: list[Quote]) -> None:
        for quote in gainers:
            self._logger.info("gainer | %s | %+.2f%%", quote.symbol, quote.change_percent)
        for quote in losers:
            self._logger.info("loser | %s | %+.2f%%", quote.symbol, quote.change_percent)

    def news(self, items: list[NewsItem]) -> None:
        for item in items:
            self._logger.info("news | %s | %s | %s", item.date, item.source, item.title)

    def error(self, message: str) -> None:
        self._logger.error("error | %s", message)

    @staticmethod
    def _format_volume(value: int) -> str:
        volume = float(value)
        for threshold, suffix in ((1e9, "B"), (1e6, "M"), (1e3, "K")):
            if abs(volume) >= threshold:
                return f"{volume / threshold:.2f}{suffix}"
        return str(int(volume))
