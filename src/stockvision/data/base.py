"""Market data source contract."""

from __future__ import annotations

from typing import Protocol

from stockvision.domain.models import (
    CompanyOverview,
    MarketStatus,
    Quote,
    SearchMatch,
    TimeSeriesPoint,
)


class QuoteSource(Protocol):
    """Interface for single-symbol quote retrieval."""

    def fetch_quote(self, symbol: str) -> Quote:
        """Return the latest quote or raise DataProviderError."""


class MarketDataSource(QuoteSource, Protocol):
    """Interface for every operation the dashboard loads."""

    def fetch_time_series(self, symbol: str) -> list[TimeSeriesPoint]:
        """Return daily candles ordered newest-first."""

    def fetch_company_overview(self, symbol: str) -> CompanyOverview:
        """Return fundamental metrics as text fields."""

    def search_symbols(self, keywords: str) -> list[SearchMatch]:
        """Return symbol search hits."""

    def fetch_market_status(self) -> MarketStatus:
        """Return the current market open state."""
