"""Domain models."""

from .models import (
    CompanyOverview,
    Endpoint,
    MarketStatus,
    NewsItem,
    Quote,
    SearchMatch,
    SectorChange,
    StockInfo,
    TimeSeriesPoint,
    WatchlistEntry,
    overview_number,
)

__all__ = [
    "CompanyOverview",
    "Endpoint",
    "MarketStatus",
    "NewsItem",
    "Quote",
    "SearchMatch",
    "SectorChange",
    "StockInfo",
    "TimeSeriesPoint",
    "WatchlistEntry",
    "overview_number",
]
