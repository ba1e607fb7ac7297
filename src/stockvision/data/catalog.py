"""Reference lists of well-known symbols."""

from __future__ import annotations

from stockvision.domain.models import StockInfo

POPULAR_STOCKS = [
    StockInfo("AAPL", "Apple Inc.", "Technology"),
    StockInfo("MSFT", "Microsoft Corporation", "Technology"),
    StockInfo("GOOGL", "Alphabet Inc.", "Technology"),
    StockInfo("AMZN", "Amazon.com Inc.", "Consumer Cyclical"),
    StockInfo("META", "Meta Platforms Inc.", "Technology"),
    StockInfo("TSLA", "Tesla Inc.", "Consumer Cyclical"),
    StockInfo("NVDA", "NVIDIA Corporation", "Technology"),
    StockInfo("NFLX", "Netflix Inc.", "Communication Services"),
    StockInfo("PYPL", "PayPal Holdings Inc.", "Financial Services"),
    StockInfo("INTC", "Intel Corporation", "Technology"),
    StockInfo("AMD", "Advanced Micro Devices Inc.", "Technology"),
    StockInfo("CRM", "Salesforce Inc.", "Technology"),
    StockInfo("CSCO", "Cisco Systems Inc.", "Technology"),
    StockInfo("ADBE", "Adobe Inc.", "Technology"),
    StockInfo("ORCL", "Oracle Corporation", "Technology"),
]

# ETF proxies for the headline indices.
MARKET_INDICES = [
    StockInfo("SPY", "S&P 500"),
    StockInfo("DIA", "Dow Jones"),
    StockInfo("QQQ", "Nasdaq"),
    StockInfo("IWM", "Russell 2000"),
    StockInfo("VGK", "FTSE Europe"),
    StockInfo("EWJ", "Nikkei 225"),
]

_BY_SYMBOL = {info.symbol: info for info in [*POPULAR_STOCKS, *MARKET_INDICES]}


def lookup(symbol: str) -> StockInfo | None:
    """Return the catalogue entry for `symbol`, if any."""
    return _BY_SYMBOL.get(symbol.strip().upper())
