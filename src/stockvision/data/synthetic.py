"""Locally generated placeholder market data used when live loading fails."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date, timedelta

from stockvision.domain.models import NewsItem, Quote, SectorChange, StockInfo, TimeSeriesPoint

STOCK_SYMBOLS = [
    StockInfo("AAPL", "Apple Inc."),
    StockInfo("MSFT", "Microsoft Corporation"),
    StockInfo("GOOGL", "Alphabet Inc."),
    StockInfo("AMZN", "Amazon.com Inc."),
    StockInfo("META", "Meta Platforms Inc."),
    StockInfo("TSLA", "Tesla Inc."),
    StockInfo("NVDA", "NVIDIA Corporation"),
    StockInfo("JPM", "JPMorgan Chase & Co."),
    StockInfo("V", "Visa Inc."),
    StockInfo("WMT", "Walmart Inc."),
]

# name, symbol, price, change, change percent, history base price, volatility
INDEX_SPECS = [
    ("S&P 500", "SPX", 4782.45, 23.15, 0.49, 4500.0, 0.01),
    ("Dow Jones", "DJI", 38972.41, -34.12, -0.09, 38000.0, 0.008),
    ("NASDAQ", "IXIC", 16752.23, 78.81, 0.47, 16000.0, 0.012),
    ("Russell 2000", "RUT", 2028.97, 12.34, 0.61, 1900.0, 0.015),
]

SECTOR_PERFORMANCE = [
    SectorChange("Technology", 1.2),
    SectorChange("Healthcare", 0.8),
    SectorChange("Financials", -0.3),
    SectorChange("Consumer Discretionary", 0.5),
    SectorChange("Communication Services", 1.5),
    SectorChange("Industrials", 0.2),
    SectorChange("Consumer Staples", -0.1),
    SectorChange("Energy", -0.7),
    SectorChange("Utilities", 0.3),
    SectorChange("Real Estate", -0.4),
    SectorChange("Materials", 0.6),
]

HEADLINES = [
    (
        "Tech Stocks Rally on Strong Earnings Reports",
        "Major tech companies exceeded analyst expectations, driving market gains.",
        "Financial Times",
    ),
    (
        "Federal Reserve Signals Potential Rate Cut",
        "Central bank officials hint at possible interest rate reduction in coming months.",
        "Wall Street Journal",
    ),
    (
        "Oil Prices Surge Amid Supply Concerns",
        "Global oil benchmarks climb as geopolitical tensions threaten supply chains.",
        "Bloomberg",
    ),
    (
        "Retail Sales Beat Expectations in Q2",
        "Consumer spending shows resilience despite inflation pressures.",
        "CNBC",
    ),
    (
        "New IPO Sees Strong Market Debut",
        "Shares jump 30% on first day of trading, signaling investor confidence.",
        "Reuters",
    ),
]


def generate_history(
    base_price: float,
    volatility: float,
    days: int = 30,
    rng: random.Random | None = None,
    today: date | None = None,
) -> list[TimeSeriesPoint]:
    """Random-walk daily candles ending today, oldest first.

    Produces `days + 1` points. Prices never walk below 1.
    """
    rng = rng or random.Random()
    today = today or date.today()
    points: list[TimeSeriesPoint] = []
    current = base_price
    for offset in range(days, -1, -1):
        current = max(current + (rng.random() - 0.5) * volatility * current, 1.0)
        open_price = round(current, 2)
        close_price = round(current + (rng.random() - 0.5) * volatility * current * 0.5, 2)
        high_price = round(
            max(open_price, close_price, open_price + rng.random() * volatility * current), 2
        )
        low_price = round(
            min(open_price, close_price, open_price - rng.random() * volatility * current), 2
        )
        points.append(
            TimeSeriesPoint(
                date=(today - timedelta(days=offset)).isoformat(),
                open=open_price,
                high=high_price,
                low=low_price,
                close=close_price,
                volume=rng.randrange(1_000_000, 11_000_000),
            )
        )
        current = close_price
    return points


@dataclass(frozen=True)
class SyntheticStock:
    """Placeholder instrument with its generated history."""

    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    history: list[TimeSeriesPoint] = field(default_factory=list)

    def quote(self) -> Quote:
        last = self.history[-1]
        return Quote(
            symbol=self.symbol,
            price=self.price,
            change=self.change,
            change_percent=self.change_percent,
            volume=last.volume,
            open=last.open,
            high=last.high,
            low=last.low,
            previous_close=round(self.price - self.change, 2),
            latest_trading_day=last.date,
        )


def _stock_from_history(info: StockInfo, history: list[TimeSeriesPoint]) -> SyntheticStock:
    current = history[-1].close
    previous = history[-2].close
    change = current - previous
    return SyntheticStock(
        symbol=info.symbol,
        name=info.name,
        price=current,
        change=round(change, 2),
        change_percent=round(change / previous * 100, 2),
        history=history,
    )


class SyntheticMarket:
    """Seedable placeholder dataset for stocks, indices, sectors and news."""

    def __init__(self, seed: int | None = None, today: date | None = None) -> None:
        self.today = today or date.today()
        rng = random.Random(seed)
        self.stocks: list[SyntheticStock] = []
        for info in STOCK_SYMBOLS:
            base_price = rng.random() * 1000 + 50
            volatility = rng.random() * 0.05 + 0.01
            history = generate_history(base_price, volatility, rng=rng, today=self.today)
            self.stocks.append(_stock_from_history(info, history))

        self.indices = [
            SyntheticStock(
                symbol=symbol,
                name=name,
                price=price,
                change=change,
                change_percent=change_percent,
                history=generate_history(base, volatility, rng=rng, today=self.today),
            )
            for name, symbol, price, change, change_percent, base, volatility in INDEX_SPECS
        ]
        self._by_symbol = {stock.symbol: stock for stock in [*self.stocks, *self.indices]}

    def stock(self, symbol: str) -> SyntheticStock | None:
        return self._by_symbol.get(symbol.strip().upper())

    def quotes(self) -> list[Quote]:
        return [stock.quote() for stock in self.stocks]

    def index_quotes(self) -> list[Quote]:
        return [index.quote() for index in self.indices]

    def search(self, query: str) -> list[SyntheticStock]:
        """Case-insensitive substring match on symbol or name."""
        needle = query.strip().lower()
        return [
            stock
            for stock in self.stocks
            if needle in stock.symbol.lower() or needle in stock.name.lower()
        ]

    def sector_performance(self) -> list[SectorChange]:
        return list(SECTOR_PERFORMANCE)

    def news(self) -> list[NewsItem]:
        stamp = self.today.isoformat()
        return [
            NewsItem(id=index, title=title, summary=summary, source=source, date=stamp)
            for index, (title, summary, source) in enumerate(HEADLINES, start=1)
        ]
