from __future__ import annotations

import random
from datetime import date

import pytest

from stockvision.data.synthetic import SyntheticMarket, generate_history

TODAY = date(2024, 5, 10)


def test_generate_history_produces_consistent_candles() -> None:
    points = generate_history(150.0, 0.05, days=30, rng=random.Random(7), today=TODAY)

    assert len(points) == 31
    assert points[0].date == "2024-04-10"
    assert points[-1].date == "2024-05-10"
    for point in points:
        assert point.high >= max(point.open, point.close)
        assert point.low <= min(point.open, point.close)
        assert 1_000_000 <= point.volume < 11_000_000


def test_generate_history_never_walks_below_one() -> None:
    points = generate_history(1.0, 0.06, days=60, rng=random.Random(3), today=TODAY)

    assert all(point.open >= 1.0 for point in points)


def test_synthetic_market_is_reproducible_with_seed() -> None:
    first = SyntheticMarket(seed=42, today=TODAY)
    second = SyntheticMarket(seed=42, today=TODAY)

    assert first.quotes() == second.quotes()
    assert len(first.stocks) == 10
    assert [index.symbol for index in first.indices] == ["SPX", "DJI", "IXIC", "RUT"]


def test_synthetic_quote_derives_change_from_last_two_closes() -> None:
    market = SyntheticMarket(seed=1, today=TODAY)
    stock = market.stock("aapl")

    assert stock is not None
    quote = stock.quote()
    assert quote.price == stock.history[-1].close
    assert quote.previous_close == stock.history[-2].close
    assert quote.change == round(stock.history[-1].close - stock.history[-2].close, 2)
    assert quote.latest_trading_day == "2024-05-10"


def test_synthetic_search_matches_symbol_or_name() -> None:
    market = SyntheticMarket(seed=1, today=TODAY)

    assert [stock.symbol for stock in market.search("micro")] == ["MSFT"]
    assert [stock.symbol for stock in market.search("jpm")] == ["JPM"]
    assert market.search("zzz") == []


def test_synthetic_news_is_dated_today() -> None:
    market = SyntheticMarket(seed=1, today=TODAY)
    news = market.news()

    assert len(news) == 5
    assert {item.date for item in news} == {"2024-05-10"}
    assert [item.id for item in news] == [1, 2, 3, 4, 5]


def test_synthetic_index_quotes_reconcile_price_and_change() -> None:
    market = SyntheticMarket(seed=1, today=TODAY)
    quotes = market.index_quotes()

    assert [quote.symbol for quote in quotes] == ["SPX", "DJI", "IXIC", "RUT"]
    assert quotes[0].price == 4782.45
    assert quotes[0].previous_close == 4759.3
    for quote in quotes:
        assert quote.previous_close + quote.change == pytest.approx(quote.price)
