from __future__ import annotations

import pytest

from stockvision.data.cache import QuoteCache


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_put_then_get_returns_value() -> None:
    cache = QuoteCache(clock=FakeClock())
    cache.put("quote-AAPL", {"price": 1.0})

    assert cache.get("quote-AAPL") == {"price": 1.0}


def test_get_missing_key_is_none() -> None:
    cache = QuoteCache(clock=FakeClock())

    assert cache.get("quote-MSFT") is None
    assert "quote-MSFT" not in cache


def test_entry_is_fresh_until_validity_window_elapses() -> None:
    clock = FakeClock()
    cache = QuoteCache(ttl_seconds=300, clock=clock)
    cache.put("quote-AAPL", "v1")

    clock.advance(299.999)
    assert cache.get("quote-AAPL") == "v1"

    clock.advance(0.001)
    assert cache.get("quote-AAPL") is None


def test_stale_entry_is_ignored_but_not_evicted() -> None:
    clock = FakeClock()
    cache = QuoteCache(ttl_seconds=300, clock=clock)
    cache.put("quote-AAPL", "v1")
    clock.advance(600)

    assert cache.get("quote-AAPL") is None
    assert len(cache) == 1


def test_put_overwrites_with_fresh_timestamp() -> None:
    clock = FakeClock()
    cache = QuoteCache(ttl_seconds=300, clock=clock)
    cache.put("quote-AAPL", "v1")
    clock.advance(250)
    cache.put("quote-AAPL", "v2")
    clock.advance(250)

    assert cache.get("quote-AAPL") == "v2"
    assert len(cache) == 1


def test_cache_rejects_non_positive_ttl() -> None:
    with pytest.raises(ValueError):
        QuoteCache(ttl_seconds=0)
