"""Sequential multi-symbol quote fetching under an upstream rate limit."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from stockvision.data.base import QuoteSource
from stockvision.domain.models import Quote
from stockvision.errors import DataProviderError

DEFAULT_REQUEST_DELAY_SECONDS = 0.2

logger = logging.getLogger("stockvision.data.fetcher")


def fetch_many(
    source: QuoteSource,
    symbols: Iterable[str],
    delay_seconds: float = DEFAULT_REQUEST_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> list[Quote]:
    """Fetch quotes one symbol at a time, skipping symbols that fail.

    Results keep input order, but a failed symbol is simply absent, so match
    results back to inputs by `Quote.symbol` rather than by position.
    """
    quotes: list[Quote] = []
    for symbol in symbols:
        try:
            quotes.append(source.fetch_quote(symbol))
        except DataProviderError as exc:
            logger.warning("Skipping quote for %s: %s", symbol, exc)
        sleep(delay_seconds)
    return quotes
