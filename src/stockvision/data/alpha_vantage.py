"""Alpha Vantage HTTP client with a time-boxed response cache."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any, TypeVar
from zoneinfo import ZoneInfo

import pandas as pd
import requests

from stockvision.data.cache import QuoteCache
from stockvision.domain.models import (
    CompanyOverview,
    Endpoint,
    MarketStatus,
    Quote,
    SearchMatch,
    TimeSeriesPoint,
)
from stockvision.errors import MissingDataError, NetworkError, UpstreamError

T = TypeVar("T")

MARKET_TIMEZONE = ZoneInfo("America/New_York")
ADVISORY_KEYS = ("Note", "Information")
TIME_SERIES_KEY = "Time Series (Daily)"

QUOTE_FIELDS = {
    "01. symbol": "symbol",
    "02. open": "open",
    "03. high": "high",
    "04. low": "low",
    "05. price": "price",
    "06. volume": "volume",
    "07. latest trading day": "latest_trading_day",
    "08. previous close": "previous_close",
    "09. change": "change",
    "10. change percent": "change_percent",
}

CANDLE_FIELDS = {
    "1. open": "open",
    "2. high": "high",
    "3. low": "low",
    "4. close": "close",
    "5. volume": "volume",
}

SEARCH_FIELDS = {
    "1. symbol": "symbol",
    "2. name": "name",
    "3. type": "type",
    "4. region": "region",
    "5. marketOpen": "market_open",
    "6. marketClose": "market_close",
    "7. timezone": "timezone",
    "8. currency": "currency",
    "9. matchScore": "match_score",
}


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _parse_float(value: Any, field: str, subject: str) -> float:
    text = str(value).strip().rstrip("%")
    try:
        return float(text)
    except ValueError as exc:
        raise MissingDataError(f"Malformed {field} {value!r} for {subject}") from exc


def _parse_int(value: Any, field: str, subject: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise MissingDataError(f"Malformed {field} {value!r} for {subject}") from exc


def decode_quote(payload: Mapping[str, Any], symbol: str) -> Quote:
    """Map a GLOBAL_QUOTE payload onto a Quote."""
    raw = payload.get("Global Quote")
    if raw is not None and not isinstance(raw, Mapping):
        raise MissingDataError(f"Malformed quote payload for {symbol}")
    if not raw or not raw.get("01. symbol"):
        raise MissingDataError(f"No quote data found for {symbol}")

    missing = [key for key in QUOTE_FIELDS if key not in raw]
    if missing:
        raise MissingDataError(f"Quote for {symbol} missing fields: {missing}")
    fields = {name: raw[key] for key, name in QUOTE_FIELDS.items()}

    return Quote(
        symbol=str(fields["symbol"]),
        price=_parse_float(fields["price"], "price", symbol),
        change=_parse_float(fields["change"], "change", symbol),
        change_percent=_parse_float(fields["change_percent"], "change percent", symbol),
        volume=_parse_int(fields["volume"], "volume", symbol),
        open=_parse_float(fields["open"], "open", symbol),
        high=_parse_float(fields["high"], "high", symbol),
        low=_parse_float(fields["low"], "low", symbol),
        previous_close=_parse_float(fields["previous_close"], "previous close", symbol),
        latest_trading_day=str(fields["latest_trading_day"]),
    )


def decode_time_series(payload: Mapping[str, Any], symbol: str) -> list[TimeSeriesPoint]:
    """Map a TIME_SERIES_DAILY payload onto candles ordered newest-first."""
    series = payload.get(TIME_SERIES_KEY)
    if not series:
        raise MissingDataError(f"Alpha Vantage response missing daily time series for {symbol}")
    if not isinstance(series, Mapping) or not all(
        isinstance(candle, Mapping) for candle in series.values()
    ):
        raise MissingDataError(f"Malformed daily time series for {symbol}")

    frame = pd.DataFrame.from_dict(series, orient="index").rename(columns=CANDLE_FIELDS)
    required_cols = list(CANDLE_FIELDS.values())
    missing_cols = [col for col in required_cols if col not in frame.columns]
    if missing_cols:
        raise MissingDataError(f"Data for {symbol} missing required columns: {missing_cols}")

    try:
        frame.index = pd.to_datetime(frame.index, format="%Y-%m-%d")
    except ValueError as exc:
        raise MissingDataError(f"Data for {symbol} has malformed dates") from exc
    frame = frame[required_cols].apply(pd.to_numeric, errors="coerce")
    if frame.isna().to_numpy().any():
        raise MissingDataError(f"Data for {symbol} has non-numeric OHLCV values")

    frame = frame.sort_index(ascending=False)
    return [
        TimeSeriesPoint(
            date=row.Index.strftime("%Y-%m-%d"),
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=int(row.volume),
        )
        for row in frame.itertuples()
    ]


def decode_overview(payload: Mapping[str, Any], symbol: str) -> CompanyOverview:
    """Pass the OVERVIEW payload through as text fields."""
    if not payload.get("Symbol"):
        raise MissingDataError(f"No company overview found for {symbol}")
    return {
        str(key): str(value)
        for key, value in payload.items()
        if key not in ADVISORY_KEYS
    }


def decode_search(payload: Mapping[str, Any], keywords: str) -> list[SearchMatch]:
    """Map a SYMBOL_SEARCH payload onto search matches."""
    matches = payload.get("bestMatches")
    if matches is None:
        raise MissingDataError(f"Search response missing matches for {keywords!r}")
    if not isinstance(matches, list):
        raise MissingDataError(f"Malformed search matches for {keywords!r}")

    results: list[SearchMatch] = []
    for match in matches:
        if not isinstance(match, Mapping):
            raise MissingDataError(f"Malformed search match for {keywords!r}")
        fields = {name: str(match.get(key, "")) for key, name in SEARCH_FIELDS.items()}
        if not fields["symbol"]:
            raise MissingDataError(f"Search match without symbol for {keywords!r}")
        score = fields.pop("match_score")
        results.append(
            SearchMatch(
                **fields,
                match_score=_parse_float(score, "match score", keywords) if score else 0.0,
            )
        )
    return results


def market_status_at(now: datetime) -> MarketStatus:
    """Derive market open state from New York wall-clock day and hour."""
    market_time = now.astimezone(MARKET_TIMEZONE)
    is_weekday = market_time.weekday() < 5
    is_market_hours = 9 <= market_time.hour < 16
    return MarketStatus(
        is_open=is_weekday and is_market_hours,
        current_time=market_time.isoformat(),
        last_updated=now.astimezone(UTC).isoformat(),
    )


class AlphaVantageClient:
    """Alpha Vantage client that consults a shared cache before every request."""

    BASE_URL = "https://www.alphavantage.co/query"
    REFERENCE_SYMBOL = "SPY"

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = 15,
        outputsize: str = "full",
        cache: QuoteCache | None = None,
        session: requests.Session | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.outputsize = outputsize
        self.cache = cache if cache is not None else QuoteCache()
        self.session = session if session is not None else requests.Session()
        self.clock = clock
        self.logger = logging.getLogger("stockvision.data.alpha_vantage")

    def fetch_time_series(self, symbol: str) -> list[TimeSeriesPoint]:
        """Fetch daily candles, newest first."""
        return self._cached(
            Endpoint.TIME_SERIES,
            symbol,
            lambda: decode_time_series(
                self._request(Endpoint.TIME_SERIES, symbol=symbol, outputsize=self.outputsize),
                symbol,
            ),
        )

    def fetch_company_overview(self, symbol: str) -> CompanyOverview:
        """Fetch fundamental metrics as raw text fields."""
        return self._cached(
            Endpoint.OVERVIEW,
            symbol,
            lambda: decode_overview(self._request(Endpoint.OVERVIEW, symbol=symbol), symbol),
        )

    def fetch_quote(self, symbol: str) -> Quote:
        """Fetch the latest quote for one symbol."""
        return self._cached(
            Endpoint.QUOTE,
            symbol,
            lambda: decode_quote(self._request(Endpoint.QUOTE, symbol=symbol), symbol),
        )

    def search_symbols(self, keywords: str) -> list[SearchMatch]:
        """Search symbols and company names matching `keywords`."""
        return self._cached(
            Endpoint.SEARCH,
            keywords,
            lambda: decode_search(self._request(Endpoint.SEARCH, keywords=keywords), keywords),
        )

    def fetch_market_status(self) -> MarketStatus:
        """Probe the reference symbol and report whether the market is open."""

        def load() -> MarketStatus:
            self._request(Endpoint.MARKET_STATUS, symbol=self.REFERENCE_SYMBOL)
            return market_status_at(self.clock())

        return self._cached(Endpoint.MARKET_STATUS, None, load)

    def _cached(self, endpoint: Endpoint, subject: str | None, load: Callable[[], T]) -> T:
        key = endpoint.cache_key(subject)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Cache hit for %s", key)
            return cached
        value = load()
        self.cache.put(key, value)
        return value

    def _request(self, endpoint: Endpoint, **params: str) -> dict[str, Any]:
        """Perform one GET and check the payload for provider sentinels."""
        query = {"function": endpoint.function, **params, "apikey": self.api_key}
        try:
            response = self.session.get(self.base_url, params=query, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise NetworkError(f"Failed to fetch data from Alpha Vantage: {exc}") from exc
        except ValueError as exc:
            raise NetworkError(f"Alpha Vantage returned a non-JSON body: {exc}") from exc

        if not isinstance(payload, dict):
            raise NetworkError("Alpha Vantage returned an unexpected payload shape")

        if "Error Message" in payload:
            raise UpstreamError(f"Alpha Vantage returned an error: {payload['Error Message']}")

        for key in ADVISORY_KEYS:
            if key in payload:
                self.logger.warning("Alpha Vantage rate limit advisory: %s", payload[key])

        return payload
