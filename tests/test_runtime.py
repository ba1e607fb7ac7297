from __future__ import annotations

from datetime import date

from stockvision.config import Settings
from stockvision.dashboard import DashboardService
from stockvision.data.synthetic import SyntheticMarket
from stockvision.domain.models import Quote
from stockvision.errors import MissingDataError, UpstreamError
from stockvision.runtime import run, run_action


class FakeSource:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.quote_calls: list[str] = []

    def fetch_quote(self, symbol: str) -> Quote:
        self.quote_calls.append(symbol)
        if self.fail:
            raise MissingDataError(f"No quote data found for {symbol}")
        return Quote(
            symbol=symbol,
            price=10.0,
            change=0.1,
            change_percent=1.0,
            volume=10,
            open=9.9,
            high=10.1,
            low=9.8,
            previous_close=9.9,
            latest_trading_day="2024-05-10",
        )

    def fetch_company_overview(self, symbol: str) -> dict[str, str]:
        raise UpstreamError("Invalid API call.")


def _service(source: FakeSource) -> DashboardService:
    return DashboardService(
        source,
        fallback=SyntheticMarket(seed=2, today=date(2024, 5, 10)),
        request_delay_seconds=0.0,
        sleep=lambda _seconds: None,
    )


def test_run_refreshes_watchlist_for_max_passes() -> None:
    source = FakeSource()
    sleeps: list[float] = []
    settings = Settings(watchlist=["AAPL", "MSFT"], max_passes=2, refresh_interval_seconds=60)

    exit_code = run(settings, service=_service(source), sleep=sleeps.append)

    assert exit_code == 0
    assert source.quote_calls == ["AAPL", "MSFT", "AAPL", "MSFT"]
    assert sleeps == [60.0]


def test_run_survives_total_quote_failure_with_fallback() -> None:
    source = FakeSource(fail=True)
    settings = Settings(watchlist=["AAPL"], max_passes=1)

    assert run(settings, service=_service(source), sleep=lambda _seconds: None) == 0


def test_run_action_reports_upstream_error() -> None:
    settings = Settings()

    assert run_action(settings, "overview", "IBM", service=_service(FakeSource())) == 1


def test_run_action_offline_panels_succeed() -> None:
    settings = Settings()
    service = _service(FakeSource())

    assert run_action(settings, "sectors", service=service) == 0
    assert run_action(settings, "movers", service=service) == 0
    assert run_action(settings, "news", service=service) == 0
    assert run_action(settings, "quote", "aapl", service=service) == 0


def test_run_action_rejects_unknown_action() -> None:
    source = FakeSource()

    assert run_action(Settings(), "chart", "AAPL", service=_service(source)) == 2
    assert source.quote_calls == []
