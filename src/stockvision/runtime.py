"""Runtime wiring and the periodic watchlist refresh loop."""

from __future__ import annotations

from collections.abc import Callable
from time import sleep as default_sleep

from stockvision.config import Settings
from stockvision.dashboard import DashboardService
from stockvision.data.catalog import lookup
from stockvision.errors import StockVisionError
from stockvision.logging.logger import DashboardLogger


def run(
    settings: Settings,
    service: DashboardService | None = None,
    sleep: Callable[[float], None] = default_sleep,
) -> int:
    """Refresh the watchlist until interrupted or `max_passes` is reached."""
    service = service or DashboardService.from_settings(settings)
    dashboard_logger = DashboardLogger(level=settings.log_level)
    if settings.uses_demo_key():
        dashboard_logger.fallback(
            "credentials", "ALPHA_VANTAGE_API_KEY not set, using the demo key"
        )

    passes = 0
    try:
        while True:
            refresh_watchlist(settings, service, dashboard_logger)
            passes += 1
            if settings.max_passes is not None and passes >= settings.max_passes:
                break
            sleep(float(settings.refresh_interval_seconds))
    except KeyboardInterrupt:
        return 0
    except StockVisionError as exc:
        dashboard_logger.error(str(exc))
        return 1
    return 0


def refresh_watchlist(
    settings: Settings,
    service: DashboardService,
    dashboard_logger: DashboardLogger,
) -> None:
    """Load the watchlist once and log every entry."""
    loaded = service.watchlist(settings.watchlist)
    if loaded.is_fallback:
        dashboard_logger.fallback("watchlist", "live quotes unavailable, showing synthetic data")
    dashboard_logger.watchlist(loaded.data, loaded.source)


def run_action(
    settings: Settings,
    action: str,
    argument: str | None = None,
    time_range: str = "1M",
    service: DashboardService | None = None,
) -> int:
    """Run one dashboard panel load and log the result."""
    service = service or DashboardService.from_settings(settings)
    dashboard_logger = DashboardLogger(level=settings.log_level)
    try:
        if action == "quote":
            symbol = str(argument).upper()
            info = lookup(symbol)
            dashboard_logger.quote(
                service.source.fetch_quote(symbol),
                name=info.name if info else None,
            )
        elif action == "search":
            loaded_matches = service.search(str(argument))
            dashboard_logger.search(str(argument), loaded_matches.data, loaded_matches.source)
        elif action == "candles":
            symbol = str(argument).upper()
            loaded_candles = service.candles(symbol, time_range)
            dashboard_logger.candles(symbol, loaded_candles.data, loaded_candles.source)
        elif action == "overview":
            symbol = str(argument).upper()
            dashboard_logger.overview(symbol, service.company_overview(symbol))
        elif action == "status":
            dashboard_logger.status(service.market_status())
        elif action == "sectors":
            dashboard_logger.sectors(service.sector_performance())
        elif action == "movers":
            gainers, losers = service.top_movers()
            dashboard_logger.movers(gainers, losers)
        elif action == "news":
            dashboard_logger.news(service.market_news())
        else:
            dashboard_logger.error(f"Unknown action '{action}'")
            return 2
    except StockVisionError as exc:
        dashboard_logger.error(str(exc))
        return 1
    return 0
