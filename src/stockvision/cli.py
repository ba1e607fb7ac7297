"""Command-line interface for the stockvision dashboard data."""

from __future__ import annotations

import argparse
import sys

from stockvision.config import Settings, parse_symbols
from stockvision.dashboard import TIME_RANGES
from stockvision.errors import ConfigError
from stockvision.runtime import run, run_action

ACTION_FLAGS = ("quote", "search", "candles", "overview", "status", "sectors", "movers", "news")


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description="Stock market dashboard data from Alpha Vantage")
    parser.add_argument("--symbols", type=str, help="Comma-separated watchlist symbols")
    parser.add_argument(
        "--max-passes", type=int, help="Refresh the watchlist a fixed number of times"
    )
    parser.add_argument(
        "--interval-seconds", type=int, help="Seconds between watchlist refreshes"
    )
    parser.add_argument("--log-level", type=str, help="Logging level")
    parser.add_argument("--quote", type=str, metavar="SYMBOL", help="Show one quote, then exit")
    parser.add_argument("--search", type=str, metavar="TEXT", help="Search symbols, then exit")
    parser.add_argument(
        "--candles", type=str, metavar="SYMBOL", help="Show daily candles, then exit"
    )
    parser.add_argument(
        "--range",
        dest="time_range",
        choices=sorted(TIME_RANGES),
        default="1M",
        help="Candle time range",
    )
    parser.add_argument(
        "--overview", type=str, metavar="SYMBOL", help="Show company overview, then exit"
    )
    parser.add_argument("--status", action="store_true", help="Show market status, then exit")
    parser.add_argument("--sectors", action="store_true", help="Show sector performance, then exit")
    parser.add_argument(
        "--movers", action="store_true", help="Show top gainers and losers, then exit"
    )
    parser.add_argument("--news", action="store_true", help="Show market news, then exit")
    return parser


def selected_action(args: argparse.Namespace) -> tuple[str, str | None] | None:
    """Return the single requested one-shot action and its argument."""
    chosen = [name for name in ACTION_FLAGS if getattr(args, name) not in (None, False)]
    if len(chosen) > 1:
        flags = ", ".join(f"--{name}" for name in chosen)
        raise ValueError(f"Use only one action flag at a time, got: {flags}")
    if not chosen:
        return None
    value = getattr(args, chosen[0])
    return chosen[0], value if isinstance(value, str) else None


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI values onto environment-derived settings."""
    overrides: dict[str, object] = {}
    if args.symbols:
        overrides["watchlist"] = parse_symbols(args.symbols, settings.watchlist)
    if args.max_passes is not None:
        overrides["max_passes"] = args.max_passes
    if args.interval_seconds is not None:
        overrides["refresh_interval_seconds"] = args.interval_seconds
    if args.log_level:
        overrides["log_level"] = args.log_level.strip().upper()
    return settings.with_overrides(**overrides)


def main() -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args()
    try:
        settings = apply_cli_overrides(Settings.from_env(), args)
        action = selected_action(args)
    except (ConfigError, ValueError) as exc:
        print(f"Configuration error: {exc}")
        return 2
    if action is not None:
        name, argument = action
        return run_action(settings, name, argument, time_range=args.time_range)
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
