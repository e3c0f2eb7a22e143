#!/usr/bin/env python3
"""
chartlab CLI: backtest | analyze | symbol
Usage:
  python main.py backtest [SYMBOL] [--days 252] [--seed 7] [--csv prices.csv] [--json]
  python main.py analyze [SYMBOL] [--seed 7] [--csv prices.csv]
  python main.py symbol nflx_candlestick.png
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chartlab.analysis import (
    analyze_patterns,
    extract_symbol,
    generate_recommendation,
    normalize_symbol,
    quote_from_history,
)
from chartlab.backtesting.engine import BacktestEngine, BacktestResult, run_backtest
from chartlab.core.config import Config, load_config
from chartlab.core.errors import ChartlabError
from chartlab.core.logger import setup_logging
from chartlab.data import CsvPriceProvider, PriceProvider, SyntheticPriceProvider
from chartlab.strategies import PatternRuleStrategy, compute_snapshot
from chartlab.strategies.indicators import min_history
from chartlab.utils.telegram import notify_backtest

logger = logging.getLogger("chartlab")


def build_provider(config: Config, csv_path: Optional[Path], seed: Optional[int]) -> PriceProvider:
    """CSV provider when a file is given (flag or config), synthetic otherwise."""
    path = csv_path or (config.data_csv if config.data_source == "csv" else None)
    if path is not None:
        return CsvPriceProvider(path)
    return SyntheticPriceProvider(seed=seed, latency_s=config.latency_s)


def positive_int(value: str) -> int:
    """argparse type: integer >= 1."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def build_engine(config: Config, close_at_end: bool) -> BacktestEngine:
    return BacktestEngine(
        strategy=PatternRuleStrategy(rsi_period=config.rsi_period),
        entry_start_index=config.entry_start_index,
        exit_start_index=config.exit_start_index,
        min_confidence=config.min_confidence,
        take_profit_pct=config.take_profit_pct,
        stop_loss_pct=config.stop_loss_pct,
        max_holding_bars=config.max_holding_bars,
        close_open_at_end=close_at_end or config.close_open_at_end,
    )


def format_summary(result: BacktestResult) -> str:
    m = result.metrics
    pf = f"{m.profit_factor:.2f}" if m.profit_factor is not None else "n/a"
    lines = [
        f"--- Backtest Results: {result.symbol} ---",
        f"Total trades: {m.total_trades} (wins: {m.winning_trades}, losses: {m.losing_trades})",
        f"Win rate: {m.win_rate * 100:.1f}%",
        f"Total return: {m.total_return * 100:.2f}%",
        f"Average return: {m.average_return * 100:.2f}%",
        f"Max drawdown: {m.max_drawdown * 100:.2f}%",
        f"Sharpe ratio: {m.sharpe_ratio:.2f}",
        f"Profit factor: {pf}",
    ]
    return "\n".join(lines)


def format_trades(result: BacktestResult) -> str:
    if not result.trades:
        return "No trades."
    rows = [f"{'entry':<10}  {'exit':<10}  {'side':<4}  {'entry px':>9}  {'exit px':>9}  "
            f"{'return':>7}  {'result':<6}  {'reason':<11}  pattern"]
    for t in result.trades:
        rows.append(
            f"{t.entry_date.isoformat():<10}  {t.exit_date.isoformat():<10}  {t.action.value:<4}  "
            f"{t.entry_price:>9.2f}  {t.exit_price:>9.2f}  {t.return_pct * 100:>6.2f}%  "
            f"{t.result.value:<6}  {t.exit_reason:<11}  {t.pattern}"
        )
    return "\n".join(rows)


def run_backtest_cmd(args: argparse.Namespace, config: Config) -> int:
    symbol = normalize_symbol(args.symbol or config.symbol)
    days = args.days if args.days is not None else config.days
    seed = args.seed if args.seed is not None else config.seed
    engine = build_engine(config, args.close_at_end)
    try:
        with build_provider(config, args.csv, seed) as provider:
            result = run_backtest(symbol, days, provider=provider, engine=engine)
    except (ChartlabError, ValueError) as e:
        logger.error("Backtest failed: %s", e)
        return 1
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_summary(result))
        print()
        print(format_trades(result))
    notify_backtest(result, config.telegram_bot_token, config.telegram_chat_id)
    return 0


def run_analyze_cmd(args: argparse.Namespace, config: Config) -> int:
    symbol = normalize_symbol(args.symbol or config.symbol)
    seed = args.seed if args.seed is not None else config.seed
    try:
        with build_provider(config, args.csv, seed) as provider:
            df = provider.get_history(symbol, min_history(config.rsi_period))
        snapshot = compute_snapshot(df["close"].tolist(), config.rsi_period)
    except ChartlabError as e:
        logger.error("Analysis failed: %s", e)
        return 1
    quote = quote_from_history(df, symbol)
    patterns = analyze_patterns(quote, snapshot)
    rec = generate_recommendation(quote, snapshot, patterns)
    print(f"--- {quote.symbol} @ {quote.price:.2f} ({quote.change:+.2f}, {quote.change_pct:+.2f}%) ---")
    print(f"RSI {snapshot.rsi:.1f} | MACD {snapshot.macd:.3f} | SMA20 {snapshot.sma20:.2f} | "
          f"SMA50 {snapshot.sma50:.2f} | Bands {snapshot.bollinger_lower:.2f}-{snapshot.bollinger_upper:.2f}")
    for p in patterns:
        print(f"  [{p.type.value}] {p.name} ({p.confidence:.2f}, {p.reliability}): {p.description}")
    print(f"Recommendation: {rec.action.value} ({rec.confidence.value}) "
          f"stop {rec.stop_loss:.2f} target {rec.target_price:.2f} R:R {rec.risk_reward:.2f}")
    print(rec.reasoning)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="chartlab CLI")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    sub = parser.add_subparsers(dest="mode", required=True)

    bt = sub.add_parser("backtest", help="Run pattern backtest")
    bt.add_argument("symbol", nargs="?", default=None)
    bt.add_argument("--days", type=positive_int, default=None)
    bt.add_argument("--seed", type=int, default=None)
    bt.add_argument("--csv", type=Path, default=None, help="Daily OHLCV CSV instead of synthetic data")
    bt.add_argument("--close-at-end", action="store_true", help="Close an open position on the final bar")
    bt.add_argument("--json", action="store_true", help="Print result as JSON")

    an = sub.add_parser("analyze", help="Patterns and recommendation for the latest bar")
    an.add_argument("symbol", nargs="?", default=None)
    an.add_argument("--seed", type=int, default=None)
    an.add_argument("--csv", type=Path, default=None)

    sy = sub.add_parser("symbol", help="Extract ticker from a chart file name")
    sy.add_argument("filename")

    args = parser.parse_args(argv)
    if args.mode == "symbol":
        print(extract_symbol(args.filename))
        return 0

    config = load_config(args.config, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file)
    if args.mode == "backtest":
        return run_backtest_cmd(args, config)
    return run_analyze_cmd(args, config)


if __name__ == "__main__":
    sys.exit(main())
