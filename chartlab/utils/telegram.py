"""Telegram backtest notifications. Never log token or chat_id."""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

import requests

if TYPE_CHECKING:
    from chartlab.backtesting.engine import BacktestResult

logger = logging.getLogger("chartlab.utils.telegram")

API_URL = "https://api.telegram.org/bot{token}/sendMessage"
# Telegram rejects messages longer than this
MAX_MESSAGE_LEN = 4096


def format_backtest_message(result: "BacktestResult") -> str:
    """Short chat-friendly digest: headline stats plus best and worst trade."""
    m = result.metrics
    pf = f"{m.profit_factor:.2f}" if m.profit_factor is not None else "n/a"
    lines = [
        f"chartlab backtest {result.symbol}",
        f"{m.total_trades} trades | win {m.win_rate * 100:.1f}% | total {m.total_return * 100:+.2f}%",
        f"max DD {m.max_drawdown * 100:.2f}% | Sharpe {m.sharpe_ratio:.2f} | PF {pf}",
    ]
    if result.trades:
        best = max(result.trades, key=lambda t: t.return_pct)
        worst = min(result.trades, key=lambda t: t.return_pct)
        lines.append(f"best {best.action.value} {best.entry_date.isoformat()} {best.return_pct * 100:+.2f}% ({best.exit_reason})")
        lines.append(f"worst {worst.action.value} {worst.entry_date.isoformat()} {worst.return_pct * 100:+.2f}% ({worst.exit_reason})")
    return "\n".join(lines)


def send_telegram(text: str, bot_token: str = "", chat_id: str = "") -> bool:
    """Send message to Telegram. Returns True on success; skipped if not configured."""
    if not bot_token or not chat_id:
        logger.debug("Telegram not configured, skipping message (len=%d)", len(text))
        return False
    try:
        r = requests.post(
            API_URL.format(token=bot_token),
            json={"chat_id": chat_id, "text": text[:MAX_MESSAGE_LEN]},
            timeout=10,
        )
    except requests.RequestException as e:
        logger.warning("Telegram error: %s", e)
        return False
    if r.status_code != 200:
        logger.warning("Telegram send failed: %s %s", r.status_code, r.text[:200])
        return False
    return True


def notify_backtest(result: "BacktestResult", bot_token: str = "", chat_id: str = "") -> bool:
    """Post a finished backtest to Telegram when credentials are configured."""
    sent = send_telegram(format_backtest_message(result), bot_token, chat_id)
    if sent:
        logger.info("%s: backtest summary sent to Telegram", result.symbol)
    return sent
