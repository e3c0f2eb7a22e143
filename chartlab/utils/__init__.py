"""Utils: Telegram notifications."""

from chartlab.utils.telegram import format_backtest_message, notify_backtest, send_telegram

__all__ = ["format_backtest_message", "notify_backtest", "send_telegram"]
