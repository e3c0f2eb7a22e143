"""
Load configuration from config.yaml and .env. Telegram credentials only from env.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    def env(key: str, default: str = "") -> str:
        return os.getenv(key, default).strip()

    def env_bool(key: str, default: bool = False) -> bool:
        return os.getenv(key, str(default)).lower() in ("true", "1", "yes")

    def env_int(key: str, default: int = 0) -> int:
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            return default

    def env_float(key: str, default: float = 0.0) -> float:
        try:
            return float(os.getenv(key, str(default)))
        except ValueError:
            return default

    def env_optional_int(key: str, default: Optional[int]) -> Optional[int]:
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw)
        except ValueError:
            return default

    backtest = data.get("backtest", {})
    strategy = data.get("strategy", {})
    data_cfg = data.get("data", {})
    telegram = data.get("telegram", {})
    logging_cfg = data.get("logging", {})

    csv_path = env("DATA_CSV", data_cfg.get("csv_path") or "")

    return Config(
        symbol=env("SYMBOL", backtest.get("symbol", "AAPL")).upper(),
        days=env_int("DAYS", backtest.get("days", 252)),
        seed=env_optional_int("SEED", backtest.get("seed")),
        close_open_at_end=env_bool("CLOSE_OPEN_AT_END", backtest.get("close_open_at_end", False)),
        # Data
        data_source=env("DATA_SOURCE", data_cfg.get("source", "synthetic")).lower(),
        data_csv=Path(csv_path) if csv_path else None,
        latency_s=float(data_cfg.get("latency_s") or 0.0),
        # Strategy
        rsi_period=int(strategy.get("rsi_period", 14)),
        entry_start_index=int(strategy.get("entry_start_index", 50)),
        exit_start_index=int(strategy.get("exit_start_index", 56)),
        min_confidence=float(strategy.get("min_confidence", 0.6)),
        take_profit_pct=env_float("TAKE_PROFIT_PCT", strategy.get("take_profit_pct", 0.05)),
        stop_loss_pct=env_float("STOP_LOSS_PCT", strategy.get("stop_loss_pct", 0.03)),
        max_holding_bars=env_int("MAX_HOLDING_BARS", strategy.get("max_holding_bars", 10)),
        # Telegram
        telegram_bot_token=env("TELEGRAM_BOT_TOKEN", telegram.get("bot_token", "")),
        telegram_chat_id=env("TELEGRAM_CHAT_ID", telegram.get("chat_id", "")),
        # Logging
        log_level=env("LOG_LEVEL", logging_cfg.get("level", "INFO")),
        log_dir=Path(logging_cfg.get("log_dir", "logs")),
        log_file=logging_cfg.get("log_file"),
    )


class Config:
    """Unified configuration. Immutable after load."""

    __slots__ = (
        "symbol", "days", "seed", "close_open_at_end",
        "data_source", "data_csv", "latency_s",
        "rsi_period", "entry_start_index", "exit_start_index", "min_confidence",
        "take_profit_pct", "stop_loss_pct", "max_holding_bars",
        "telegram_bot_token", "telegram_chat_id",
        "log_level", "log_dir", "log_file",
    )

    def __init__(
        self,
        symbol: str = "AAPL",
        days: int = 252,
        seed: Optional[int] = None,
        close_open_at_end: bool = False,
        data_source: str = "synthetic",
        data_csv: Optional[Path] = None,
        latency_s: float = 0.0,
        rsi_period: int = 14,
        entry_start_index: int = 50,
        exit_start_index: int = 56,
        min_confidence: float = 0.6,
        take_profit_pct: float = 0.05,
        stop_loss_pct: float = 0.03,
        max_holding_bars: int = 10,
        telegram_bot_token: str = "",
        telegram_chat_id: str = "",
        log_level: str = "INFO",
        log_dir: Path = None,
        log_file: Optional[str] = None,
    ):
        if data_source not in ("synthetic", "csv"):
            raise ValueError(f"Unsupported data source: {data_source}")
        self.symbol = symbol
        self.days = days
        self.seed = seed
        self.close_open_at_end = close_open_at_end
        self.data_source = data_source
        self.data_csv = Path(data_csv) if data_csv else None
        self.latency_s = latency_s
        self.rsi_period = rsi_period
        self.entry_start_index = entry_start_index
        self.exit_start_index = exit_start_index
        self.min_confidence = min_confidence
        self.take_profit_pct = take_profit_pct
        self.stop_loss_pct = stop_loss_pct
        self.max_holding_bars = max_holding_bars
        self.telegram_bot_token = telegram_bot_token
        self.telegram_chat_id = telegram_chat_id
        self.log_level = log_level
        self.log_dir = Path(log_dir) if log_dir else Path("logs")
        self.log_file = log_file
