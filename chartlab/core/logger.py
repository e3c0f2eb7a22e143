"""
Logging for the "chartlab" package: stderr console plus an optional log file.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional

FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
# requests logs every connection at DEBUG through urllib3
NOISY_LOGGERS = ("urllib3",)


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the chartlab logger and return it. Safe to call more than once;
    earlier handlers are replaced. Never log Telegram tokens or chat ids.
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    pkg_logger = logging.getLogger("chartlab")
    pkg_logger.setLevel(log_level)
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(FORMAT, datefmt=DATE_FORMAT)

    # stdout carries --json output and the printed report
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    pkg_logger.addHandler(console)

    if log_dir and log_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / log_file, encoding="utf-8")
        fh.setFormatter(formatter)
        pkg_logger.addHandler(fh)
        pkg_logger.debug("Logging to %s", log_dir / log_file)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
    return pkg_logger
