# BE/insight_core/utils/logging.py
"""
Logger factory for Alpha Insight
────────────────────────────────
The CLI draws a chart and tables straight to stdout, so console logging is
quiet by default: WARNING and above, one short `[W] message` line on stderr,
coloured by level when stderr is a terminal.

INSIGHT_LOG_VERBOSE=1   DEBUG level, lines carry the logger name
INSIGHT_LOG_FILE=path   also append timestamped DEBUG records to `path`

Core modules log through `logging.getLogger(__name__)`; `insight_cli.main`
configures the `insight_core` and `insight_cli` parents once at startup.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional


class _ConsoleFormatter(logging.Formatter):
    # simple, compact format
    default_fmt = "[%(levelname).1s] %(message)s"
    debug_fmt = "[%(levelname).1s] %(name)s: %(message)s"

    def __init__(self, verbose: bool = False):
        fmt = self.debug_fmt if verbose else self.default_fmt
        super().__init__(fmt)

    # add colors if TTY
    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - cosmetics
        msg = super().format(record)
        if not os.isatty(2):
            return msg
        level = record.levelno
        if level >= logging.ERROR:
            return f"\033[91m{msg}\033[0m"
        if level >= logging.WARNING:
            return f"\033[93m{msg}\033[0m"
        if level >= logging.INFO:
            return f"\033[92m{msg}\033[0m"
        return f"\033[90m{msg}\033[0m"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in {"1", "true", "yes"}


def get_logger(name: str = "insight", *, level: Optional[int] = None, file_path: Optional[str | Path] = None) -> logging.Logger:
    """
    Create/reuse a namespaced logger with console + optional file output.
    Idempotent: calling twice returns the same configured logger.

    Level defaults to WARNING so log lines do not interleave with the chart;
    INSIGHT_LOG_VERBOSE=1 switches to DEBUG with logger names.
    """
    logger = logging.getLogger(name)
    if getattr(logger, "_insight_configured", False):
        return logger

    verbose = _env_flag("INSIGHT_LOG_VERBOSE")
    if level is None:
        level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(_ConsoleFormatter(verbose=verbose))
    logger.addHandler(ch)

    # File (opt-in)
    path = file_path or os.getenv("INSIGHT_LOG_FILE")
    if path:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(p, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(fh)
        logger.setLevel(min(level, logging.DEBUG))

    logger._insight_configured = True  # type: ignore[attr-defined]
    return logger
