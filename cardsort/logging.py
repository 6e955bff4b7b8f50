"""Logging for ``cardsort analyze``.

The terminal shows warnings only, or everything with ``-v``.  When results
are written to disk, a per-run log goes alongside them (``results.json`` →
``results.log``), overwritten on each run, at the level named by
``CARDSORT_LOG_LEVEL`` (default INFO).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

_TERMINAL_FORMAT = "%(levelname)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _parse_log_level(level_str: str) -> int:
    """Parse a log level name case-insensitively; unknown names mean INFO."""
    numeric = getattr(logging, level_str.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def run_log_path(results_path: Path) -> Path:
    """Where the log for a run writing *results_path* goes."""
    return results_path.with_suffix(".log")


def setup_logging(*, log_file: Path | None = None, verbose: bool = False) -> None:
    """Install the terminal handler and, with *log_file*, a per-run file handler.

    Existing root handlers are replaced, so repeated calls don't stack.
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.DEBUG)

    terminal = logging.StreamHandler()
    terminal.setLevel(logging.DEBUG if verbose else logging.WARNING)
    terminal.setFormatter(logging.Formatter(_TERMINAL_FORMAT))
    root.addHandler(terminal)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(_parse_log_level(os.environ.get("CARDSORT_LOG_LEVEL", "INFO")))
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(file_handler)
