"""
Logging helpers for cvparse.

Defines the package logger and simple utilities for configuring
console and optional file logging.
"""

from __future__ import annotations

import logging
from typing import List, Optional

LOG = logging.getLogger("cvparse")

# Verbosity levels
VERBOSITY_QUIET = 0    # Warnings and errors only (default)
VERBOSITY_NORMAL = 1   # Per-file progress
VERBOSITY_VERBOSE = 2  # Detailed debug output

_CONSOLE_FORMAT_NORMAL = "%(levelname)s: %(message)s"
_CONSOLE_FORMAT_QUIET = "%(message)s"


def setup_logging(debug: bool, log_file: Optional[str] = None, verbosity: int = VERBOSITY_QUIET) -> None:
    """
    Setup logging with verbosity control.

    Args:
        debug: Forces VERBOSITY_VERBOSE
        log_file: Optional log file path
        verbosity: Verbosity level (0=quiet, 1=normal, 2=verbose)
    """
    if debug:
        verbosity = VERBOSITY_VERBOSE

    if verbosity >= VERBOSITY_VERBOSE:
        level = logging.DEBUG
    elif verbosity >= VERBOSITY_NORMAL:
        level = logging.INFO
    else:
        level = logging.WARNING

    console_format = _CONSOLE_FORMAT_NORMAL if verbosity >= VERBOSITY_NORMAL else _CONSOLE_FORMAT_QUIET

    # Handlers may already be installed (e.g. by pytest); only adjust them
    if logging.root.handlers:
        for handler in logging.root.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)
                handler.setFormatter(logging.Formatter(console_format))
        logging.root.setLevel(level)
    else:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(logging.Formatter(console_format))
        logging.basicConfig(level=level, handlers=[console], force=True)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # always full detail in file
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logging.root.addHandler(file_handler)
        # The file must see DEBUG records even when the console is quiet
        logging.root.setLevel(logging.DEBUG)

    # pdfminer is extremely chatty at DEBUG
    for noisy in ("urllib3", "requests", "pdfminer", "pdfplumber"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def fmt_issues(errors: List[str], warnings: List[str]) -> str:
    """
    Compact error/warning string for the one-line-per-file log.
    """
    parts: List[str] = []
    if errors:
        parts.append("errors: " + ", ".join(errors))
    if warnings:
        parts.append("warnings: " + ", ".join(warnings))
    return " | ".join(parts) if parts else "-"
