"""Logging setup for linkbio."""

import logging
import sys


def setup_logger(name: str = "linkbio", level="INFO") -> logging.Logger:
    """
    Configure and return the application logger.

    Idempotent: a logger that already has handlers is returned untouched
    apart from its level.
    """
    log = logging.getLogger(name)
    log.setLevel(level)
    if log.handlers:
        return log

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(fmt)
    log.addHandler(h)
    return log
