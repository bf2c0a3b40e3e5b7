"""
Thin wrapper around Python's ``logging`` module with a blasiussuite root
logger and one extra level below DEBUG for per-substep tracing.

Usage
-----
>>> from blasiussuite.libblasius.logger import get_logger
>>> log = get_logger(__name__)
>>> log.info("standard message")
>>> log.debug2("internal substep detail")
"""

import logging
import sys

ROOT = "blasiussuite"

# ── Custom level (below DEBUG=10) ───────────────────────────────────────
DEBUG2 = 9

logging.addLevelName(DEBUG2, "DEBUG2")


class _BlasiusLogger(logging.Logger):
    """Logger subclass that adds a ``debug2`` convenience method."""

    def debug2(self, msg, *args, **kwargs):
        if self.isEnabledFor(DEBUG2):
            self._log(DEBUG2, msg, args, **kwargs)


logging.setLoggerClass(_BlasiusLogger)

# ── Mapping from ``-v`` counts to Python levels ─────────────────────────
VERBOSITY_LEVEL_MAP = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
    3: DEBUG2,
}


def verbosity_level(count: int) -> int:
    """Translate a repeated ``-v`` count into a logging level."""
    return VERBOSITY_LEVEL_MAP[min(max(count, 0), max(VERBOSITY_LEVEL_MAP))]


def get_logger(name: str | None = None) -> _BlasiusLogger:
    """Return a logger under the ``blasiussuite`` hierarchy.

    Fully qualified module names (e.g. ``blasiussuite.libblasius.integrator``)
    inherit from the package root logger so a single ``set_level()`` call
    controls everything.
    """
    return logging.getLogger(name or ROOT)


def set_level(level: int | str = logging.INFO) -> None:
    """Set the log level for *all* blasiussuite loggers at once."""
    logging.getLogger(ROOT).setLevel(level)


def setup(level: int | str = logging.WARNING, stream=None) -> None:
    """One-time setup: attach a stderr handler with the blasiussuite format.

    Extra calls only adjust the level.
    """
    root = logging.getLogger(ROOT)
    set_level(level)
    if root.handlers:
        return
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)-7s: %(message)s"))
    root.addHandler(handler)
