"""Debug logging for unitgen.

User-facing output goes through Rich consoles; this module only configures
the ``unitgen`` logger tree for diagnostics. DEBUG is enabled by
``UNITGEN_DEBUG=1`` or ``unitgen --debug``, WARNING otherwise.
"""

from __future__ import annotations

import logging
import os
import sys

ROOT = "unitgen"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FORMAT_DEBUG = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _get_log_level() -> int:
    if os.environ.get("UNITGEN_DEBUG", "").lower() in ("1", "true", "yes"):
        return logging.DEBUG
    return logging.WARNING


def _apply_level(root: logging.Logger, level: int) -> None:
    fmt = LOG_FORMAT_DEBUG if level == logging.DEBUG else LOG_FORMAT
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))


def _init_logging() -> None:
    """Attach the stderr handler once; later calls are no-ops."""
    root = logging.getLogger(ROOT)
    if root.handlers:
        return
    root.addHandler(logging.StreamHandler(sys.stderr))
    _apply_level(root, _get_log_level())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the unitgen namespace."""
    _init_logging()
    if not name.startswith(ROOT):
        name = f"{ROOT}.{name}"
    return logging.getLogger(name)


def set_debug(enabled: bool = True) -> None:
    """Switch the unitgen loggers between DEBUG and WARNING."""
    _apply_level(logging.getLogger(ROOT), logging.DEBUG if enabled else logging.WARNING)
