"""Logging for ``transaction_analysis``.

Only entry points configure output. The CLI calls :func:`configure_logging`
once at startup, which attaches one ``StreamHandler`` to the
``transaction_analysis`` logger. Library modules obtain child loggers through
:func:`get_logger` and stay silent (``NullHandler``) when embedded in a host
application that never configures logging.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_ROOT_NAME = "transaction_analysis"
LOG_LEVEL_ENV_VAR = "TRANSACTION_ANALYSIS_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def resolve_level(level: int | str | None) -> int:
    """Map an explicit level, or the env var when ``None``, to a logging level.

    Strings may be level names in any case or decimal numbers. Unknown names
    resolve to ``INFO``.
    """

    if level is None:
        level = os.getenv(LOG_LEVEL_ENV_VAR) or logging.INFO
    if isinstance(level, int):
        return level
    text = level.strip().upper()
    if text.isdigit():
        return int(text)
    named = logging.getLevelName(text)
    return named if isinstance(named, int) else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach the package's single stream handler; later calls are no-ops.

    ``stream`` defaults to ``sys.stderr`` as seen at call time.
    """

    global _configured
    if _configured:
        return

    resolved = resolve_level(level)
    root = logging.getLogger(_ROOT_NAME)
    for handler in [h for h in root.handlers if isinstance(h, logging.NullHandler)]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    root.addHandler(handler)
    root.setLevel(resolved)
    # Records stop here; the host's root logger would print them twice.
    root.propagate = False

    _configured = True


def _reset_logging() -> None:
    """Undo :func:`configure_logging` so it may run again (used by tests)."""

    global _configured
    root = logging.getLogger(_ROOT_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True
    _configured = False


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(_ROOT_NAME)
    if not _configured and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)
