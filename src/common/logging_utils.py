"""Centralized logging helpers.

Keeps structured DEBUG traces consistent across modules: callers build the
``extra`` payload with :func:`extra_context`, guard expensive traces with
:func:`is_debug_enabled`, and never log raw URLs (see :func:`safe_url`).
"""
from __future__ import annotations

import logging
import os
import time
import urllib.parse
from typing import Any, Dict, Optional

from constants import Constants

REDACTED = "[REDACTED]"
_SENSITIVE_QUERY_KEYS = ("token", "key", "secret", "password", "auth", "signature")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once for CLI usage.

    The level comes from ``level`` or the PEARCHANNEL_LOG_LEVEL environment
    variable, falling back to INFO for unknown names.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)
    if not isinstance(level_value, int):
        level_value = logging.INFO
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=Constants.LOG_FORMAT)
    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build a logging ``extra`` mapping, dropping fields whose value is None."""
    return {key: value for key, value in fields.items() if value is not None}


def safe_url(url: str) -> str:
    """Return ``url`` with credentials and sensitive query values redacted."""
    try:
        parts = urllib.parse.urlsplit(url)
    except ValueError:
        return REDACTED
    netloc = parts.netloc
    if "@" in netloc:
        netloc = f"{REDACTED}@{netloc.rsplit('@', 1)[1]}"
    query = parts.query
    if query:
        pairs = urllib.parse.parse_qsl(query, keep_blank_values=True)
        query = urllib.parse.urlencode(
            [
                (k, REDACTED if any(s in k.lower() for s in _SENSITIVE_QUERY_KEYS) else v)
                for k, v in pairs
            ],
            safe="[]",
        )
    return urllib.parse.urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self) -> None:
        self._start: float = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds so far, or in total once the block exited."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
