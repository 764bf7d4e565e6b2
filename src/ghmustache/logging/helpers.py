from __future__ import annotations

"""Small logging helpers to standardize ghmustache logger names, configuration and tracing.

This module provides:
    - JsonLogFormatter: JSON log formatter with stable fields and optional context.
    - setup_base_logger: Root logger configuration for the 'ghmustache' logger.
    - get_logger: Namespaced logger factory ('ghmustache.*').
    - trace_render utilities gated by GHMUSTACHE_TRACE.

The JSON payload carries a fixed 'version' field resolved from
ghmustache.__version__ at formatter construction time, falling back to
'unknown' when the package cannot be imported yet.
"""

import logging
import os
from typing import Optional, TextIO


class JsonLogFormatter(logging.Formatter):
    """Emit logs as compact JSON with a fixed schema.

    Fields:
        - ts: ISO-8601 timestamp in UTC with millisecond precision.
        - level: Log level name.
        - module: Logger name (e.g., 'ghmustache.render').
        - msg: Formatted message string.
        - version: ghmustache.__version__ (fixed per formatter instance).
        - ctx: Optional dictionary attached to the record as 'context'.
    """

    def __init__(self) -> None:
        super().__init__()
        self._version = self._resolve_version()

    @staticmethod
    def _resolve_version() -> str:
        try:
            from ghmustache import __version__ as _v  # type: ignore
            return str(_v)
        except ImportError:
            return os.getenv("GHMUSTACHE_VERSION", "unknown")

    def format(self, record: logging.LogRecord) -> str:
        from datetime import datetime, timezone
        import json

        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        ts_str = ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")

        payload = {
            "ts": ts_str,
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
            "version": self._version,
        }

        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict) and ctx:
            payload["ctx"] = ctx

        return json.dumps(payload, ensure_ascii=False)


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Configure the base 'ghmustache' logger once and return it.

    Args:
        json_logs: If True, configure a JSON formatter, else plain text.
        level: Logging level for the base logger.
        stream: Optional stream (stderr by default).

    Returns:
        The configured base logger.
    """
    base = logging.getLogger("ghmustache")
    if base.handlers:
        base.setLevel(level)
        return base

    import sys as _sys

    base.setLevel(level)
    base.propagate = False

    handler = logging.StreamHandler(stream or _sys.stderr)
    if json_logs:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    base.addHandler(handler)

    return base


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a namespaced logger under 'ghmustache'."""
    if not name or name == "ghmustache":
        return logging.getLogger("ghmustache")
    if name.startswith("ghmustache"):
        return logging.getLogger(name)
    return logging.getLogger(f"ghmustache.{name}")


def parse_level(raw: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name ('debug', 'WARNING') or number ('10') to a logging level."""
    if raw is None or not raw.strip():
        return default
    raw = raw.strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def is_trace_enabled() -> bool:
    """Check if render tracing is enabled via env flag."""
    return os.getenv("GHMUSTACHE_TRACE") == "1"


def trace_render(logger: logging.Logger, message: str, **ctx) -> None:
    """Emit debug-verbosity render traces only when enabled.

    Args:
        logger: Target logger.
        message: Human-readable description.
        **ctx: Structured context attached to the record as 'context'.
    """
    if not is_trace_enabled():
        return
    if ctx:
        logger.debug("%s | ctx=%r", message, ctx, extra={"context": ctx})
    else:
        logger.debug("%s", message)
