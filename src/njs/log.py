"""Structured one-line logging helpers.

Every event is logged as ``event.name key=value key=value`` so a live tail of a
run reads top to bottom. Fields bound with :func:`bind_log_context` are merged
into every event emitted inside the block.
"""

from __future__ import annotations

import contextvars
import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any


__all__ = [
    "bind_log_context",
    "get_log_context",
    "log_debug",
    "log_error",
    "log_exception",
    "log_info",
    "log_warning",
    "set_log_context",
    "timed",
]


_CTX: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "njs_log_ctx",
    default=None,
)

_SENSITIVE_KEY_FRAGMENTS = ("password", "token", "secret", "cookie")

_TRUNCATE_AT = 200
_MAX_LIST_ITEMS = 4

# Lower sorts first; unknown keys land in the middle, errors last.
_KEY_PRIORITY: dict[str, int] = {
    "run_id": 0,
    "op": 1,
    "status": 2,
    "duration_ms": 3,
    "query": 10,
    "page": 11,
    "max_pages": 12,
    "url": 13,
    "selector": 14,
    "path": 15,
    "count": 16,
    "total": 17,
    "timeout_ms": 18,
    "http_status": 19,
    "reason": 20,
    "error": 90,
    "exc": 91,
}


def _merge(current: dict[str, Any] | None, fields: dict[str, Any]) -> dict[str, Any]:
    merged = dict(current or {})
    merged.update({k: v for k, v in fields.items() if v is not None})
    return merged


@contextmanager
def bind_log_context(**fields: Any) -> Iterator[None]:
    """Bind fields to the current async/task context for the duration of the block."""
    token = _CTX.set(_merge(_CTX.get(), fields))
    try:
        yield
    finally:
        _CTX.reset(token)


def set_log_context(**fields: Any) -> None:
    """Set fields on the current context without automatic reset."""
    _CTX.set(_merge(_CTX.get(), fields))


def get_log_context() -> dict[str, Any]:
    """Return a copy of the currently bound context."""
    return dict(_CTX.get() or {})


def _shorten(s: str) -> str:
    if len(s) <= _TRUNCATE_AT:
        return s
    return f"{s[: _TRUNCATE_AT - 20]}...{s[-17:]}"


def _fmt_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (str, Path)):
        return _shorten(str(value))
    if isinstance(value, (list, tuple, set)):
        items = list(value)
        if len(items) > _MAX_LIST_ITEMS:
            return f"[len={len(items)}]"
        return "[" + ",".join(_fmt_value(v) for v in items) + "]"
    if isinstance(value, dict):
        return f"{{len={len(value)}}}"
    return _shorten(repr(value))


def _format_event(event: str, fields: dict[str, Any]) -> str:
    merged = _merge(_CTX.get(), fields)
    parts = [event]
    for key in sorted(merged, key=lambda k: (_KEY_PRIORITY.get(k, 50), k)):
        if any(fragment in key.lower() for fragment in _SENSITIVE_KEY_FRAGMENTS):
            parts.append(f"{key}=***")
        else:
            parts.append(f"{key}={_fmt_value(merged[key])}")
    return " ".join(parts)


def _log(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    if logger.isEnabledFor(level):
        logger.log(level, _format_event(event, fields))


def log_debug(logger: logging.Logger, event: str, **fields: Any) -> None:
    _log(logger, logging.DEBUG, event, **fields)


def log_info(logger: logging.Logger, event: str, **fields: Any) -> None:
    _log(logger, logging.INFO, event, **fields)


def log_warning(logger: logging.Logger, event: str, **fields: Any) -> None:
    _log(logger, logging.WARNING, event, **fields)


def log_error(logger: logging.Logger, event: str, **fields: Any) -> None:
    _log(logger, logging.ERROR, event, **fields)


def log_exception(logger: logging.Logger, event: str, **fields: Any) -> None:
    """Log at ERROR with the active traceback attached."""
    if logger.isEnabledFor(logging.ERROR):
        logger.exception(_format_event(event, fields))


@contextmanager
def timed(
    logger: logging.Logger,
    op: str,
    *,
    level: int = logging.DEBUG,
    **fields: Any,
) -> Iterator[None]:
    """Log ``<op>.start`` and ``<op>.ok`` / ``<op>.error`` with the elapsed time."""
    start = time.perf_counter()
    _log(logger, level, f"{op}.start", **fields)
    try:
        yield
    except Exception as exc:
        duration_ms = int((time.perf_counter() - start) * 1000.0)
        _log(
            logger,
            logging.ERROR,
            f"{op}.error",
            duration_ms=duration_ms,
            exc=type(exc).__name__,
            **fields,
        )
        raise
    duration_ms = int((time.perf_counter() - start) * 1000.0)
    _log(logger, level, f"{op}.ok", duration_ms=duration_ms, **fields)
