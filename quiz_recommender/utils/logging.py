"""
Logging setup for the quiz recommender.

Call ``configure_logging(config)`` once at CLI entry (before any engine
work).  The configured level applies to the ``quiz_recommender`` package
logger; the root logger stays at WARNING or above so that chatter from
other libraries does not drown out the engine's own DEBUG trail.

All library modules use ``logging.getLogger(__name__)``; never call
``configure_logging`` or ``basicConfig`` from within library code.

Engine context
--------------
Engine modules attach quiz context through ``extra=`` (``quiz_id``,
``completed_quizzes``, ``next_quiz``, ...).  Text output appends those
fields after the message::

    2026-02-24T15:00:00Z [DEBUG] quiz_recommender.recommendations.normalizer: Quiz skipped ... | quiz_id=guna-profiler

JSON format (``json_format = true`` under ``[logging]``) emits one object
per line with the same fields at the top level::

    {"ts": "2026-02-24T15:00:00Z", "app": "quiz-recommender", "level": "INFO",
     "logger": "...", "msg": "...", "next_quiz": "shiva-consciousness"}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from quiz_recommender.config import LoggingConfig

APP_NAME = "quiz-recommender"
PACKAGE_LOGGER = "quiz_recommender"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes every LogRecord carries; anything else came from ``extra=``.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _context_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra=`` fields attached to ``record``, in insertion order."""
    return {
        key: val
        for key, val in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class _ContextTextFormatter(logging.Formatter):
    """Plain text lines with any quiz context appended as ``key=value`` pairs."""

    def __init__(self) -> None:
        super().__init__(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context_fields(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={_render(val)}" for key, val in context.items())
        return f"{line} | {pairs}"


def _render(val: Any) -> str:
    if isinstance(val, (list, tuple)):
        return ",".join(str(v) for v in val) or "-"
    return "-" if val is None else str(val)


class _JsonFormatter(logging.Formatter):
    """Emit one JSON object per log line.

    Fields: ``ts``, ``app``, ``level``, ``logger``, ``msg``, plus any
    ``extra=`` keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "app": APP_NAME,
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        payload.update(_context_fields(record))
        return json.dumps(payload, default=str)


def configure_logging(config: "LoggingConfig") -> logging.Logger:
    """Configure output handlers and the package log level.

    Handlers (stdout, plus a file when ``config.log_file`` is set) go on the
    root logger and pass everything at ``config.level``.  The
    ``quiz_recommender`` logger gets ``config.level``; the root logger
    itself is held at WARNING or above.

    Returns:
        The ``quiz_recommender`` package logger.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)

    formatter: logging.Formatter
    if config.json_format:
        formatter = _JsonFormatter()
    else:
        formatter = _ContextTextFormatter()

    handlers: list[logging.Handler] = []

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    handlers.append(console)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=max(level, logging.WARNING), handlers=handlers, force=True)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    return package_logger
