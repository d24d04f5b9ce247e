"""Loguru setup for the API, the CLI and the export pipeline.

Modules log snake_case events through ``get_logger(__name__)`` and attach
context with ``.bind()``. Records are rendered as::

    2026-01-01 12:00:00 | INFO     | orchestrator | export_job_complete job=3f2a frames=264

``job_id`` is pulled to the front as ``job=`` so one export can be followed
across modules; every other bound key follows as ``key=value``.
"""

import logging
import sys
from typing import Any

from loguru import logger

from brandmotion.config import get_settings

# Stdlib loggers routed into loguru
INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx", "asyncio")

# Request lines the editor sends every second while an export runs
_POLLING_PATHS = ("/health", "GET /api/jobs/")

_DEBUG_LEVEL_NO = 10


class InterceptHandler(logging.Handler):
    """Intercept stdlib logging and redirect to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).bind(component=record.name).log(
            level, record.getMessage()
        )


def _is_polling_noise(record: dict[str, Any]) -> bool:
    message = record.get("message", "")
    return any(path in message for path in _POLLING_PATHS)


def _production_filter(record: dict[str, Any]) -> bool:
    """Polling request logs only show at DEBUG level."""
    if _is_polling_noise(record):
        return bool(record["level"].no <= _DEBUG_LEVEL_NO)
    return True


def _context_fields(record: dict[str, Any]) -> str:
    """Format placeholders for bound context: job first, then the rest by key."""
    extra = record["extra"]
    fields = []
    if "job_id" in extra:
        fields.append("job={extra[job_id]}")
    for key in sorted(extra):
        if key not in ("job_id", "component"):
            fields.append(f"{key}={{extra[{key}]}}")
    return " ".join(fields)


def _plain_format(record: dict[str, Any]) -> str:
    context = _context_fields(record)
    line = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[component]} | {message}"
    return f"{line} {context}\n{{exception}}" if context else f"{line}\n{{exception}}"


def _debug_format(record: dict[str, Any]) -> str:
    context = _context_fields(record)
    line = (
        "<green>{time:HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[component]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )
    if context:
        line = f"{line} <dim>{context}</dim>"
    return f"{line}\n{{exception}}"


def setup_logging() -> None:
    """Configure loguru for the application. Safe to call more than once."""
    settings = get_settings()

    logger.remove()
    logger.configure(extra={"component": "brandmotion"})

    if settings.debug:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format=_debug_format,
            backtrace=True,
            diagnose=True,
        )
    else:
        logger.add(
            sys.stderr,
            level="INFO",
            format=_plain_format,
            filter=_production_filter,
            backtrace=True,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in INTERCEPTED_LOGGERS:
        logging.getLogger(name).handlers = [InterceptHandler()]


def get_logger(name: str) -> Any:
    """Logger tagged with the last part of a module name (``orchestrator``)."""
    return logger.bind(component=name.rsplit(".", 1)[-1])
