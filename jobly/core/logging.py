"""
structlog setup for the API, the seed script and migrations.

Output is JSON lines everywhere except development, where the console
renderer is used. Stdlib loggers (uvicorn, SQLAlchemy, asyncpg) go through
the same formatter, so every line has the same shape.
"""
import logging
import sys
import time
import uuid
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from jobly.core.config import settings

_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "asyncpg")


def setup_logging(json_logs: Optional[bool] = None, level: Optional[str] = None) -> None:
    """
    Configure structlog and the stdlib root logger. Call once at startup.

    ``json_logs`` defaults to True outside development; ``level`` defaults to
    DEBUG in debug mode and ``settings.log_level`` otherwise.
    """
    if json_logs is None:
        json_logs = settings.environment != "development"
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level

    timestamper = structlog.processors.TimeStamper(fmt="iso")
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        timestamper,
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if json_logs:
        final = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        final = [structlog.dev.ConsoleRenderer()]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *final,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    # db_echo turns SQL logging back on
    for name in _QUIET_LOGGERS:
        if name == "sqlalchemy.engine" and settings.db_echo:
            continue
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


_access_logger = get_logger("jobly.access")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Bind a request ID to every log line emitted while serving a request.

    The ID comes from the incoming ``X-Request-ID`` header when the caller
    supplies one and is echoed back on the response either way. One
    ``request_finished`` event is logged per request with its status and
    wall-clock duration.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        _access_logger.info(
            "request_finished",
            status_code=response.status_code,
            duration_ms=elapsed_ms,
        )
        response.headers["X-Request-ID"] = request_id
        return response
