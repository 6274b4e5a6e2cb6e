"""
Logging setup.

All records, ours and those of uvicorn, SQLAlchemy and asyncpg, go
through structlog's formatter on one stdout handler: colored console
lines in development, JSON lines everywhere else. Requests are tagged
with ``request_id``, ``method`` and ``path``.
"""
import logging
import sys
import time
import uuid
from typing import Dict

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from jobly.core.config import settings


def library_log_levels() -> Dict[str, int]:
    """Levels for third-party loggers. ``DB_ECHO`` turns on SQL statement logging."""
    return {
        "uvicorn.access": logging.WARNING,
        "asyncpg": logging.WARNING,
        "sqlalchemy.engine": logging.INFO if settings.db_echo else logging.WARNING,
    }


def _renderer():
    if settings.environment == "development":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging() -> None:
    """Configure structlog and stdlib logging. Call once at startup."""
    # Applied to stdlib records too, so SQLAlchemy lines carry level and time
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    for name, level in library_log_levels().items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Bind request context for every log line and echo ``X-Request-ID``.

    A caller-supplied ID is reused; otherwise a UUID4 is generated.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        response = await call_next(request)
        structlog.get_logger(__name__).debug(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )

        response.headers["X-Request-ID"] = request_id
        return response
