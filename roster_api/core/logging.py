import logging
import uuid

import structlog

from roster_api.core.config import settings


def configure_logging(level: str = "INFO") -> None:
    log_level = logging.getLevelName(level.upper())
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )
    # uvicorn and sqlalchemy still log through the stdlib
    logging.basicConfig(level=log_level, format="%(message)s")
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def bind_request_context(method: str, path: str, request_id: str | None = None) -> str:
    """Start a fresh log context for one request and return its id."""
    request_id = request_id or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id, method=method, path=path, service=settings.app_name
    )
    return request_id


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)
