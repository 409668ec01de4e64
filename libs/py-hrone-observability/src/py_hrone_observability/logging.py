"""
Structured logging for the HR One portal

Every record carries the service name and the active employee store mode.
Records written while a request is in flight also carry its correlation id
and the calling user.
"""
import logging
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

CORRELATION_HEADER = "x-correlation-id"

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
_user_id: ContextVar[Optional[str]] = ContextVar("user_id", default=None)


def configure_logging(
    service_name: str,
    store_mode: str,
    log_level: str = "INFO",
    json_logs: bool = True,
):
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            portal_fields(service=service_name, store=store_mode),
            request_fields,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        logger_factory=structlog.WriteLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def portal_fields(**fields):
    """Processor stamping fixed fields; explicit event values win."""
    def processor(logger, method_name, event_dict):
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict
    return processor


def request_fields(logger, method_name, event_dict):
    correlation_id = _correlation_id.get()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    user_id = _user_id.get()
    if user_id:
        event_dict.setdefault("user_id", user_id)
    return event_dict


def set_user_context(user_id: Optional[str]):
    if user_id:
        _user_id.set(user_id)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """One access record per request, tagged with a correlation id that is echoed back"""

    def __init__(self, app):
        super().__init__(app)
        self.logger = structlog.get_logger("portal.http")

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
        token = _correlation_id.set(correlation_id)
        started = time.perf_counter()

        # Headers hold the caller's bearer token and stay out of the record
        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(
                "request_failed",
                method=request.method,
                path=request.url.path,
                duration_ms=_elapsed_ms(started),
            )
            raise
        else:
            self.logger.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
            )
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
        finally:
            _correlation_id.reset(token)


@contextmanager
def timed_operation(operation: str, **context):
    """Debug-log how long a block took, or log the failure and re-raise."""
    logger = structlog.get_logger("portal.timing")
    started = time.perf_counter()
    try:
        yield
    except Exception as e:
        logger.error(
            "operation_failed",
            operation=operation,
            duration_ms=_elapsed_ms(started),
            error_type=type(e).__name__,
            **context,
        )
        raise
    logger.debug("operation_completed", operation=operation, duration_ms=_elapsed_ms(started), **context)


def log_employee_event(action: str, employee_id: str, **data):
    """Audit trail for employee record changes"""
    structlog.get_logger("portal.audit").info(
        "employee_changed",
        action=action,
        employee_id=employee_id,
        **data
    )
