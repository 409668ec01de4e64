"""HR One Observability Library."""

from .metrics import (
    MetricsMiddleware,
    track_upstream_call,
    set_service_info,
    get_metrics,
    get_metrics_content_type,
)

from .logging import (
    CORRELATION_HEADER,
    configure_logging,
    LoggingMiddleware,
    timed_operation,
    log_employee_event,
    set_user_context,
)

__all__ = [
    # Metrics
    "MetricsMiddleware",
    "track_upstream_call",
    "set_service_info",
    "get_metrics",
    "get_metrics_content_type",

    # Logging
    "CORRELATION_HEADER",
    "configure_logging",
    "LoggingMiddleware",
    "timed_operation",
    "log_employee_event",
    "set_user_context",
]

__version__ = "0.1.0"
