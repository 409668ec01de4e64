"""
Prometheus metrics for HR One services

This module provides standardized metrics collection including:
- HTTP request metrics
- Upstream API call metrics
- Error counters
"""
import time
from functools import wraps
from prometheus_client import (
    Counter, Histogram, Gauge, Info,
    CollectorRegistry, generate_latest,
    CONTENT_TYPE_LATEST
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Create custom registry for service metrics
service_registry = CollectorRegistry()

# HTTP Metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code', 'service'],
    registry=service_registry
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint', 'service'],
    registry=service_registry
)

http_requests_in_progress = Gauge(
    'http_requests_in_progress',
    'HTTP requests currently being processed',
    ['service'],
    registry=service_registry
)

# Upstream API Metrics
upstream_calls_total = Counter(
    'upstream_calls_total',
    'Total calls made to upstream APIs',
    ['operation', 'outcome', 'service'],  # outcome: success, failure
    registry=service_registry
)

upstream_call_duration_seconds = Histogram(
    'upstream_call_duration_seconds',
    'Upstream API call duration in seconds',
    ['operation', 'service'],
    registry=service_registry
)

# System Metrics
service_info = Info(
    'service_info',
    'Service information',
    registry=service_registry
)

UNMATCHED_ENDPOINT = "unmatched"

# Error Metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type', 'service'],
    registry=service_registry
)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP metrics"""

    def __init__(self, app, service_name: str):
        super().__init__(app)
        self.service_name = service_name

    async def dispatch(self, request: Request, call_next):
        # Skip metrics endpoint itself
        if request.url.path == "/metrics":
            return await call_next(request)

        http_requests_in_progress.labels(service=self.service_name).inc()
        start_time = time.time()

        try:
            response = await call_next(request)
            endpoint = self._get_endpoint_pattern(request)

            duration = time.time() - start_time
            http_requests_total.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=response.status_code,
                service=self.service_name
            ).inc()
            http_request_duration_seconds.labels(
                method=request.method,
                endpoint=endpoint,
                service=self.service_name
            ).observe(duration)

            return response

        except Exception as e:
            errors_total.labels(
                error_type=type(e).__name__,
                service=self.service_name
            ).inc()

            endpoint = self._get_endpoint_pattern(request)
            duration = time.time() - start_time
            http_request_duration_seconds.labels(
                method=request.method,
                endpoint=endpoint,
                service=self.service_name
            ).observe(duration)

            raise

        finally:
            http_requests_in_progress.labels(service=self.service_name).dec()

    def _get_endpoint_pattern(self, request: Request) -> str:
        """Route template such as /api/employees/{employee_id}, never the raw path"""
        route = request.scope.get("route")
        if route is not None:
            return route.path
        return UNMATCHED_ENDPOINT


def track_upstream_call(operation: str, service_name: str):
    """Decorator to track calls to an upstream API"""
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                upstream_calls_total.labels(
                    operation=operation,
                    outcome="failure",
                    service=service_name
                ).inc()
                errors_total.labels(
                    error_type=f"upstream_{type(e).__name__}",
                    service=service_name
                ).inc()
                raise
            finally:
                upstream_call_duration_seconds.labels(
                    operation=operation,
                    service=service_name
                ).observe(time.time() - start_time)

            upstream_calls_total.labels(
                operation=operation,
                outcome="success",
                service=service_name
            ).inc()
            return result

        return wrapper
    return decorator


def set_service_info(service_name: str, version: str, **kwargs):
    """Set service information"""
    info_dict = {
        'service': service_name,
        'version': version,
        **kwargs
    }
    service_info.info(info_dict)


def get_metrics() -> str:
    """Get metrics in Prometheus format"""
    return generate_latest(service_registry).decode('utf-8')


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
