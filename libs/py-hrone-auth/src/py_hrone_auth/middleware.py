"""
Response hardening for the HR One portal
"""
from typing import Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Responses carry personal employee data and are never cacheable
PORTAL_SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}

HSTS_HEADER = "Strict-Transport-Security"
HSTS_VALUE = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp the portal's security headers on every response.

    HSTS is only sent when ``hsts`` is on; a local plain-HTTP deployment
    turns it off. Headers already set by an endpoint are left alone.
    """

    def __init__(self, app, hsts: bool = True, extra_headers: Optional[Dict[str, str]] = None):
        super().__init__(app)
        headers = dict(PORTAL_SECURITY_HEADERS)
        if hsts:
            headers[HSTS_HEADER] = HSTS_VALUE
        headers.update(extra_headers or {})
        self.headers = headers

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response
