"""
Listing API — Request Logging Middleware
========================================

What:  One access log line per request, tagged with the listing it touched
       and the caller that sent it.
How:   Level follows the status code (5xx ERROR, 4xx WARNING, else INFO).
       The listing id is read from the matched route's path parameters, the
       caller from the gateway's X-User-ID header. Bodies are never logged:
       they carry form fields and photos. /health is skipped.

Example:
    PATCH /listings/12/field 200 8.4ms [3f9a1c2e] listing=12 caller=7
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from listing_api.middleware.request_id import request_id_var

logger = logging.getLogger("listing_api.access")

UNKNOWN = "-"


def access_fields(request: Request, status: int, duration_ms: float) -> Dict[str, Any]:
    """Structured fields for one access log record."""
    # path_params is filled in by the router, so read it after call_next
    listing_id = request.scope.get("path_params", {}).get("listing_id")
    return {
        "request_id": request_id_var.get(""),
        "method": request.method,
        "path": request.url.path,
        "status": status,
        "duration_ms": round(duration_ms, 2),
        "listing_id": UNKNOWN if listing_id is None else str(listing_id),
        "caller": request.headers.get("X-User-ID") or UNKNOWN,
    }


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/health":
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        fields = access_fields(
            request, response.status_code, (time.perf_counter() - start_time) * 1000
        )

        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms [%s] listing=%s caller=%s",
            fields["method"],
            fields["path"],
            fields["status"],
            fields["duration_ms"],
            fields["request_id"],
            fields["listing_id"],
            fields["caller"],
            extra=fields,
        )
        return response
