"""
Contacts API - Access Log & Last-Resort Error Middleware
=========================================================

What:  One access-log line per request, and a JSON 500 for anything that
       escapes the routes and the ContactsAPIError handler.
How:   Times the downstream call. A raised exception (driver timeout, lost
       connection, a bug) is logged with its traceback and turned into
       `{"message": "Internal server error"}` here, inside RequestIDMiddleware,
       so the 500 still carries X-Request-ID and gets its access line.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Access line:
    GET /contacts/{contact_id} 404 3.2ms [a1b2c3d4] from 10.0.0.7

    The matched route template is logged rather than the raw path, so
    contact ids do not fan out into one log key per record. Request bodies
    are never logged (contacts hold personal data).

Level by status:
    5xx → ERROR    4xx → WARNING    other → INFO
"""

import logging
import time

from fastapi import Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from contacts_api.exceptions import INTERNAL_ERROR_MESSAGE
from contacts_api.middleware.request_id import request_id_var

logger = logging.getLogger("contacts_api.access")

# Probed every few seconds by orchestrators
QUIET_PATHS = frozenset({"/health"})


def route_template(request: Request) -> str:
    """`/contacts/{contact_id}` for a matched route, the raw path otherwise."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def status_log_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        rid = request_id_var.get("")

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unhandled %s on %s %s: %s",
                rid,
                type(exc).__name__,
                request.method,
                request.url.path,
                exc,
                exc_info=exc,
            )
            response = JSONResponse(
                status_code=500, content={"message": INTERNAL_ERROR_MESSAGE}
            )

        status = response.status_code
        if request.url.path in QUIET_PATHS and status < 500:
            return response

        duration_ms = (time.perf_counter() - start_time) * 1000
        client_ip = request.client.host if request.client else "unknown"
        route = route_template(request)

        logger.log(
            status_log_level(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            route,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
