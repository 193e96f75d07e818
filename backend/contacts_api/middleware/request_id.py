"""
Contacts API - Request ID Middleware
=====================================

What:  Gives every request a correlation ID and echoes it on the response.
How:   Accepts a well-formed incoming X-Request-ID, otherwise mints one;
       publishes it through a ContextVar for loggers and error paths.
When:  Outermost of our middleware, so the header is also set on 500s
       produced by RequestLoggingMiddleware.

Accepted incoming IDs:
    1-64 characters from [A-Za-z0-9._-]. Anything else is replaced, so a
    client cannot smuggle spaces or control characters into the access log.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(incoming: Optional[str]) -> str:
    """The client's ID when it is well formed, a fresh one otherwise."""
    if incoming and _VALID_REQUEST_ID.fullmatch(incoming):
        return incoming
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
