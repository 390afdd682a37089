"""
Request correlation ids.

Every request served by the costing API carries an id in X-Request-ID. A
caller-supplied id is reused so a cost lookup can be followed across
services; otherwise one is generated. The id is stamped on each log record
emitted while the request is in flight.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(incoming: str | None) -> str:
    """
    Reuse the caller's id when it is printable and short, else mint a UUID.

    Ids end up verbatim in log lines, so control characters are not accepted.
    """
    if incoming:
        incoming = incoming.strip()
        if 0 < len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
            return incoming
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind the request id for the duration of the request and echo it back."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class CorrelationIdFilter(logging.Filter):
    """Copy the current request id onto log records ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True
