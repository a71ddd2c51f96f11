# backend/inspection_payroll/middleware/request_id.py
from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    return request_id_ctx.get()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Reuses the caller's X-Request-ID or mints a uuid4, and echoes it on the response."""

    header = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # header lookup is case-insensitive
        rid = request.headers.get(self.header) or str(uuid.uuid4())

        token = request_id_ctx.set(rid)
        request.state.request_id = rid
        try:
            resp = await call_next(request)
            resp.headers[self.header] = rid
            return resp
        finally:
            request_id_ctx.reset(token)
