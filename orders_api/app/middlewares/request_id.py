"""Request id propagation.

Each request gets an id from ``X-Request-ID`` or a fresh uuid4. The id is
echoed back on the response, placed in error envelopes by
:func:`~orders_api.app.utils.responses.err`, and stamped on every pricing
log record through :class:`~orders_api.app.obs.logging.RequestIdFilter`.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# read by the pricing log filter and the error envelope
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Ensure every request carries a request id."""

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_ctx.set(req_id)
        request.state.request_id = req_id
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers["X-Request-ID"] = req_id
        return response
