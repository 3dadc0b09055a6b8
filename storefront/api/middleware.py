"""HTTP middleware and the error envelope.

Every failed request, whether it ends in a CatalogError, a rejected
request body or an unexpected crash, is answered with the same JSON
body built by error_body(). The request ID from RequestContextMiddleware
is echoed in that body, in the X-Request-ID header and in every log line
emitted while the request is served.
"""

import time
from typing import Any, Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def error_body(
    request: Request,
    error_code: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build the error envelope for a request.

    Args:
        request: Request being answered.
        error_code: Machine-readable code (e.g. "NOT_FOUND").
        message: Human-readable message.
        details: Extra context entries, rendered as a list.

    Returns:
        Dict with error_code, message, details and request_id.
    """
    return {
        "error_code": error_code,
        "message": message,
        "details": details or [],
        "request_id": getattr(request.state, "request_id", None),
    }


# ============================================================================
# Request Context
# ============================================================================


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with a correlation ID.

    A caller-supplied X-Request-ID is reused; otherwise a UUID4 is minted.
    The ID and route are bound to structlog's context for the duration of
    the request, so store warnings and category-creation logs can be
    traced back to the call that caused them.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
        finally:
            logger.info(
                "Request completed",
                status_code=getattr(response, "status_code", 500),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            structlog.contextvars.unbind_contextvars("request_id", "method", "path")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# ============================================================================
# Last-resort Error Handling
# ============================================================================


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turn exceptions no handler claimed into a 500 envelope.

    The real error is logged with its traceback; the caller only sees a
    generic message.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception("Unhandled exception", error=str(e))
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_body(request, "INTERNAL_ERROR", "An internal error occurred"),
            )


def setup_middleware(app: FastAPI) -> None:
    """Install the middleware stack.

    Middleware added last wraps outermost, so the request ID is bound
    before UnhandledErrorMiddleware renders a 500.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(RequestContextMiddleware)
