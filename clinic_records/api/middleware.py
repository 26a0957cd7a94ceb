"""Middleware configuration for the Clinic Records API."""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request and catches anything the error handlers did not.

    Adds ``X-Request-ID`` and ``X-Process-Time`` headers to each response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        start_time = time.time()
        context = {
            "request_id": request_id,
            "client_ip": request.client.host if request.client else "unknown",
            "method": request.method,
            "path": request.url.path,
        }

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"{request.method} {request.url.path} - "
                f"Unhandled {type(e).__name__} - Time: {process_time:.3f}s",
                exc_info=True,
                extra={**context, "status_code": 500, "duration_ms": round(process_time * 1000, 2)},
            )
            response = JSONResponse(status_code=500, content={"message": "Server error"})
            response.headers["X-Request-ID"] = request_id
            return response

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        response.headers["X-Request-ID"] = request_id
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.3f}s",
            extra={**context, "status_code": response.status_code, "duration_ms": round(process_time * 1000, 2)},
        )
        return response


def setup_middleware(app) -> None:
    """Register application middleware."""
    app.add_middleware(LoggingMiddleware)
