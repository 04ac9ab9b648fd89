"""
Access logging middleware
"""

import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from videoshare.core.logging_config import request_logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration for every request"""

    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        user_id = request.session.get("user_id") if "session" in request.scope else None
        request_logger.log_request(
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            response_time=elapsed,
            ip_address=request.client.host if request.client else "",
            user_id=str(user_id or "")
        )
        return response
