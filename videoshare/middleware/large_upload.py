"""
Middleware for bounding upload request sizes
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

logger = structlog.get_logger()


class LargeUploadMiddleware(BaseHTTPMiddleware):
    """Reject multipart requests whose declared length exceeds the upload limit"""

    # Multipart framing and the videoData field ride along with the file
    FORM_OVERHEAD = 1024 * 1024

    def __init__(self, app: ASGIApp, max_size: int = 500 * 1024 * 1024):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next):
        content_type = request.headers.get("content-type", "")
        content_length = request.headers.get("content-length")

        if content_type.startswith("multipart/form-data") and content_length and content_length.isdigit():
            if int(content_length) > self.max_size + self.FORM_OVERHEAD:
                logger.warning(
                    "Upload rejected by size",
                    content_length=int(content_length),
                    max_size=self.max_size,
                    path=request.url.path
                )
                return JSONResponse(
                    status_code=413,
                    content={
                        "message": f"Upload exceeds maximum allowed size ({self.max_size} bytes)",
                        "status": False,
                        "error_type": "FileSizeError"
                    }
                )

        return await call_next(request)
