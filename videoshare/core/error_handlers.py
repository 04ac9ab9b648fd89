"""
Global error handlers for FastAPI application
"""

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from videoshare.core.exceptions import VideoShareError, create_error_response

logger = structlog.get_logger()


async def app_error_handler(request: Request, exc: VideoShareError) -> JSONResponse:
    """
    Handle custom VideoShareError exceptions

    Args:
        request: FastAPI request object
        exc: VideoShareError exception

    Returns:
        JSONResponse with error details
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Application error occurred",
        error_type=exc.__class__.__name__,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
        method=request.method
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc),
        headers=exc.headers
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle HTTPException with standardized response format
    """
    logger.warning(
        "HTTP exception occurred",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method
    )

    if isinstance(exc.detail, dict):
        content = {
            "status": False,
            **exc.detail
        }
    else:
        content = {
            "message": str(exc.detail),
            "status": False,
            "error_type": "HTTPException"
        }

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None)
    )


def format_validation_errors(errors) -> list:
    """Flatten pydantic error entries into field/message pairs"""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        formatted.append({
            "field": ".".join(loc) or "body",
            "message": error["msg"]
        })
    return formatted


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request validation errors raised by FastAPI itself
    (path and query parameters, malformed JSON bodies)
    """
    logger.warning(
        "Validation error occurred",
        errors=exc.errors(),
        path=request.url.path,
        method=request.method
    )

    content = {
        "message": "Validation error",
        "status": False,
        "error_type": "ValidationError",
        "errors": format_validation_errors(exc.errors())
    }

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=content
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions
    """
    logger.error(
        "Unexpected error occurred",
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        path=request.url.path,
        method=request.method,
        exc_info=exc
    )

    content = {
        "message": "An unexpected error occurred. Please try again later.",
        "status": False,
        "error_type": "InternalServerError"
    }

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content
    )


def register_error_handlers(app):
    """
    Register all error handlers with the FastAPI application

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(VideoShareError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
