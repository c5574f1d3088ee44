from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from slowapi.errors import RateLimitExceeded
import logging
import uuid

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handles expected HTTP exceptions (400, 404, 502...) with standard format."""
    if isinstance(exc.detail, dict):
        code = exc.detail.get("code", "HTTP_ERROR")
        message = exc.detail.get("message", "")
    else:
        code, message = "HTTP_ERROR", str(exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message, "code": code},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Body/query schema errors; same shape as the rest."""
    first = exc.errors()[0] if exc.errors() else {}
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg", "Invalid request"))
    return JSONResponse(
        status_code=422,
        content={"error": message, "code": "REQUEST_VALIDATION_ERROR"},
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handles unexpected server errors (500) with unique error_id."""
    error_id = str(uuid.uuid4())[:8]  # Short UUID for error tracking

    logger.exception(f"💥 Error ID {error_id} for {request.url}", exc_info=exc)

    return JSONResponse(
        status_code=500,
        content={
            "error": f"Internal server error. Reference ID: {error_id}",
            "code": "INTERNAL_SERVER_ERROR",
        },
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    retry_after = getattr(exc, "retry_after", None) or 60
    return JSONResponse(
        status_code=429,
        content={
            "error": "You have exceeded the allowed number of requests. Please try again later.",
            "code": "RATE_LIMITED",
            "limit": str(exc.detail),
        },
        headers={"Retry-After": str(retry_after)},
    )
