# arab_insights/middlewares/security.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from arab_insights.core.config import Settings, settings


# ----------------------------
# Rate Limiting Configuration
# ----------------------------
# Decorators bind to this instance at import time, so it stays module-level.
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


# Limit strings are read per request, so the app factory can override them.
_route_limits = {"analyze": settings.ANALYZE_RATE_LIMIT}


def analyze_rate_limit() -> str:
    return _route_limits["analyze"]


def add_rate_limit(app: FastAPI, settings: Settings) -> None:
    # process-wide: the last app created decides enabled state and limits
    limiter.enabled = settings.RATE_LIMIT_ENABLED
    _route_limits["analyze"] = settings.ANALYZE_RATE_LIMIT
    app.state.limiter = limiter


# ----------------------------
# CORS Middleware
# ----------------------------
def add_cors_middleware(app: FastAPI, settings: Settings) -> None:
    if settings.ENV in ("local", "test") or not settings.FRONTEND_ORIGIN:
        allow_origins = ["*"]
        allow_credentials = False
    else:
        allow_origins = [settings.FRONTEND_ORIGIN]
        allow_credentials = True

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ----------------------------
# Security Headers Middleware
# ----------------------------
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)

        # Enforce HTTPS
        response.headers["Strict-Transport-Security"] = (
            "max-age=63072000; includeSubDomains"
        )

        # MIME sniffing protection
        response.headers["X-Content-Type-Options"] = "nosniff"

        # Prevent Clickjacking
        response.headers["X-Frame-Options"] = "DENY"

        # Don't leak referrer info
        response.headers["Referrer-Policy"] = "no-referrer"

        # Restrict device APIs
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=()"

        response.headers["Cross-Origin-Resource-Policy"] = "same-origin"
        response.headers["Cross-Origin-Opener-Policy"] = "same-origin"

        return response
