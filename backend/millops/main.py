"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from millops.api.routes import api_router
from millops.core.config import settings
from millops.core.exceptions import register_exception_handlers
from millops.core.rate_limit import limiter
from millops.core.security import decode_access_token, token_from_headers, COOKIE_ACCESS_NAME
from millops.db.base import Base
from millops.db.session import engine

import millops.models  # noqa: F401  register every table on Base.metadata

APP_VERSION = "1.0.0"

# Paths under the API prefix reachable without a token
PUBLIC_API_PATHS = [
    f"{settings.api_prefix}/auth/login",
]

REGISTER_PATH = f"{settings.api_prefix}/auth/register"


def is_public_api_path(path: str) -> bool:
    """Login is always open; registration only while ``open_registration`` is on."""
    if path in PUBLIC_API_PATHS:
        return True
    return path == REGISTER_PATH and settings.open_registration

PUBLIC_EXACT_PATHS = [
    "/",
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
]

# Configure logging - use JSON format in production, human-readable in dev
root_logger = logging.getLogger()
root_logger.setLevel(getattr(logging, settings.log_level))
root_logger.handlers.clear()

if settings.debug:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
else:
    import json as _json
    import sys

    class JSONFormatter(logging.Formatter):
        def format(self, record):
            return _json.dumps({
                "ts": self.formatTime(record, self.datefmt),
                "level": record.levelname,
                "logger": record.name,
                "msg": record.getMessage(),
                "module": record.module,
                "line": record.lineno,
            })

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

root_logger.addHandler(handler)
logger = logging.getLogger(__name__)
request_logger = logging.getLogger("requests")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


class AuthEnforcementMiddleware(BaseHTTPMiddleware):
    """Reject API calls without a valid token before they reach a route.

    Routes still resolve the principal themselves; this only guarantees that
    nothing under the API prefix is served anonymously by accident.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # Always allow OPTIONS (CORS preflight)
        if request.method == "OPTIONS" or path in PUBLIC_EXACT_PATHS:
            return await call_next(request)

        if path.startswith(f"{settings.api_prefix}/") and not is_public_api_path(path):
            token = token_from_headers(
                request.headers.get("Authorization"),
                request.cookies.get(COOKIE_ACCESS_NAME),
            )
            payload = decode_access_token(token) if token else None
            if payload is None:
                return JSONResponse(
                    status_code=401,
                    content={"message": "Authentication required"},
                    headers={"WWW-Authenticate": "Bearer"},
                )

        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging all HTTP requests and responses."""

    async def dispatch(self, request: Request, call_next):
        # Skip logging for health checks and docs
        if request.url.path in PUBLIC_EXACT_PATHS:
            return await call_next(request)

        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        request_logger.info(
            f"Request: {request.method} {request.url.path} - Client: {client_ip}"
        )

        try:
            response = await call_next(request)
            process_time = time.time() - start_time

            log_level = logging.WARNING if response.status_code >= 400 else logging.INFO
            request_logger.log(
                log_level,
                f"Response: {request.method} {request.url.path} - "
                f"Status: {response.status_code} - Time: {process_time:.3f}s - Client: {client_ip}"
            )

            return response
        except Exception as e:
            process_time = time.time() - start_time
            request_logger.error(
                f"Error: {request.method} {request.url.path} - "
                f"Exception: {str(e)} - Time: {process_time:.3f}s - Client: {client_ip}"
            )
            raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting Mill Operations Tracker")

    # In production with PostgreSQL, use Alembic migrations
    if settings.database_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created (SQLite mode)")

    yield

    logger.info("Shutting down Mill Operations Tracker")


app = FastAPI(
    title="Mill Operations Tracker",
    description="Production tracking API for a maize-flour mill",
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# Rate limiting setup
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

register_exception_handlers(app)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(AuthEnforcementMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# CORS middleware - MUST be added last so it runs first (Starlette LIFO order).
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept", "Origin", "X-Requested-With"],
    max_age=600,  # Cache preflight for 10 minutes
)

app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health")
def health_check():
    """Basic liveness check endpoint."""
    return {"status": "healthy", "version": APP_VERSION}


@app.get("/")
def root():
    return {"name": "Mill Operations Tracker", "version": APP_VERSION, "health": "/health"}
