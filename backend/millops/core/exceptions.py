"""Domain error taxonomy and its HTTP rendering.

Services raise these; the handlers registered by ``register_exception_handlers``
turn them into ``{"message": ...}`` JSON responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class MillOpsError(Exception):
    """Base class for errors with a known HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(MillOpsError):
    """Input is missing required fields or is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConstraintError(MillOpsError):
    """A unique key collided or a reference points at nothing."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(MillOpsError):
    """No row with the requested identifier."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class AuthError(MillOpsError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class IllegalTransitionError(MillOpsError):
    """Requested status is not reachable from the current one."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, entity: str, current: str, requested: str):
        self.entity = entity
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot move {entity} from '{current}' to '{requested}'"
        )


class UnknownError(MillOpsError):
    """Any other store or runtime failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def _millops_error_handler(request: Request, exc: MillOpsError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=headers,
    )


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request", "errors": errors},
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MillOpsError, _millops_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
