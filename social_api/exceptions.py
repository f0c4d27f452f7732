"""
Typed failures raised by the service layer and their HTTP translation.

Services never build HTTP responses themselves; they raise one of the
``AppError`` subclasses below and ``install_exception_handlers`` turns it
into a JSON body of the form ``{"detail": "..."}``.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    """A referenced entity does not exist."""

    status_code = 404


class ValidationError(AppError):
    """Required input is missing or the requested change is not allowed."""

    status_code = 400


class StorageError(AppError):
    """An uploaded file could not be stored."""

    status_code = 500

    # Returned to clients instead of the underlying OS error.
    public_message = "The image could not be stored"


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
        detail = StorageError.public_message
    else:
        detail = exc.message
    return JSONResponse(status_code=exc.status_code, content={"detail": detail})


def install_exception_handlers(app: FastAPI) -> None:
    """Register the ``AppError`` handler on *app*."""
    app.add_exception_handler(AppError, _app_error_handler)
