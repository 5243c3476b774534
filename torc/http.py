"""
Shared HTTP plumbing for the public and admin APIs.

Maps the core error taxonomy onto the standard ErrorResponse body so both
applications report failures identically.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from torc.core.config import get_settings
from torc.core.exceptions import TorcError
from torc.schemas import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers shared by every torc application."""

    @app.exception_handler(TorcError)
    async def torc_error_handler(request: Request, exc: TorcError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
        return error_response(exc.status_code, exc.message, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(400, "invalid JSON body", str(exc.errors()))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all exception handler."""
        logger.exception(f"Unhandled exception: {exc}")
        settings = get_settings()
        return error_response(
            500,
            "Internal Server Error",
            str(exc) if settings.debug else "An unexpected error occurred",
        )
