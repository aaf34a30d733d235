"""Global exception handlers."""

import logging
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from authz.schemas.common import ErrorResponse
from authz.utils.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BaseAuthException,
    ConfigurationError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_body(message: str, error_code: str | None, details: dict[str, Any] | None = None) -> dict[str, Any]:
    return ErrorResponse(message=message, error_code=error_code, details=details or {}).model_dump()


class ExceptionHandlers:
    """Centralized exception handlers for the application."""

    # Most specific first; subclasses inherit their parent's status
    status_mapping = (
        (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
        (AuthorizationError, status.HTTP_403_FORBIDDEN),
        (ValidationError, status.HTTP_400_BAD_REQUEST),
        (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )

    @classmethod
    def status_for(cls, exc: BaseAuthException) -> int:
        for exc_type, status_code in cls.status_mapping:
            if isinstance(exc, exc_type):
                return status_code
        return status.HTTP_500_INTERNAL_SERVER_ERROR

    @classmethod
    async def base_auth_exception_handler(cls, request: Request, exc: BaseAuthException) -> JSONResponse:
        """Handle all custom auth exceptions."""

        logger.warning(
            f"Auth exception in {request.method} {request.url}: {exc.message}",
            extra={
                "error_code": exc.error_code,
                "details": exc.details,
                "path": str(request.url.path),
                "method": request.method,
            },
        )

        return JSONResponse(
            status_code=cls.status_for(exc),
            content=_error_body(exc.message, exc.error_code, exc.details),
        )

    @staticmethod
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Handle request validation errors."""

        logger.warning(
            f"Validation error in {request.method} {request.url}: {str(exc)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
            },
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body(
                "Validation failed", "VALIDATION_ERROR", {"validation_errors": str(exc)}
            ),
        )

    @staticmethod
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle FastAPI HTTP exceptions with consistent format."""

        error_code_mapping = {
            400: "BAD_REQUEST",
            401: "UNAUTHORIZED",
            403: "FORBIDDEN",
            404: "NOT_FOUND",
            405: "METHOD_NOT_ALLOWED",
            422: "VALIDATION_ERROR",
            500: "INTERNAL_ERROR",
        }

        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), error_code_mapping.get(exc.status_code, "HTTP_ERROR")),
        )

    @staticmethod
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""

        logger.error(
            f"Unexpected error in {request.method} {request.url}: {str(exc)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__,
            },
            exc_info=True,
        )

        details = {}
        app_settings = getattr(request.app.state, "settings", None)
        if app_settings is not None and app_settings.DEBUG:
            details = {"exception_type": type(exc).__name__, "error": str(exc)}

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal server error", "INTERNAL_ERROR", details),
        )


def register_exception_handlers(app: Any) -> None:
    """Register all exception handlers with the FastAPI app."""

    handlers = ExceptionHandlers()

    app.add_exception_handler(BaseAuthException, handlers.base_auth_exception_handler)
    app.add_exception_handler(RequestValidationError, handlers.validation_exception_handler)
    app.add_exception_handler(HTTPException, handlers.http_exception_handler)
    app.add_exception_handler(Exception, handlers.general_exception_handler)
