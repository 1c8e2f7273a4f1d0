"""Global exception handlers for consistent error responses.

Status convention used across every endpoint:
200/201 success, 400 bad input, 403 denied, 404 missing, 500 failure.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from libs.common.errors import AppError, AuthorizationError
from libs.common.logging import get_logger

logger = get_logger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    content = {"error": exc.code, "detail": exc.detail}
    if isinstance(exc, AuthorizationError) and exc.redirect_to:
        content["redirect_to"] = exc.redirect_to

    if exc.status_code >= 500:
        logger.error(
            f"{exc.code}: {exc.detail}",
            extra={"extra_fields": {"error_code": exc.code}},
        )
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "VALIDATION_ERROR",
            "detail": "Invalid request",
            "errors": errors,
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception",
        extra={"extra_fields": {"path": request.url.path}},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "INTERNAL_ERROR", "detail": "Internal server error"},
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Register the application's exception handlers."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
