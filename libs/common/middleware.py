"""Request tracing middleware.

Every request gets an id (the caller's X-Request-ID when supplied) that is
bound to the logging context, echoed back in the response headers and
included in one summary log line per request.
"""

import logging
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from libs.common.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = frozenset({"/health"})


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(
            request_id=request.headers.get(REQUEST_ID_HEADER),
            path=request.url.path,
            method=request.method,
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "Request crashed",
                extra={
                    "extra_fields": {
                        "error": str(exc),
                        "duration_ms": _elapsed_ms(started),
                    }
                },
            )
            raise
        else:
            if request.url.path not in QUIET_PATHS:
                level = logging_level_for(response.status_code)
                logger.log(
                    level,
                    f"{request.method} {request.url.path} -> {response.status_code}",
                    extra={
                        "extra_fields": {
                            "status_code": response.status_code,
                            "duration_ms": _elapsed_ms(started),
                        }
                    },
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_context()


def logging_level_for(status_code: int) -> int:
    """Client and server errors are logged as warnings."""
    return logging.WARNING if status_code >= 400 else logging.INFO


def add_observability_middleware(app: FastAPI) -> None:
    """Configure logging and install request tracing on `app`."""
    configure_logging()
    app.add_middleware(RequestContextMiddleware)
