"""Per-caller request throttling (slowapi).

Signed-in callers are throttled by identity, everyone else by client IP.
The counter store is in-process memory unless RATE_LIMIT_STORAGE_URI points
elsewhere (e.g. ``redis://``), which is needed once more than one worker runs.
"""

from typing import Callable

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from libs.common.config import Settings, get_settings

DEFAULT_LIMIT = "100/minute"
SIGN_IN_LIMIT = "5/minute"
CHECKOUT_LIMIT = "10/minute"


def _client_ip(request: Request) -> str:
    # Behind a proxy the left-most X-Forwarded-For entry is the caller
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


def rate_limit_key(request: Request) -> str:
    """`get_current_user` stores the caller on request.state before handlers run."""
    user = getattr(request.state, "user", None)
    if user is not None:
        return f"user:{user.email.lower()}"
    return f"ip:{_client_ip(request)}"


def build_limiter(settings: Settings) -> Limiter:
    return Limiter(
        key_func=rate_limit_key,
        default_limits=[DEFAULT_LIMIT],
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        strategy="fixed-window",
        enabled=settings.RATE_LIMIT_ENABLED,
    )


limiter = build_limiter(get_settings())


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """429 in the same body shape as every other error response."""
    return JSONResponse(
        status_code=429,
        content={
            "error": "RATE_LIMIT_EXCEEDED",
            "detail": f"Too many requests ({exc.detail}). Please slow down.",
        },
        headers={"Retry-After": "60"},
    )


def auth_limit(func: Callable) -> Callable:
    """Throttle sign-in attempts."""
    return limiter.limit(SIGN_IN_LIMIT)(func)


def payment_limit(func: Callable) -> Callable:
    """Throttle checkout, which calls the payment gateway."""
    return limiter.limit(CHECKOUT_LIMIT)(func)
