"""Application error taxonomy shared by every service.

Each error maps to one HTTP status; `libs.common.error_handler` turns them
into JSON responses. `detail` is the user-facing message and stays generic,
anything diagnostic belongs in the log record.
"""

from typing import Optional


class AppError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None, code: Optional[str] = None):
        self.detail = detail or self.detail
        self.code = code or self.code
        super().__init__(self.detail)


class ValidationError(AppError):
    """Caller-supplied input is missing or malformed."""

    status_code = 400
    code = "VALIDATION_ERROR"
    detail = "Invalid request"


class NotFoundError(AppError):
    """A referenced entity does not exist."""

    status_code = 404
    code = "NOT_FOUND"
    detail = "Not found"


class AuthorizationError(AppError):
    """Caller is authenticated but lacks approval or the admin role."""

    status_code = 403
    code = "FORBIDDEN"
    detail = "Access denied"

    def __init__(
        self,
        detail: Optional[str] = None,
        code: Optional[str] = None,
        redirect_to: Optional[str] = None,
    ):
        self.redirect_to = redirect_to
        super().__init__(detail, code)


class SignatureError(AppError):
    """Webhook signature missing or mismatched."""

    status_code = 400
    code = "INVALID_SIGNATURE"
    detail = "Invalid signature"


class UpstreamError(AppError):
    """The payment gateway call failed."""

    status_code = 500
    code = "UPSTREAM_ERROR"
    detail = "Payment provider request failed"
