"""Razorpay webhook signature verification."""

import hashlib
import hmac
from typing import Optional

from libs.common.errors import SignatureError
from libs.common.logging import get_logger

logger = get_logger(__name__)

SIGNATURE_HEADER = "x-razorpay-signature"


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Hex HMAC-SHA256 of the exact bytes received."""
    return hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()


def verify_webhook_signature(
    raw_body: bytes, signature: Optional[str], secret: Optional[str]
) -> None:
    """
    Raise SignatureError unless `signature` matches the body's digest.

    Must run on the raw request bytes before the body is parsed; a
    re-serialized payload would not hash to the same digest.
    """
    if not secret:
        logger.error("Webhook secret is not configured; rejecting event")
        raise SignatureError()
    if not signature:
        logger.warning("Webhook received without signature header")
        raise SignatureError()

    expected = compute_signature(raw_body, secret)
    if not hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8")):
        logger.warning("Webhook signature mismatch")
        raise SignatureError()
