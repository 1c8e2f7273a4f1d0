"""Razorpay webhook endpoint."""

import json

from fastapi import APIRouter, Depends, Request
from libs.common.config import get_settings
from libs.common.errors import ValidationError
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.orders_service.services.reconciliation import apply_webhook_event
from services.orders_service.services.signature import (
    SIGNATURE_HEADER,
    verify_webhook_signature,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/payments", tags=["payments"])
logger = get_logger(__name__)


@router.post("/webhooks/razorpay")
async def razorpay_webhook(
    request: Request,
    db: AsyncSession = Depends(get_async_db),
):
    """
    Razorpay webhook endpoint (no auth; verified by x-razorpay-signature).

    Any 2xx tells Razorpay to stop retrying, so unknown orders and unknown
    event types still answer {"received": true}.
    """
    raw = await request.body()
    verify_webhook_signature(
        raw,
        request.headers.get(SIGNATURE_HEADER),
        get_settings().RAZORPAY_WEBHOOK_SECRET,
    )

    try:
        event = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise ValidationError(detail="Malformed webhook body")
    if not isinstance(event, dict):
        raise ValidationError(detail="Malformed webhook body")

    outcome = await apply_webhook_event(db, event)
    logger.info(
        f"Webhook {event.get('event')} processed: {outcome.value}",
        extra={
            "extra_fields": {"event": event.get("event"), "outcome": outcome.value}
        },
    )
    return {"received": True}
