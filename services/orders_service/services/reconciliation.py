"""Apply verified Razorpay webhook events to orders.

Every event becomes one conditional UPDATE: match the order, require a
status the transition is allowed from, set fields. Redelivery overwrites
with the same values, so at-least-once delivery is safe without locks.
"""

import enum
from typing import Any, Optional

from libs.common.datetime_utils import from_epoch_seconds, utc_now
from libs.common.errors import ValidationError
from libs.common.logging import get_logger
from services.orders_service.models import ALLOWED_SOURCES, Order, OrderStatus
from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

PAYMENT_CAPTURED = "payment.captured"
PAYMENT_LINK_PAID = "payment_link.paid"
PAYMENT_LINK_EXPIRED = "payment_link.expired"


class Outcome(str, enum.Enum):
    APPLIED = "applied"
    NO_MATCH = "no_match"
    STALE = "stale"
    IGNORED = "ignored"


MALFORMED_DETAIL = "Malformed webhook body"


def _object(value: Any) -> dict:
    """Absent parts read as empty; any other non-object part is malformed."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError(detail=MALFORMED_DETAIL)
    return value


def _text(entity: dict, key: str) -> Optional[str]:
    value = entity.get(key)
    if value is None or isinstance(value, str):
        return value or None
    raise ValidationError(detail=MALFORMED_DETAIL)


def _entity(event: dict, name: str) -> dict:
    payload = _object(event.get("payload"))
    return _object(_object(payload.get(name)).get("entity"))


async def _apply(
    db: AsyncSession,
    match: Any,
    target: OrderStatus,
    values: dict,
    event_type: str,
    reference: Optional[str],
) -> Outcome:
    stmt = (
        update(Order)
        .where(match, Order.status.in_(ALLOWED_SOURCES[target]))
        .values(status=target, updated_at=utc_now(), **values)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    await db.commit()

    log_fields = {"event": event_type, "reference": reference}
    if result.rowcount:
        logger.info(
            f"Order {reference} -> {target.value} ({event_type})",
            extra={"extra_fields": log_fields},
        )
        return Outcome.APPLIED

    existing = await db.execute(select(Order.status).where(match))
    current = existing.scalars().first()
    if current is None:
        logger.warning(
            f"Webhook {event_type} matched no order for {reference}",
            extra={"extra_fields": log_fields},
        )
        return Outcome.NO_MATCH

    logger.info(
        f"Webhook {event_type} ignored for {reference}: order is {current.value}",
        extra={"extra_fields": {**log_fields, "status": current.value}},
    )
    return Outcome.STALE


async def _payment_captured(db: AsyncSession, event: dict) -> Outcome:
    payment = _entity(event, "payment")
    order_id = _text(payment, "order_id")
    link_id = _text(_object(payment.get("notes")), "payment_link_id")

    criteria = []
    if order_id:
        criteria.append(Order.order_id == order_id)
    if link_id:
        criteria.append(Order.payment_link_id == link_id)
    if not criteria:
        logger.warning(
            "payment.captured carried no order reference",
            extra={"extra_fields": {"payment_id": _text(payment, "id")}},
        )
        return Outcome.NO_MATCH

    created_at = payment.get("created_at")
    if created_at is not None and (
        isinstance(created_at, bool) or not isinstance(created_at, (int, float))
    ):
        raise ValidationError(detail=MALFORMED_DETAIL)
    values = {
        "payment_id": _text(payment, "id"),
        "payment_method": _text(payment, "method"),
        "paid_at": from_epoch_seconds(created_at) if created_at else utc_now(),
    }
    return await _apply(
        db,
        or_(*criteria),
        OrderStatus.PAID,
        values,
        PAYMENT_CAPTURED,
        order_id or link_id,
    )


async def _payment_link_paid(db: AsyncSession, event: dict) -> Outcome:
    link_id = _text(_entity(event, "payment_link"), "id")
    if not link_id:
        return Outcome.NO_MATCH
    # Keep the first paid_at so a redelivered event changes nothing
    values = {"paid_at": func.coalesce(Order.paid_at, utc_now())}
    return await _apply(
        db,
        Order.order_id == link_id,
        OrderStatus.PAID,
        values,
        PAYMENT_LINK_PAID,
        link_id,
    )


async def _payment_link_expired(db: AsyncSession, event: dict) -> Outcome:
    link_id = _text(_entity(event, "payment_link"), "id")
    if not link_id:
        return Outcome.NO_MATCH
    return await _apply(
        db,
        Order.order_id == link_id,
        OrderStatus.EXPIRED,
        {},
        PAYMENT_LINK_EXPIRED,
        link_id,
    )


HANDLERS = {
    PAYMENT_CAPTURED: _payment_captured,
    PAYMENT_LINK_PAID: _payment_link_paid,
    PAYMENT_LINK_EXPIRED: _payment_link_expired,
}


async def apply_webhook_event(db: AsyncSession, event: dict) -> Outcome:
    """Dispatch a verified event on its `event` type."""
    event_type = event.get("event")
    if event_type is not None and not isinstance(event_type, str):
        raise ValidationError(detail=MALFORMED_DETAIL)
    handler = HANDLERS.get(event_type)
    if handler is None:
        logger.info(
            f"Unhandled Razorpay event: {event_type}",
            extra={"extra_fields": {"event": event_type}},
        )
        return Outcome.IGNORED
    return await handler(db, event)
