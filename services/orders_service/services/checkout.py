"""Order placement: cart + customer -> Razorpay payment link -> `created` order.

Only the first cart line is checked out. The gateway payload and the Order
row are both single-product shaped, so multi-line carts are reduced rather
than split.
"""

import uuid
from dataclasses import dataclass
from typing import Optional, Union

from libs.common.currency import MIN_PAYMENT_PAISE, as_rupees, rupees_to_paise
from libs.common.errors import NotFoundError, UpstreamError, ValidationError
from libs.common.logging import get_logger
from services.catalog_service.queries import get_active_product
from services.customers_service.models import Customer
from services.orders_service.cart import Cart
from services.orders_service.models import CURRENCY, SELF_CUSTOMER, Order, OrderStatus
from services.orders_service.razorpay_client import (
    LinkCustomer,
    RazorpayClient,
    RazorpayError,
)
from services.users_service.models import UserProfile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

# Razorpay rejects links without contact details; these stand in for blanks.
PLACEHOLDER_EMAIL = "no-email@devrang.in"
PLACEHOLDER_PHONE = "9999999999"
PLACEHOLDER_ADDRESS = "Address not provided"

CustomerRef = Union[str, uuid.UUID]


@dataclass
class CheckoutResult:
    order: Order
    payment_link_url: str


def build_contact(
    name: str,
    email: Optional[str],
    phone: Optional[str],
    address: Optional[str],
) -> dict:
    """Normalized contact snapshot with placeholders for missing fields."""
    return {
        "name": name,
        "email": email or PLACEHOLDER_EMAIL,
        "phone": phone or PLACEHOLDER_PHONE,
        "address": address or PLACEHOLDER_ADDRESS,
    }


async def _resolve_contact(
    db: AsyncSession, customer_ref: CustomerRef, booked_by: UserProfile
) -> dict:
    if customer_ref == SELF_CUSTOMER:
        return build_contact(
            booked_by.name or booked_by.email, booked_by.email, None, None
        )

    try:
        customer_id = (
            customer_ref
            if isinstance(customer_ref, uuid.UUID)
            else uuid.UUID(str(customer_ref))
        )
    except ValueError:
        raise ValidationError(detail="Invalid customer reference")

    result = await db.execute(select(Customer).where(Customer.id == customer_id))
    customer = result.scalar_one_or_none()
    if not customer:
        raise NotFoundError(detail="Customer not found")
    return build_contact(
        customer.name, customer.email, customer.phone, customer.shipping_address
    )


async def place_order(
    db: AsyncSession,
    cart: Cart,
    customer_ref: Optional[CustomerRef],
    booked_by: UserProfile,
    gateway: RazorpayClient,
) -> CheckoutResult:
    """
    Create the external payment link for the cart's first item and record it.

    Validation happens before any network call. The cart is cleared only once
    the gateway has accepted the order; on any failure it is left untouched
    and no Order row exists.
    """
    if cart.is_empty:
        raise ValidationError(detail="Cart is empty")
    if not customer_ref:
        raise ValidationError(detail="Select a customer or self-booking first")

    item = cart.first_item()
    if len(cart.items) > 1:
        logger.info(
            f"Cart has {len(cart.items)} lines; checking out the first only",
            extra={"extra_fields": {"booked_by": booked_by.email}},
        )

    product = await get_active_product(db, item.product_id)
    contact = await _resolve_contact(db, customer_ref, booked_by)
    amount = as_rupees(item.unit_price(product.price))
    amount_paise = rupees_to_paise(amount)
    if amount_paise < MIN_PAYMENT_PAISE:
        raise ValidationError(detail="Order amount must be at least ₹1")

    try:
        link = await gateway.create_payment_link(
            amount_paise=amount_paise,
            currency=CURRENCY,
            description=f"Booking: {product.name}",
            customer=LinkCustomer(
                name=contact["name"],
                email=contact["email"],
                contact=contact["phone"],
            ),
            notes={
                "product_id": str(product.id),
                "booked_by": booked_by.email,
                "customer_ref": str(customer_ref),
            },
        )
    except RazorpayError as exc:
        logger.error(
            f"Payment link creation failed: {exc.message}",
            extra={
                "extra_fields": {
                    "product_id": str(product.id),
                    "gateway_status": exc.status_code,
                }
            },
        )
        raise UpstreamError() from exc

    order = Order(
        order_id=link.id,
        payment_link_id=link.id,
        payment_link_url=link.short_url,
        product=product.snapshot(),
        customer=contact,
        customer_ref=str(customer_ref),
        booked_by=booked_by.email,
        amount=amount,
        currency=CURRENCY,
        status=OrderStatus.CREATED,
    )
    db.add(order)
    await db.commit()
    await db.refresh(order)

    cart.clear()

    logger.info(
        f"Order {order.order_id} created",
        extra={
            "extra_fields": {
                "order_id": order.order_id,
                "product_id": str(product.id),
                "amount": str(amount),
            }
        },
    )
    return CheckoutResult(order=order, payment_link_url=link.short_url)
