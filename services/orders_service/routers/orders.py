"""Orders router: cart pricing, checkout and order history."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from libs.common.errors import NotFoundError
from libs.common.rate_limit import payment_limit
from libs.db.session import get_async_db
from services.catalog_service.queries import get_active_products
from services.orders_service.cart import Cart
from services.orders_service.models import Order, OrderStatus
from services.orders_service.razorpay_client import RazorpayClient, get_razorpay_client
from services.orders_service.schemas import (
    CartLine,
    CartSummaryResponse,
    CheckoutRequest,
    CheckoutResponse,
    OrderResponse,
)
from services.orders_service.services.checkout import place_order
from services.users_service.gate import require_approved
from services.users_service.models import UserProfile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/cart/summary", response_model=CartSummaryResponse)
async def summarize_cart(
    cart: Cart,
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
):
    """Price a cart against the catalog without side effects."""
    if cart.is_empty:
        return CartSummaryResponse(lines=[], total=0)

    products = await get_active_products(db, (item.product_id for item in cart.items))
    lines = []
    for item in cart.items:
        product = products[item.product_id]
        unit_price = item.unit_price(product.price)
        lines.append(
            CartLine(
                product_id=product.id,
                name=product.name,
                quantity=item.quantity,
                catalog_price=product.price,
                unit_price=unit_price,
                line_total=unit_price * item.quantity,
            )
        )

    prices = {product_id: product.price for product_id, product in products.items()}
    return CartSummaryResponse(lines=lines, total=cart.total(prices))


@router.post(
    "/checkout", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED
)
@payment_limit
async def checkout(
    request: Request,
    checkout_in: CheckoutRequest,
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
    gateway: RazorpayClient = Depends(get_razorpay_client),
):
    """
    Place a booking for the cart's first item and return its payment link.

    The returned cart is empty; on any error the client keeps its own cart.
    """
    cart = checkout_in.cart
    result = await place_order(
        db,
        cart=cart,
        customer_ref=checkout_in.customer,
        booked_by=profile,
        gateway=gateway,
    )
    return CheckoutResponse(
        order=OrderResponse.model_validate(result.order),
        payment_link=result.payment_link_url,
        cart=cart,
    )


@router.get("", response_model=List[OrderResponse])
async def list_my_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
):
    """List the caller's bookings, newest first."""
    query = select(Order).where(Order.booked_by == profile.email)
    if status_filter:
        query = query.where(Order.status == status_filter)
    result = await db.execute(query.order_by(Order.created_at.desc()))
    return result.scalars().all()


@router.get("/{order_id}", response_model=OrderResponse)
async def get_my_order(
    order_id: str,
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
):
    result = await db.execute(
        select(Order).where(
            Order.order_id == order_id, Order.booked_by == profile.email
        )
    )
    order = result.scalar_one_or_none()
    if not order:
        raise NotFoundError(detail="Order not found")
    return order
