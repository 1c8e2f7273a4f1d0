"""Currency helpers for INR amounts.

API / storage unit: rupees as ``Decimal`` with two places (``Numeric(12, 2)``).
Gateway unit: paise (int, 100 paise = ₹1), which is what Razorpay expects.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

PAISE_PER_RUPEE: int = 100
RUPEE_QUANTUM = Decimal("0.01")

# Razorpay refuses payment links below ₹1
MIN_PAYMENT_PAISE: int = 100


def as_rupees(value: Decimal | int | float | str) -> Decimal:
    """Coerce to a two-place rupee Decimal (round half-up)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(RUPEE_QUANTUM, rounding=ROUND_HALF_UP)


def rupees_to_paise(rupees: Decimal | int | float | str) -> int:
    """Convert rupees to paise. ₹1 = 100 paise."""
    return int(as_rupees(rupees) * PAISE_PER_RUPEE)


def paise_to_rupees(paise: int) -> Decimal:
    """Convert paise to rupees. 100 paise = ₹1."""
    return as_rupees(Decimal(paise) / PAISE_PER_RUPEE)
