"""
Razorpay API client for payment links.

Creates one payment link per booking; payment state arrives later by webhook.
"""

from dataclasses import dataclass
from typing import Optional

import httpx
from libs.common.config import get_settings
from libs.common.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass
class LinkCustomer:
    """Contact details sent to Razorpay with a payment link."""

    name: str
    email: str
    contact: str


@dataclass
class PaymentLink:
    """A Razorpay-hosted payment page."""

    id: str
    short_url: str
    status: str  # created, paid, expired, cancelled
    amount: int  # in paise
    currency: str


class RazorpayError(Exception):
    """Base exception for Razorpay API errors."""

    def __init__(
        self, message: str, status_code: int = None, response_data: dict = None
    ):
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}
        super().__init__(message)


class RazorpayClient:
    """Async client for the Razorpay Payment Links API."""

    def __init__(
        self,
        key_id: str = None,
        key_secret: str = None,
        base_url: str = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.key_id = key_id or settings.RAZORPAY_KEY_ID
        self.key_secret = key_secret or settings.RAZORPAY_KEY_SECRET
        self.base_url = (base_url or settings.RAZORPAY_BASE_URL).rstrip("/")
        self._transport = transport

    async def _request(
        self,
        method: str,
        endpoint: str,
        json_data: dict = None,
    ) -> dict:
        """Make an async request to Razorpay API."""
        if not self.key_id or not self.key_secret:
            logger.error("Razorpay credentials are not configured")
            raise RazorpayError(message="Razorpay credentials are not configured")

        url = f"{self.base_url}{endpoint}"

        async with httpx.AsyncClient(
            timeout=DEFAULT_TIMEOUT,
            auth=(self.key_id, self.key_secret),
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method=method, url=url, json=json_data)
            except httpx.HTTPError as exc:
                logger.error(f"Razorpay request to {endpoint} failed: {exc}")
                raise RazorpayError(message=f"Razorpay unreachable: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.is_success:
            logger.error(f"Razorpay API error: {response.status_code} - {data}")
            error = data.get("error") or {}
            raise RazorpayError(
                message=error.get("description", "Unknown Razorpay error"),
                status_code=response.status_code,
                response_data=data,
            )

        return data

    @staticmethod
    def _to_payment_link(data: dict) -> PaymentLink:
        return PaymentLink(
            id=data.get("id", ""),
            short_url=data.get("short_url", ""),
            status=data.get("status", "created"),
            amount=data.get("amount", 0),
            currency=data.get("currency", "INR"),
        )

    async def create_payment_link(
        self,
        amount_paise: int,
        currency: str,
        description: str,
        customer: LinkCustomer,
        reference_id: str = None,
        notes: dict = None,
    ) -> PaymentLink:
        """
        Create a shareable payment link.

        Payment state arrives later via webhook
        (payment_link.paid / payment_link.expired / payment.captured).

        Args:
            amount_paise: Amount in paise (rupees * 100)
            currency: ISO currency code
            description: Shown on the hosted payment page
            customer: Contact details Razorpay notifies
            reference_id: Optional merchant reference, unique per link
            notes: Free-form key/value pairs echoed back in webhooks

        Returns:
            PaymentLink with id and short_url
        """
        payload = {
            "amount": amount_paise,
            "currency": currency,
            "accept_partial": False,
            "description": description,
            "customer": {
                "name": customer.name,
                "email": customer.email,
                "contact": customer.contact,
            },
            "notify": {"sms": True, "email": True},
            "reminder_enable": True,
            "notes": notes or {},
        }
        if reference_id:
            payload["reference_id"] = reference_id

        data = await self._request("POST", "/payment_links", json_data=payload)
        return self._to_payment_link(data)


def get_razorpay_client() -> RazorpayClient:
    """Get a RazorpayClient instance."""
    return RazorpayClient()
