"""Orders service routers package."""

from services.orders_service.routers.orders import router as orders_router
from services.orders_service.routers.webhooks import router as webhooks_router

__all__ = [
    "orders_router",
    "webhooks_router",
]
