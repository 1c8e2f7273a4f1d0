"""Users service routers package."""

from services.users_service.routers.admin import router as admin_router
from services.users_service.routers.auth import router as auth_router

__all__ = [
    "admin_router",
    "auth_router",
]
