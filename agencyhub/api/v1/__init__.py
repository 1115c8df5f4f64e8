"""API v1 routes."""

from .activity import router as activity_router
from .billing import router as billing_router
from .clients import router as clients_router

__all__ = [
    "activity_router",
    "billing_router",
    "clients_router",
]
