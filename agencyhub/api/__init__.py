"""HTTP surface."""

from fastapi import APIRouter

from agencyhub.api.v1 import activity_router, billing_router, clients_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(clients_router)
api_router.include_router(billing_router)
api_router.include_router(activity_router)

__all__ = ["api_router"]
