"""Add-on billing endpoints."""

from typing import Any, Dict

from fastapi import APIRouter

from agencyhub.api.dependencies import ActorIdDep, BillingServiceDep
from agencyhub.api.schemas import AddonSelectionRequest

router = APIRouter(prefix="/billing", tags=["billing"])


@router.get("/{tenant_id}/addons/pricing")
async def get_addon_pricing(tenant_id: str, actor_id: ActorIdDep, service: BillingServiceDep) -> Dict[str, Any]:
    return await service.get_pricing(actor_id, tenant_id)


@router.post("/addons/calculate")
async def calculate_addon_price(
    request: AddonSelectionRequest,
    actor_id: ActorIdDep,
    service: BillingServiceDep,
) -> Dict[str, Any]:
    """Price a selection without saving it."""
    return service.calculate_price(actor_id, request.addons)


@router.get("/{tenant_id}/addons/eligibility")
async def check_addon_eligibility(tenant_id: str, actor_id: ActorIdDep, service: BillingServiceDep) -> Dict[str, Any]:
    return await service.check_eligibility(actor_id, tenant_id)


@router.put("/{tenant_id}/addons")
async def apply_addons(
    tenant_id: str,
    request: AddonSelectionRequest,
    actor_id: ActorIdDep,
    service: BillingServiceDep,
) -> Dict[str, Any]:
    """Replace the tenant's add-ons and prorate the subscription."""
    return await service.apply_addons(actor_id, tenant_id, request.addons)
