"""
Client provisioning endpoints.

- Agency owners create sub-clients
- Agency admins follow each client's onboarding progress
"""

from typing import Any, Dict

import structlog
from fastapi import APIRouter, status

from agencyhub.api.dependencies import ActorIdDep, ProvisioningServiceDep
from agencyhub.api.schemas import ClientIntakeRequest

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def provision_client(
    request: ClientIntakeRequest,
    actor_id: ActorIdDep,
    service: ProvisioningServiceDep,
) -> Dict[str, Any]:
    """Provision a sub-client under the caller's agency."""
    return await service.provision_client(actor_id, request.to_intake())


@router.get("/{client_tenant_id}/onboarding")
async def get_onboarding_status(
    client_tenant_id: str,
    actor_id: ActorIdDep,
    service: ProvisioningServiceDep,
) -> Dict[str, Any]:
    return await service.get_onboarding_status(actor_id, client_tenant_id)
