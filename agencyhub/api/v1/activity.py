"""Agency activity feed endpoint."""

from typing import Any, Dict

from fastapi import APIRouter, Query

from agencyhub.api.dependencies import ActivityServiceDep, ActorIdDep

router = APIRouter(prefix="/agencies", tags=["activity"])


@router.get("/{tenant_id}/activity")
async def list_activity(
    tenant_id: str,
    actor_id: ActorIdDep,
    service: ActivityServiceDep,
    limit: int = Query(100, ge=1, le=500),
) -> Dict[str, Any]:
    events = await service.get_feed(actor_id, tenant_id, limit)
    return {"agencyTenantId": tenant_id, "events": [event.to_dict() for event in events]}
