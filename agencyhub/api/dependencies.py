"""
API-specific dependencies for application services with dependency injection.

The acting identity arrives in the ``X-Actor-Id`` header, set by the
upstream identity provider. A missing header is passed through as ``None``
and rejected by the services as unauthenticated.
"""

from typing import Annotated, Optional

import structlog
from fastapi import Depends, Header

from agencyhub.application.activity_recorder import ActivityRecorder
from agencyhub.application.billing_reconciler import BillingReconciler
from agencyhub.application.provisioning_workflow import ProvisioningWorkflow
from agencyhub.infrastructure.factories.service_factory import (
    get_activity_recorder,
    get_billing_reconciler,
    get_provisioning_workflow,
)

logger = structlog.get_logger(__name__)


async def get_actor_id(x_actor_id: Annotated[Optional[str], Header()] = None) -> Optional[str]:
    actor_id = (x_actor_id or "").strip()
    return actor_id or None


async def get_provisioning_service() -> ProvisioningWorkflow:
    """Create ProvisioningWorkflow with injected dependencies."""
    return await get_provisioning_workflow()


async def get_billing_service() -> BillingReconciler:
    """Create BillingReconciler with injected dependencies."""
    return await get_billing_reconciler()


async def get_activity_service() -> ActivityRecorder:
    return await get_activity_recorder()


# Type aliases for dependency injection
ActorIdDep = Annotated[Optional[str], Depends(get_actor_id)]
ProvisioningServiceDep = Annotated[ProvisioningWorkflow, Depends(get_provisioning_service)]
BillingServiceDep = Annotated[BillingReconciler, Depends(get_billing_service)]
ActivityServiceDep = Annotated[ActivityRecorder, Depends(get_activity_service)]


__all__ = [
    "get_actor_id",
    "get_provisioning_service",
    "get_billing_service",
    "get_activity_service",
    "ActorIdDep",
    "ProvisioningServiceDep",
    "BillingServiceDep",
    "ActivityServiceDep",
]
