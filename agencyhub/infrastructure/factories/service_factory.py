"""Concrete factories wiring application services from providers."""

from __future__ import annotations

from agencyhub.application.activity_recorder import ActivityRecorder
from agencyhub.application.billing_reconciler import BillingReconciler
from agencyhub.application.dependencies import (
    ActivityDependencies,
    BillingDependencies,
    ProvisioningDependencies,
)
from agencyhub.application.provisioning_workflow import ProvisioningWorkflow
from agencyhub.domain.services.access_verifier import AccessVerifier
from agencyhub.domain.services.addon_pricer import AddonPricer
from agencyhub.domain.services.quota_guard import QuotaGuard
from agencyhub.infrastructure.providers.notification_provider import get_notification_service
from agencyhub.infrastructure.providers.payment_provider import get_subscription_gateway
from agencyhub.infrastructure.providers.policy_provider import get_policies
from agencyhub.infrastructure.providers.repository_provider import (
    get_activity_repository,
    get_invitation_repository,
    get_membership_repository,
    get_project_repository,
    get_tenant_repository,
)


async def get_access_verifier() -> AccessVerifier:
    policies = await get_policies()
    return AccessVerifier(
        tenant_repository=await get_tenant_repository(),
        membership_repository=await get_membership_repository(),
        roles=policies.roles,
        provisioning_plans=policies.provisioning.provisioning_plans,
    )


async def get_activity_recorder() -> ActivityRecorder:
    return ActivityRecorder(ActivityDependencies(
        activity_repository=await get_activity_repository(),
        access_verifier=await get_access_verifier(),
    ))


async def get_billing_reconciler() -> BillingReconciler:
    """
    Construct the billing reconciler.

    Repositories and the gateway come from their providers, so every
    request shares the same singleton instances.
    """
    policies = await get_policies()
    return BillingReconciler(BillingDependencies(
        tenant_repository=await get_tenant_repository(),
        subscription_gateway=await get_subscription_gateway(),
        access_verifier=await get_access_verifier(),
        pricer=AddonPricer(policies.catalog),
        catalog=policies.catalog,
        activity_recorder=await get_activity_recorder(),
    ))


async def get_provisioning_workflow() -> ProvisioningWorkflow:
    policies = await get_policies()
    tenant_repository = await get_tenant_repository()
    return ProvisioningWorkflow(ProvisioningDependencies(
        tenant_repository=tenant_repository,
        project_repository=await get_project_repository(),
        invitation_repository=await get_invitation_repository(),
        membership_repository=await get_membership_repository(),
        notification_service=await get_notification_service(),
        access_verifier=await get_access_verifier(),
        quota_guard=QuotaGuard(tenant_repository, policies.quota),
        activity_recorder=await get_activity_recorder(),
        defaults=policies.provisioning,
    ))


__all__ = [
    "get_access_verifier",
    "get_activity_recorder",
    "get_billing_reconciler",
    "get_provisioning_workflow",
]
