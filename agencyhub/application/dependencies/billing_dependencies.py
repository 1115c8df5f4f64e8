"""Dependency container for the billing reconciler."""

from dataclasses import dataclass

from agencyhub.application.activity_recorder import ActivityRecorder
from agencyhub.domain.interfaces import ISubscriptionGateway
from agencyhub.domain.policies import AddonCatalog
from agencyhub.domain.repositories.tenant_repository import ITenantRepository
from agencyhub.domain.services.access_verifier import AccessVerifier
from agencyhub.domain.services.addon_pricer import AddonPricer


@dataclass
class BillingDependencies:
    """Container for billing reconciler dependencies."""

    tenant_repository: ITenantRepository
    subscription_gateway: ISubscriptionGateway
    access_verifier: AccessVerifier
    pricer: AddonPricer
    catalog: AddonCatalog
    activity_recorder: ActivityRecorder


__all__ = ["BillingDependencies"]
