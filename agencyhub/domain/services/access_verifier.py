"""
Domain service deciding whether an actor may act on behalf of a tenant.

Two rule sets exist. The broad one guards billing administration and
read-only agency views; the narrow one guards client provisioning and
only accepts an ``agency_owner`` membership, with no fallback to the
tenant ownership fields.
"""

from __future__ import annotations

from typing import FrozenSet, Optional

import structlog

from agencyhub.domain.entities.membership import Membership
from agencyhub.domain.entities.tenant import SubscriptionPlan, Tenant
from agencyhub.domain.exceptions import (
    PermissionDeniedError,
    TenantNotFoundError,
    UnauthenticatedError,
)
from agencyhub.domain.policies import RolePolicy
from agencyhub.domain.repositories.membership_repository import IMembershipRepository
from agencyhub.domain.repositories.tenant_repository import ITenantRepository

logger = structlog.get_logger(__name__)


class AccessVerifier:
    """Resolves actor privileges over tenants."""

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        membership_repository: IMembershipRepository,
        roles: RolePolicy,
        provisioning_plans: FrozenSet[SubscriptionPlan],
    ) -> None:
        self._tenants = tenant_repository
        self._memberships = membership_repository
        self._roles = roles
        self._provisioning_plans = provisioning_plans

    async def verify_billing_access(self, actor_id: Optional[str], tenant_id: str) -> Tenant:
        """
        Apply the broad rule set and return the target tenant.

        Rules, first match wins: no actor is unauthenticated; the tenant's
        ``owner_id`` or ``created_by`` is allowed; a membership whose role is
        in the billing-admin set is allowed; everything else is denied.

        Raises:
            UnauthenticatedError: No actor identity
            TenantNotFoundError: Target tenant does not exist
            PermissionDeniedError: Actor lacks ownership and a privileged role
        """
        if not actor_id:
            raise UnauthenticatedError()

        tenant = await self._tenants.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)

        if tenant.is_directly_owned_by(actor_id):
            return tenant

        membership = await self._memberships.get(actor_id, tenant_id)
        if membership is not None and self._roles.can_administer_billing(membership.role):
            return tenant

        logger.warning(
            "Billing access denied",
            actor_id=actor_id,
            tenant_id=tenant_id,
            role=membership.role.value if membership else None,
        )
        raise PermissionDeniedError("Not authorized to manage billing for this tenant")

    async def resolve_provisioning_agency(self, actor_id: Optional[str]) -> Tenant:
        """
        Apply the narrow provisioning rule and return the actor's agency.

        The actor must hold a provisioning-role membership; the tenant it
        points to must be on a plan allowed to provision sub-clients.
        """
        if not actor_id:
            raise UnauthenticatedError()

        membership = await self._find_provisioning_membership(actor_id)
        if membership is None:
            logger.warning("Provisioning denied: no agency owner membership", actor_id=actor_id)
            raise PermissionDeniedError("Only agency owners can create clients")

        agency = await self._tenants.get_by_id(membership.tenant_id)
        if agency is None:
            raise TenantNotFoundError(membership.tenant_id)

        if SubscriptionPlan.parse(agency.subscription_plan) not in self._provisioning_plans:
            logger.warning(
                "Provisioning denied: plan cannot provision",
                actor_id=actor_id,
                agency_tenant_id=agency.id,
                plan=agency.plan_name,
            )
            raise PermissionDeniedError("Only agency plans can provision sub-clients")

        return agency

    async def _find_provisioning_membership(self, actor_id: str) -> Optional[Membership]:
        for membership in await self._memberships.list_for_user(actor_id):
            if self._roles.can_provision(membership.stored_role):
                return membership
        return None


__all__ = ["AccessVerifier"]
