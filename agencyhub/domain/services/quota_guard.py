"""Admission checks for sub-tenant creation."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from agencyhub.domain.entities.addon import AddonKey
from agencyhub.domain.entities.tenant import Tenant
from agencyhub.domain.exceptions import TenantNotFoundError
from agencyhub.domain.policies import QuotaPolicy
from agencyhub.domain.repositories.tenant_repository import ITenantRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class QuotaDecision:
    """Outcome of one admission check."""

    can_create: bool
    current: int
    limit: int

    def to_dict(self) -> dict:
        return {"canCreate": self.can_create, "current": self.current, "limit": self.limit}


class QuotaGuard:
    """Compares counted sub-tenants with the plan ceiling plus purchased add-ons."""

    def __init__(self, tenant_repository: ITenantRepository, policy: QuotaPolicy) -> None:
        self._tenants = tenant_repository
        self._policy = policy

    @property
    def counted_statuses(self):
        return self._policy.counted_statuses

    def sub_tenant_limit(self, agency: Tenant) -> int:
        # extraSubClients extends the ceiling 1:1, with no block multiplier.
        base = self._policy.base_limit_for(agency.subscription_plan)
        return base + agency.billing.addon_quantity(AddonKey.EXTRA_SUB_CLIENTS)

    async def check_sub_tenant_limit(self, agency_tenant_id: str) -> QuotaDecision:
        agency = await self._tenants.get_by_id(agency_tenant_id)
        if agency is None:
            raise TenantNotFoundError(agency_tenant_id)
        return await self.check_for(agency)

    async def check_for(self, agency: Tenant) -> QuotaDecision:
        """Decide for an already loaded agency tenant."""
        limit = self.sub_tenant_limit(agency)
        current = await self._tenants.count_sub_tenants(agency.id, self._policy.counted_statuses)
        decision = QuotaDecision(can_create=current < limit, current=current, limit=limit)

        if not decision.can_create:
            logger.warning(
                "Sub-tenant quota reached",
                agency_tenant_id=agency.id,
                current=current,
                limit=limit,
            )
        return decision


__all__ = ["QuotaDecision", "QuotaGuard"]
