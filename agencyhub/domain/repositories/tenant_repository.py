"""Domain repository interface for Tenant aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

from agencyhub.domain.entities.tenant import Tenant, TenantStatus


class ITenantRepository(ABC):
    """Repository interface for Tenant aggregate."""

    @abstractmethod
    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        """Get a tenant by ID."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """Persist a new tenant and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    async def update_fields(self, tenant_id: str, updates: Dict[str, Any]) -> None:
        """Atomically apply dotted-path field updates to one tenant document."""
        raise NotImplementedError

    @abstractmethod
    async def increment_usage(self, tenant_id: str, resource: str, delta: int = 1) -> int:
        """Atomically add ``delta`` to a usage counter and return the new value."""
        raise NotImplementedError

    @abstractmethod
    async def count_sub_tenants(self, owner_tenant_id: str, statuses: Iterable[TenantStatus]) -> int:
        """Count sub-tenants owned by an agency whose status is in ``statuses``."""
        raise NotImplementedError


__all__ = ["ITenantRepository"]
