"""Document-store implementation of ITenantRepository using TenantMapper."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, Optional

from agencyhub.domain.entities.tenant import Tenant, TenantStatus, utc_now
from agencyhub.domain.repositories.tenant_repository import ITenantRepository
from agencyhub.infrastructure.persistence.document_store import InMemoryDocumentStore
from agencyhub.infrastructure.persistence.error_handling import handle_storage_errors
from agencyhub.infrastructure.persistence.mappers.tenant_mapper import (
    TENANTS_COLLECTION,
    TenantMapper,
    usage_path,
)


class DocumentTenantRepository(ITenantRepository):
    """Tenant repository over the document store."""

    def __init__(self, store: InMemoryDocumentStore, timeout: Optional[float] = None):
        self._store = store
        self.timeout = timeout

    @handle_storage_errors(context={"repository": "tenant", "operation": "get_by_id"})
    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        data = await self._store.get(TENANTS_COLLECTION, tenant_id)
        if data is None:
            return None
        return TenantMapper.to_domain(tenant_id, data)

    @handle_storage_errors(context={"repository": "tenant", "operation": "create"})
    async def create(self, tenant: Tenant) -> Tenant:
        document = TenantMapper.to_document(tenant)
        if tenant.id:
            await self._store.create(TENANTS_COLLECTION, tenant.id, document)
            return tenant
        tenant_id = await self._store.add(TENANTS_COLLECTION, document)
        return replace(tenant, id=tenant_id)

    @handle_storage_errors(context={"repository": "tenant", "operation": "update_fields"})
    async def update_fields(self, tenant_id: str, updates: Dict[str, Any]) -> None:
        payload = dict(updates)
        payload.setdefault("updatedAt", utc_now().isoformat())
        await self._store.update(TENANTS_COLLECTION, tenant_id, payload)

    @handle_storage_errors(context={"repository": "tenant", "operation": "increment_usage"})
    async def increment_usage(self, tenant_id: str, resource: str, delta: int = 1) -> int:
        return await self._store.increment(TENANTS_COLLECTION, tenant_id, usage_path(resource), delta)

    @handle_storage_errors(context={"repository": "tenant", "operation": "count_sub_tenants"})
    async def count_sub_tenants(self, owner_tenant_id: str, statuses: Iterable[TenantStatus]) -> int:
        status_values = [getattr(status, "value", status) for status in statuses]
        return await self._store.count(
            TENANTS_COLLECTION,
            [("ownerTenantId", "==", owner_tenant_id), ("status", "in", status_values)],
        )


__all__ = ["DocumentTenantRepository"]
