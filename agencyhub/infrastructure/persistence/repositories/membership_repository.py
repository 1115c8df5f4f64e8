"""Document-store implementation of IMembershipRepository."""

from __future__ import annotations

from typing import List, Optional

from agencyhub.domain.entities.membership import Membership
from agencyhub.domain.repositories.membership_repository import IMembershipRepository
from agencyhub.infrastructure.persistence.document_store import InMemoryDocumentStore
from agencyhub.infrastructure.persistence.error_handling import handle_storage_errors
from agencyhub.infrastructure.persistence.mappers.membership_mapper import (
    MEMBERS_COLLECTION,
    MembershipMapper,
)


class DocumentMembershipRepository(IMembershipRepository):
    """Memberships are stored under ``<tenantId>_<userId>``."""

    def __init__(self, store: InMemoryDocumentStore, timeout: Optional[float] = None):
        self._store = store
        self.timeout = timeout

    @handle_storage_errors(context={"repository": "membership", "operation": "get"})
    async def get(self, user_id: str, tenant_id: str) -> Optional[Membership]:
        data = await self._store.get(MEMBERS_COLLECTION, f"{tenant_id}_{user_id}")
        return MembershipMapper.to_domain(data) if data else None

    @handle_storage_errors(context={"repository": "membership", "operation": "list_for_user"})
    async def list_for_user(self, user_id: str) -> List[Membership]:
        rows = await self._store.query(MEMBERS_COLLECTION, [("userId", "==", user_id)])
        return [MembershipMapper.to_domain(data) for _, data in rows]

    @handle_storage_errors(context={"repository": "membership", "operation": "has_members"})
    async def has_members(self, tenant_id: str) -> bool:
        rows = await self._store.query(MEMBERS_COLLECTION, [("tenantId", "==", tenant_id)], limit=1)
        return bool(rows)

    @handle_storage_errors(context={"repository": "membership", "operation": "save"})
    async def save(self, membership: Membership) -> Membership:
        await self._store.set(MEMBERS_COLLECTION, membership.id, MembershipMapper.to_document(membership))
        return membership


__all__ = ["DocumentMembershipRepository"]
