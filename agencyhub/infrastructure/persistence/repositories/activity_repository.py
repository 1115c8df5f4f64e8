"""Append-only document-store implementation of IActivityRepository."""

from __future__ import annotations

from typing import List, Optional

from agencyhub.domain.entities.activity import ActivityEvent
from agencyhub.domain.repositories.activity_repository import IActivityRepository
from agencyhub.infrastructure.persistence.document_store import InMemoryDocumentStore
from agencyhub.infrastructure.persistence.error_handling import handle_storage_errors
from agencyhub.infrastructure.persistence.mappers import ACTIVITY_COLLECTION


class DocumentActivityRepository(IActivityRepository):

    def __init__(self, store: InMemoryDocumentStore, timeout: Optional[float] = None):
        self._store = store
        self.timeout = timeout

    @handle_storage_errors(context={"repository": "activity", "operation": "append"})
    async def append(self, event: ActivityEvent) -> ActivityEvent:
        await self._store.create(ACTIVITY_COLLECTION, event.id, event.to_dict())
        return event

    @handle_storage_errors(context={"repository": "activity", "operation": "list_for_agency"})
    async def list_for_agency(self, agency_tenant_id: str, limit: int = 100) -> List[ActivityEvent]:
        rows = await self._store.query(
            ACTIVITY_COLLECTION,
            [("agencyTenantId", "==", agency_tenant_id)],
            limit=limit,
        )
        return [ActivityEvent.from_dict(data) for _, data in rows]


__all__ = ["DocumentActivityRepository"]
