"""Document-store implementation of IInvitationRepository."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from agencyhub.domain.entities.invitation import Invitation, InvitationStatus
from agencyhub.domain.repositories.invitation_repository import IInvitationRepository
from agencyhub.infrastructure.persistence.document_store import (
    DocumentExistsError,
    InMemoryDocumentStore,
)
from agencyhub.infrastructure.persistence.error_handling import handle_storage_errors
from agencyhub.infrastructure.persistence.mappers.invitation_mapper import (
    INVITES_COLLECTION,
    InvitationMapper,
)


class DocumentInvitationRepository(IInvitationRepository):

    def __init__(self, store: InMemoryDocumentStore, timeout: Optional[float] = None):
        self._store = store
        self.timeout = timeout

    @handle_storage_errors(context={"repository": "invitation", "operation": "create"})
    async def create(self, invitation: Invitation) -> Invitation:
        existing = await self._store.query(INVITES_COLLECTION, [("token", "==", invitation.token)], limit=1)
        if existing:
            raise DocumentExistsError(
                "Invitation token already in use",
                context={"collection": INVITES_COLLECTION},
            )
        document = InvitationMapper.to_document(invitation)
        if invitation.id:
            await self._store.create(INVITES_COLLECTION, invitation.id, document)
            return invitation
        invitation_id = await self._store.add(INVITES_COLLECTION, document)
        return replace(invitation, id=invitation_id)

    @handle_storage_errors(context={"repository": "invitation", "operation": "get_by_token"})
    async def get_by_token(self, token: str) -> Optional[Invitation]:
        rows = await self._store.query(INVITES_COLLECTION, [("token", "==", token)], limit=1)
        if not rows:
            return None
        doc_id, data = rows[0]
        return InvitationMapper.to_domain(doc_id, data)

    @handle_storage_errors(context={"repository": "invitation", "operation": "list_for_tenant"})
    async def list_for_tenant(self, tenant_id: str) -> List[Invitation]:
        rows = await self._store.query(INVITES_COLLECTION, [("tenantId", "==", tenant_id)])
        return [InvitationMapper.to_domain(doc_id, data) for doc_id, data in rows]

    @handle_storage_errors(context={"repository": "invitation", "operation": "update_status"})
    async def update_status(self, invitation_id: str, status: InvitationStatus) -> None:
        await self._store.update(INVITES_COLLECTION, invitation_id, {"status": status.value})


__all__ = ["DocumentInvitationRepository"]
