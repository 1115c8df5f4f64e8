"""Document-store implementation of IProjectRepository."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from agencyhub.domain.entities.project import Project
from agencyhub.domain.repositories.project_repository import IProjectRepository
from agencyhub.infrastructure.persistence.document_store import InMemoryDocumentStore
from agencyhub.infrastructure.persistence.error_handling import handle_storage_errors
from agencyhub.infrastructure.persistence.mappers.project_mapper import PROJECTS_COLLECTION, ProjectMapper


class DocumentProjectRepository(IProjectRepository):

    def __init__(self, store: InMemoryDocumentStore, timeout: Optional[float] = None):
        self._store = store
        self.timeout = timeout

    @handle_storage_errors(context={"repository": "project", "operation": "create"})
    async def create(self, project: Project) -> Project:
        project_id = await self._store.add(PROJECTS_COLLECTION, ProjectMapper.to_document(project))
        return replace(project, id=project_id)

    @handle_storage_errors(context={"repository": "project", "operation": "exists_for_tenant"})
    async def exists_for_tenant(self, tenant_id: str) -> bool:
        rows = await self._store.query(PROJECTS_COLLECTION, [("tenantId", "==", tenant_id)], limit=1)
        return bool(rows)


__all__ = ["DocumentProjectRepository"]
