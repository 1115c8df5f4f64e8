"""Domain repository interface for projects."""

from __future__ import annotations

from abc import ABC, abstractmethod

from agencyhub.domain.entities.project import Project


class IProjectRepository(ABC):
    """Repository interface for Project records."""

    @abstractmethod
    async def create(self, project: Project) -> Project:
        """Persist a project and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    async def exists_for_tenant(self, tenant_id: str) -> bool:
        raise NotImplementedError


__all__ = ["IProjectRepository"]
