"""Domain repository interface for the agency activity feed."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from agencyhub.domain.entities.activity import ActivityEvent


class IActivityRepository(ABC):
    """Append-only store; no update or delete is offered."""

    @abstractmethod
    async def append(self, event: ActivityEvent) -> ActivityEvent:
        raise NotImplementedError

    @abstractmethod
    async def list_for_agency(self, agency_tenant_id: str, limit: int = 100) -> List[ActivityEvent]:
        """Most recent ``limit`` events in insertion order."""
        raise NotImplementedError


__all__ = ["IActivityRepository"]
