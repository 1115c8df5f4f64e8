"""Domain repository interface for invitations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from agencyhub.domain.entities.invitation import Invitation, InvitationStatus


class IInvitationRepository(ABC):
    """Repository interface for Invitation records."""

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Persist a new invitation; tokens must be unique."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Invitation]:
        raise NotImplementedError

    @abstractmethod
    async def update_status(self, invitation_id: str, status: InvitationStatus) -> None:
        raise NotImplementedError

    @abstractmethod
    async def list_for_tenant(self, tenant_id: str) -> List[Invitation]:
        raise NotImplementedError


__all__ = ["IInvitationRepository"]
