"""Domain repository interface for tenant memberships."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from agencyhub.domain.entities.membership import Membership


class IMembershipRepository(ABC):
    """Repository interface for Membership records.

    Roles are normalized to ``MemberRole`` when records are loaded, so
    callers compare enum members, never raw strings.
    """

    @abstractmethod
    async def get(self, user_id: str, tenant_id: str) -> Optional[Membership]:
        """Membership of ``user_id`` in ``tenant_id``, if any."""
        raise NotImplementedError

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[Membership]:
        """Every membership held by the user, oldest first."""
        raise NotImplementedError

    @abstractmethod
    async def has_members(self, tenant_id: str) -> bool:
        """Whether any user has joined the tenant."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, membership: Membership) -> Membership:
        raise NotImplementedError


__all__ = ["IMembershipRepository"]
