"""Pending membership grants created while provisioning."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from agencyhub.domain.entities.membership import MemberRole
from agencyhub.domain.entities.tenant import utc_now


class InvitationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"


@dataclass
class Invitation:
    """Single-use invitation for a user to join a tenant."""

    id: str
    tenant_id: str
    email: str
    name: str
    role: MemberRole
    invited_by: str
    token: str
    expires_at: datetime
    status: InvitationStatus = InvitationStatus.PENDING
    created_at: datetime = field(default_factory=utc_now)

    @classmethod
    def issue(
        cls,
        invitation_id: str,
        tenant_id: str,
        email: str,
        name: str,
        role: MemberRole,
        invited_by: str,
        token: str,
        ttl: timedelta,
        now: Optional[datetime] = None,
    ) -> "Invitation":
        created_at = now or utc_now()
        return cls(
            id=invitation_id,
            tenant_id=tenant_id,
            email=email,
            name=name,
            role=role,
            invited_by=invited_by,
            token=token,
            expires_at=created_at + ttl,
            created_at=created_at,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utc_now()) >= self.expires_at

    def is_pending(self, now: Optional[datetime] = None) -> bool:
        return self.status == InvitationStatus.PENDING and not self.is_expired(now)


__all__ = ["Invitation", "InvitationStatus"]
