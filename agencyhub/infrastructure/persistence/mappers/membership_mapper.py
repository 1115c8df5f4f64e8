"""Mapper between Membership entities and tenant member documents."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from agencyhub.domain.entities.membership import MemberRole, Membership
from agencyhub.domain.entities.tenant import utc_now

MEMBERS_COLLECTION = "tenantMembers"


class MembershipMapper:
    """Role strings are normalized here, at the storage boundary.

    The stored string is kept alongside the enum for rules that match it
    exactly.
    """

    @staticmethod
    def to_domain(data: Dict[str, Any]) -> Membership:
        created_at = data.get("createdAt")
        return Membership(
            user_id=data["userId"],
            tenant_id=data["tenantId"],
            role=MemberRole.from_external(data.get("role")),
            raw_role=data.get("role"),
            created_at=datetime.fromisoformat(created_at) if created_at else utc_now(),
        )

    @staticmethod
    def to_document(membership: Membership) -> Dict[str, Any]:
        return {
            "userId": membership.user_id,
            "tenantId": membership.tenant_id,
            "role": membership.stored_role,
            "createdAt": membership.created_at.isoformat(),
        }


__all__ = ["MembershipMapper", "MEMBERS_COLLECTION"]
