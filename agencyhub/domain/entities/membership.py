"""Tenant membership records and the closed role enumeration."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from agencyhub.domain.entities.tenant import utc_now


class MemberRole(str, Enum):
    """Roles a user can hold within a tenant."""

    OWNER = "owner"
    AGENCY_OWNER = "agency_owner"
    AGENCY_ADMIN = "agency_admin"
    AGENCY_MEMBER = "agency_member"
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    CLIENT = "client"
    CLIENT_ADMIN = "client_admin"
    CLIENT_USER = "client_user"
    UNKNOWN = "unknown"

    @classmethod
    def from_external(cls, raw: Optional[str]) -> "MemberRole":
        """Normalize a role string coming from storage or an identity claim.

        Matching is case-insensitive; ``superadmin`` is an accepted alias.
        """
        if not raw:
            return cls.UNKNOWN
        normalized = raw.strip().lower()
        if normalized == "superadmin":
            return cls.SUPER_ADMIN
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class Membership:
    """Grants a user a role inside a tenant."""

    user_id: str
    tenant_id: str
    role: MemberRole
    created_at: datetime = field(default_factory=utc_now)
    # Role exactly as stored; None when the record was built in code.
    raw_role: Optional[str] = None

    @property
    def stored_role(self) -> str:
        return self.raw_role if self.raw_role is not None else self.role.value

    @property
    def id(self) -> str:
        return f"{self.tenant_id}_{self.user_id}"


__all__ = ["MemberRole", "Membership"]
