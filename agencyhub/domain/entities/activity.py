"""Append-only audit records scoped to an agency."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping
from uuid import uuid4

from agencyhub.domain.entities.tenant import utc_now


class ActivityType(str, Enum):
    CLIENT_CREATED = "client_created"
    ADDONS_UPDATED = "addons_updated"


@dataclass(frozen=True)
class ActivityEvent:
    """Immutable record of a state-changing action."""

    agency_tenant_id: str
    type: ActivityType
    subject_tenant_id: str
    actor_id: str
    payload: Mapping[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "agencyTenantId": self.agency_tenant_id,
            "type": self.type.value,
            "subjectTenantId": self.subject_tenant_id,
            "createdBy": self.actor_id,
            "metadata": dict(self.payload),
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ActivityEvent":
        return cls(
            id=data["id"],
            agency_tenant_id=data["agencyTenantId"],
            type=ActivityType(data["type"]),
            subject_tenant_id=data["subjectTenantId"],
            actor_id=data["createdBy"],
            payload=data.get("metadata", {}),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


__all__ = ["ActivityEvent", "ActivityType"]
