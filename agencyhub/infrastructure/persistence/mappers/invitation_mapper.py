"""Mapper between Invitation entities and invitation documents."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from agencyhub.domain.entities.invitation import Invitation, InvitationStatus
from agencyhub.domain.entities.membership import MemberRole

INVITES_COLLECTION = "tenantInvites"


class InvitationMapper:

    @staticmethod
    def to_domain(doc_id: str, data: Dict[str, Any]) -> Invitation:
        return Invitation(
            id=doc_id,
            tenant_id=data["tenantId"],
            email=data["email"],
            name=data.get("name", ""),
            role=MemberRole.from_external(data.get("role")),
            invited_by=data["invitedBy"],
            token=data["token"],
            expires_at=datetime.fromisoformat(data["expiresAt"]),
            status=InvitationStatus(data.get("status", InvitationStatus.PENDING.value)),
            created_at=datetime.fromisoformat(data["createdAt"]),
        )

    @staticmethod
    def to_document(invitation: Invitation) -> Dict[str, Any]:
        return {
            "tenantId": invitation.tenant_id,
            "email": invitation.email,
            "name": invitation.name,
            "role": invitation.role.value,
            "invitedBy": invitation.invited_by,
            "status": invitation.status.value,
            "token": invitation.token,
            "expiresAt": invitation.expires_at.isoformat(),
            "createdAt": invitation.created_at.isoformat(),
        }


__all__ = ["InvitationMapper", "INVITES_COLLECTION"]
