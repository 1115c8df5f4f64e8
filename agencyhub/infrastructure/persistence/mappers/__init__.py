"""Mappers between domain entities and store documents."""

from .invitation_mapper import INVITES_COLLECTION, InvitationMapper
from .membership_mapper import MEMBERS_COLLECTION, MembershipMapper
from .project_mapper import PROJECTS_COLLECTION, ProjectMapper
from .tenant_mapper import TENANTS_COLLECTION, TenantMapper, usage_path

ACTIVITY_COLLECTION = "agencyActivity"
MAIL_COLLECTION = "mail"

__all__ = [
    "ACTIVITY_COLLECTION",
    "MAIL_COLLECTION",
    "INVITES_COLLECTION",
    "MEMBERS_COLLECTION",
    "PROJECTS_COLLECTION",
    "TENANTS_COLLECTION",
    "InvitationMapper",
    "MembershipMapper",
    "ProjectMapper",
    "TenantMapper",
    "usage_path",
]
