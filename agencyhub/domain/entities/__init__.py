"""Domain entities."""

from agencyhub.domain.entities.activity import ActivityEvent, ActivityType
from agencyhub.domain.entities.addon import AddonKey, parse_addon_selection
from agencyhub.domain.entities.invitation import Invitation, InvitationStatus
from agencyhub.domain.entities.membership import MemberRole, Membership
from agencyhub.domain.entities.project import Project, default_components
from agencyhub.domain.entities.tenant import (
    ContactInfo,
    SubscriptionPlan,
    Tenant,
    TenantBilling,
    TenantBranding,
    TenantKind,
    TenantLimits,
    TenantSettings,
    TenantStatus,
    TenantUsage,
    utc_now,
)

__all__ = [
    "ActivityEvent",
    "ActivityType",
    "AddonKey",
    "parse_addon_selection",
    "Invitation",
    "InvitationStatus",
    "MemberRole",
    "Membership",
    "Project",
    "default_components",
    "ContactInfo",
    "SubscriptionPlan",
    "Tenant",
    "TenantBilling",
    "TenantBranding",
    "TenantKind",
    "TenantLimits",
    "TenantSettings",
    "TenantStatus",
    "TenantUsage",
    "utc_now",
]
