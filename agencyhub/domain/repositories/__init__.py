"""Domain repository interfaces (ports)."""

from .activity_repository import IActivityRepository
from .invitation_repository import IInvitationRepository
from .membership_repository import IMembershipRepository
from .project_repository import IProjectRepository
from .tenant_repository import ITenantRepository

__all__ = [
    "IActivityRepository",
    "IInvitationRepository",
    "IMembershipRepository",
    "IProjectRepository",
    "ITenantRepository",
]
