"""Document-store repository adapters."""

from .activity_repository import DocumentActivityRepository
from .invitation_repository import DocumentInvitationRepository
from .membership_repository import DocumentMembershipRepository
from .project_repository import DocumentProjectRepository
from .tenant_repository import DocumentTenantRepository

__all__ = [
    "DocumentActivityRepository",
    "DocumentInvitationRepository",
    "DocumentMembershipRepository",
    "DocumentProjectRepository",
    "DocumentTenantRepository",
]
