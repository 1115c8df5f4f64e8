"""Dependency container for the provisioning workflow."""

from dataclasses import dataclass

from agencyhub.application.activity_recorder import ActivityRecorder
from agencyhub.domain.interfaces import INotificationService
from agencyhub.domain.policies import ProvisioningDefaults
from agencyhub.domain.repositories.invitation_repository import IInvitationRepository
from agencyhub.domain.repositories.membership_repository import IMembershipRepository
from agencyhub.domain.repositories.project_repository import IProjectRepository
from agencyhub.domain.repositories.tenant_repository import ITenantRepository
from agencyhub.domain.services.access_verifier import AccessVerifier
from agencyhub.domain.services.quota_guard import QuotaGuard


@dataclass
class ProvisioningDependencies:
    """Container for provisioning workflow dependencies."""

    tenant_repository: ITenantRepository
    project_repository: IProjectRepository
    invitation_repository: IInvitationRepository
    membership_repository: IMembershipRepository
    notification_service: INotificationService
    access_verifier: AccessVerifier
    quota_guard: QuotaGuard
    activity_recorder: ActivityRecorder
    defaults: ProvisioningDefaults


__all__ = ["ProvisioningDependencies"]
