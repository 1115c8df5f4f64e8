"""
Provisioning workflow for agency sub-clients.

States run in a fixed order: authorize, quota check, tenant creation, then
the best-effort extensions (project seeding, invitations, billing flag,
agency usage counter, activity). Anything failing before the tenant exists
aborts with no side effects. After that, each step reports a tagged
``StepResult`` and the workflow keeps going; the tenant is never rolled back.

The quota check and the tenant creation are separate storage operations.
Two concurrent calls for the same agency can both be admitted, so the
count is re-read after creation and any overshoot is logged.
"""

from __future__ import annotations

import asyncio
import hashlib
import secrets
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

from agencyhub.application.errors import collaborator_failures
from agencyhub.application.intake import ClientIntake, InitialUser
from agencyhub.domain.entities.activity import ActivityEvent, ActivityType
from agencyhub.domain.entities.invitation import Invitation, InvitationStatus
from agencyhub.domain.entities.project import Project, default_components
from agencyhub.domain.entities.tenant import (
    ContactInfo,
    Tenant,
    TenantBranding,
    TenantKind,
    TenantSettings,
    TenantStatus,
    TenantUsage,
    utc_now,
)
from agencyhub.domain.exceptions import (
    CollaboratorError,
    ResourceExhaustedError,
    TenantNotFoundError,
    UnauthenticatedError,
)
from agencyhub.domain.value_objects import slugify
from agencyhub.domain.workflow import StepResult, StepStatus

if TYPE_CHECKING:
    from agencyhub.application.dependencies.provisioning_dependencies import ProvisioningDependencies


logger = structlog.get_logger(__name__)

AGENCY_NAME_FALLBACK = "tu agencia"
ONBOARDING_CHECKS = ("tenantCreated", "hasProject", "hasUsers", "billingSetup", "brandingConfigured")


class ProvisioningWorkflow:
    """Creates sub-client tenants on behalf of agency owners."""

    def __init__(self, dependencies: ProvisioningDependencies) -> None:
        self._deps = dependencies

    async def provision_client(self, actor_id: Optional[str], intake: ClientIntake) -> Dict[str, Any]:
        """
        Run the provisioning workflow for one sub-client.

        Returns:
            ``clientTenantId``, ``projectId`` (or None), ``invitesSent``,
            ``errors``, ``steps`` and a confirmation ``message``.

        Raises:
            UnauthenticatedError: No actor identity
            ValidationError: Intake is incomplete
            PermissionDeniedError: Actor is not an agency owner on an agency plan
            ResourceExhaustedError: Sub-client quota reached
            InternalError: Storage failure before the tenant was created
        """
        if not actor_id:
            raise UnauthenticatedError()

        slug = intake.validate()

        with collaborator_failures("provision client", actor_id=actor_id):
            agency = await self._deps.access_verifier.resolve_provisioning_agency(actor_id)
            decision = await self._deps.quota_guard.check_for(agency)
            if not decision.can_create:
                raise ResourceExhaustedError(
                    f"Sub-client limit reached ({decision.current}/{decision.limit}). "
                    "Upgrade your plan or add more slots.",
                    current=decision.current,
                    limit=decision.limit,
                )
            client = await self._deps.tenant_repository.create(
                self._build_client_tenant(actor_id, agency, intake, slug)
            )

        logger.info(
            "Sub-client tenant created",
            client_tenant_id=client.id,
            agency_tenant_id=agency.id,
            actor_id=actor_id,
            slug=slug,
        )

        steps: List[StepResult] = [StepResult.completed("tenant_created", client.id)]

        project_step = await self._seed_project(client, intake)
        steps.append(project_step)

        invite_results = await self._send_invitations(actor_id, agency, client, intake.initial_users)
        invites_sent = sum(1 for result in invite_results if result.ok)
        steps.extend(invite_results)

        steps.append(await self._flag_billing(client, intake))
        steps.append(await self._bump_agency_usage(agency.id))
        steps.append(await self._record_creation(actor_id, agency, client, intake, project_step, invites_sent))

        await self._detect_overshoot(agency.id, decision.limit)

        errors = [result.error for result in steps if result.status == StepStatus.FAILED_CONTINUE and result.error]
        return {
            "clientTenantId": client.id,
            "projectId": project_step.value,
            "invitesSent": invites_sent,
            "errors": errors,
            "steps": [result.to_dict() for result in steps],
            "message": f"Client {client.name} created successfully. {invites_sent} invitation(s) sent.",
        }

    async def get_onboarding_status(self, actor_id: Optional[str], client_tenant_id: str) -> Dict[str, Any]:
        """Progress of a sub-client through onboarding, for its agency's admins."""
        if not actor_id:
            raise UnauthenticatedError()

        with collaborator_failures("load onboarding status", client_tenant_id=client_tenant_id):
            client = await self._deps.tenant_repository.get_by_id(client_tenant_id)
            if client is None:
                raise TenantNotFoundError(client_tenant_id)
            await self._deps.access_verifier.verify_billing_access(actor_id, client.agency_ancestor_id())

            has_project = await self._deps.project_repository.exists_for_tenant(client.id)
            has_users = await self._deps.membership_repository.has_members(client.id)
            invitations = await self._deps.invitation_repository.list_for_tenant(client.id)

        checks = {
            "tenantCreated": True,
            "hasProject": has_project,
            "hasUsers": has_users,
            "billingSetup": bool(client.billing.customer_id) or bool(client.billing.monthly_price),
            "brandingConfigured": client.branding.is_configured(),
        }
        completed = sum(1 for name in ONBOARDING_CHECKS if checks[name])
        now = utc_now()

        return {
            "clientTenantId": client.id,
            "clientName": client.name,
            "status": getattr(client.status, "value", client.status),
            "progress": completed / len(ONBOARDING_CHECKS) * 100,
            "checks": checks,
            "pendingInvitations": sum(1 for invitation in invitations if invitation.is_pending(now)),
            "createdAt": client.created_at.isoformat(),
        }

    def _build_client_tenant(self, actor_id: str, agency: Tenant, intake: ClientIntake, slug: str) -> Tenant:
        defaults = self._deps.defaults
        return Tenant(
            id="",
            name=intake.business_name,
            kind=TenantKind.AGENCY_CLIENT,
            status=TenantStatus.TRIAL,
            # Sub-clients always start on the base agency tier, whatever the agency's own plan.
            subscription_plan=defaults.inherited_plan,
            slug=slug,
            owner_tenant_id=agency.id,
            owner_id=None,
            created_by=actor_id,
            industry=intake.industry,
            limits=defaults.client_limits.copy(),
            usage=TenantUsage(),
            branding=TenantBranding(
                company_name=intake.business_name,
                logo=intake.logo or "",
                primary_color=intake.primary_color or defaults.primary_color,
                secondary_color=intake.secondary_color or defaults.secondary_color,
            ),
            settings=TenantSettings(
                enabled_features=list(intake.enabled_features),
                default_language=defaults.language,
                portal_language=defaults.language,
            ),
            contact=ContactInfo(email=intake.contact_email, phone=intake.contact_phone or ""),
        )

    async def _seed_project(self, client: Tenant, intake: ClientIntake) -> StepResult[str]:
        step = "project_seeded"
        if not intake.project_template:
            return StepResult.skipped(step)

        project_name = f"Sitio Web - {intake.business_name}"
        project = Project(
            id=None,
            tenant_id=client.id,
            name=project_name,
            slug=slugify(project_name),
            industry=intake.industry,
            template_id=intake.project_template,
            components=default_components(project_name),
            settings={
                "seoTitle": project_name,
                "seoDescription": f"Sitio web de {project_name}",
                "favicon": "",
                "language": self._deps.defaults.language,
            },
        )
        try:
            created = await self._deps.project_repository.create(project)
            await self._deps.tenant_repository.update_fields(client.id, {"usage.projects": 1})
        except CollaboratorError as exc:
            logger.error(
                "Provisioning step failed",
                step=step,
                client_tenant_id=client.id,
                template_id=intake.project_template,
                error=exc.message,
            )
            return StepResult.failed(step, "Failed to create initial project")

        logger.info("Initial project seeded", client_tenant_id=client.id, project_id=created.id)
        return StepResult.completed(step, created.id)

    async def _send_invitations(
        self,
        actor_id: str,
        agency: Tenant,
        client: Tenant,
        users: List[InitialUser],
    ) -> List[StepResult]:
        if not users:
            return [StepResult.skipped("invitations_sent")]
        # Fan out across users; every result is awaited before reporting.
        return list(await asyncio.gather(*(
            self._invite(actor_id, agency, client, user) for user in users
        )))

    async def _invite(self, actor_id: str, agency: Tenant, client: Tenant, user: InitialUser) -> StepResult[str]:
        defaults = self._deps.defaults
        step = f"invitation:{user.email}"
        now = utc_now()
        token = self.generate_invite_token(client.id)
        invitation = Invitation.issue(
            invitation_id="",
            tenant_id=client.id,
            email=user.email,
            name=user.name,
            role=user.resolved_role(),
            invited_by=actor_id,
            token=token,
            ttl=timedelta(days=defaults.invitation_ttl_days),
            now=now,
        )
        stored: Optional[Invitation] = None
        try:
            stored = await self._deps.invitation_repository.create(invitation)
            await self._deps.notification_service.send_client_welcome(
                to=user.email,
                user_name=user.name,
                client_name=client.name,
                agency_name=agency.name or AGENCY_NAME_FALLBACK,
                invite_link=defaults.invite_link(token),
            )
        except CollaboratorError as exc:
            logger.error(
                "Provisioning step failed",
                step="invitation",
                client_tenant_id=client.id,
                email=user.email,
                error=exc.message,
            )
            if stored is not None:
                await self._withdraw_invitation(client.id, stored)
            return StepResult.failed(step, f"Failed to invite user: {user.email}")

        return StepResult.completed(step, stored.id)

    async def _withdraw_invitation(self, client_tenant_id: str, invitation: Invitation) -> None:
        # The user never received the link, so the token must not count as pending.
        try:
            await self._deps.invitation_repository.update_status(invitation.id, InvitationStatus.EXPIRED)
        except CollaboratorError as exc:
            logger.warning(
                "Undelivered invitation left pending",
                client_tenant_id=client_tenant_id,
                invitation_id=invitation.id,
                error=exc.message,
            )

    def generate_invite_token(self, tenant_id: str) -> str:
        """Unguessable single-use token bound to the tenant and issue time."""
        random_part = secrets.token_urlsafe(self._deps.defaults.invitation_token_bytes)
        material = f"{tenant_id}:{utc_now().timestamp()}:{random_part}"
        return hashlib.sha256(material.encode("utf-8")).hexdigest()

    async def _flag_billing(self, client: Tenant, intake: ClientIntake) -> StepResult:
        step = "billing_flagged"
        if not intake.wants_billing():
            return StepResult.skipped(step)
        try:
            # Only records intent; the subscription is created by the activation flow.
            await self._deps.tenant_repository.update_fields(client.id, {
                "billing.monthlyPrice": intake.monthly_price,
                "billing.billingMode": "direct",
                "billing.status": "pending_setup",
            })
        except CollaboratorError as exc:
            logger.error("Provisioning step failed", step=step, client_tenant_id=client.id, error=exc.message)
            return StepResult.failed(step, "Failed to setup billing")
        return StepResult.completed(step)

    async def _bump_agency_usage(self, agency_tenant_id: str) -> StepResult[int]:
        step = "agency_usage_updated"
        try:
            value = await self._deps.tenant_repository.increment_usage(agency_tenant_id, "sub_clients", 1)
        except CollaboratorError as exc:
            logger.error("Provisioning step failed", step=step, agency_tenant_id=agency_tenant_id, error=exc.message)
            return StepResult.failed(step, "Failed to update agency usage")
        return StepResult.completed(step, value)

    async def _record_creation(
        self,
        actor_id: str,
        agency: Tenant,
        client: Tenant,
        intake: ClientIntake,
        project_step: StepResult,
        invites_sent: int,
    ) -> StepResult[str]:
        step = "activity_recorded"
        event = ActivityEvent(
            agency_tenant_id=agency.id,
            type=ActivityType.CLIENT_CREATED,
            subject_tenant_id=client.id,
            actor_id=actor_id,
            payload={
                "clientName": client.name,
                "industry": intake.industry,
                "enabledFeatures": list(intake.enabled_features),
                "projectCreated": project_step.ok,
                "usersInvited": invites_sent,
            },
        )
        try:
            await self._deps.activity_recorder.record(agency.id, event)
        except CollaboratorError as exc:
            logger.error("Provisioning step failed", step=step, client_tenant_id=client.id, error=exc.message)
            return StepResult.failed(step, "Failed to record activity")
        return StepResult.completed(step, event.id)

    async def _detect_overshoot(self, agency_tenant_id: str, limit: int) -> None:
        try:
            current = await self._deps.tenant_repository.count_sub_tenants(
                agency_tenant_id, self._deps.quota_guard.counted_statuses
            )
        except CollaboratorError as exc:
            logger.warning("Quota recount failed", agency_tenant_id=agency_tenant_id, error=exc.message)
            return
        if current > limit:
            logger.warning(
                "Sub-tenant quota overshoot after concurrent provisioning",
                agency_tenant_id=agency_tenant_id,
                current=current,
                limit=limit,
            )


__all__ = ["ProvisioningWorkflow", "AGENCY_NAME_FALLBACK", "ONBOARDING_CHECKS"]
