"""Append-only audit trail keyed by agency tenant."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog

from agencyhub.application.errors import collaborator_failures
from agencyhub.domain.entities.activity import ActivityEvent
from agencyhub.domain.exceptions import ValidationError

if TYPE_CHECKING:
    from agencyhub.application.dependencies.activity_dependencies import ActivityDependencies


logger = structlog.get_logger(__name__)

MAX_FEED_LIMIT = 500


class ActivityRecorder:
    """Records and lists activity events; no update or delete is offered.

    Ordering for one agency is the order in which ``record`` calls complete.
    There is no ordering guarantee across agencies.
    """

    def __init__(self, dependencies: ActivityDependencies) -> None:
        self._deps = dependencies

    async def record(self, agency_tenant_id: str, event: ActivityEvent) -> ActivityEvent:
        """Append ``event`` under ``agency_tenant_id``.

        Storage failures propagate as ``StorageError`` so the caller decides
        whether a missing audit line aborts its operation.
        """
        if event.agency_tenant_id != agency_tenant_id:
            raise ValidationError("Activity event belongs to a different agency", field="agencyTenantId")

        stored = await self._deps.activity_repository.append(event)
        logger.info(
            "Activity recorded",
            agency_tenant_id=agency_tenant_id,
            event_type=event.type.value,
            subject_tenant_id=event.subject_tenant_id,
            actor_id=event.actor_id,
        )
        return stored

    async def list_for_agency(self, agency_tenant_id: str, limit: int = 100) -> List[ActivityEvent]:
        """Most recent ``limit`` events, oldest first."""
        if limit <= 0:
            raise ValidationError("limit must be positive", field="limit")
        return await self._deps.activity_repository.list_for_agency(
            agency_tenant_id, min(limit, MAX_FEED_LIMIT)
        )

    async def get_feed(
        self,
        actor_id: Optional[str],
        agency_tenant_id: str,
        limit: int = 100,
    ) -> List[ActivityEvent]:
        """Activity listing for an actor who passes the broad access rule."""
        with collaborator_failures("load activity feed", agency_tenant_id=agency_tenant_id):
            await self._deps.access_verifier.verify_billing_access(actor_id, agency_tenant_id)
            return await self.list_for_agency(agency_tenant_id, limit)


__all__ = ["ActivityRecorder", "MAX_FEED_LIMIT"]
