"""
Mock repository implementations for testing.

These mocks implement the repository interfaces, keep test data in memory
and track method calls, with flags that make individual operations fail.
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Set

from agencyhub.domain.entities.activity import ActivityEvent
from agencyhub.domain.entities.project import Project
from agencyhub.domain.entities.tenant import Tenant, TenantStatus
from agencyhub.domain.exceptions import StorageError
from agencyhub.domain.repositories import (
    IActivityRepository,
    IProjectRepository,
    ITenantRepository,
)


class MockProjectRepository(IProjectRepository):
    """Mock project repository for testing."""

    def __init__(self):
        self.projects: Dict[str, Project] = {}
        self.call_log: List[tuple] = []
        self.should_fail_on_create = False

    async def create(self, project: Project) -> Project:
        self.call_log.append(("create", project.tenant_id))

        if self.should_fail_on_create:
            raise StorageError("Mock project create failure")

        stored = replace(project, id=f"project-{len(self.projects) + 1}")
        self.projects[stored.id] = stored
        return stored

    async def exists_for_tenant(self, tenant_id: str) -> bool:
        self.call_log.append(("exists_for_tenant", tenant_id))
        return any(project.tenant_id == tenant_id for project in self.projects.values())


class MockActivityRepository(IActivityRepository):
    """Mock append-only activity repository for testing."""

    def __init__(self):
        self.events: List[ActivityEvent] = []
        self.call_log: List[tuple] = []
        self.should_fail_on_append = False

    async def append(self, event: ActivityEvent) -> ActivityEvent:
        self.call_log.append(("append", event.agency_tenant_id, event.type))

        if self.should_fail_on_append:
            raise StorageError("Mock activity append failure")

        self.events.append(event)
        return event

    async def list_for_agency(self, agency_tenant_id: str, limit: int = 100) -> List[ActivityEvent]:
        self.call_log.append(("list_for_agency", agency_tenant_id, limit))
        matching = [event for event in self.events if event.agency_tenant_id == agency_tenant_id]
        return matching[-limit:]


class FlakyTenantRepository(ITenantRepository):
    """Delegates to a real tenant repository, failing the operations named in ``fail_on``."""

    def __init__(self, inner: ITenantRepository, fail_on: Optional[Set[str]] = None):
        self.inner = inner
        self.fail_on = set(fail_on or ())
        self.call_log: List[tuple] = []

    def _check(self, operation: str) -> None:
        self.call_log.append((operation,))
        if operation in self.fail_on:
            raise StorageError(f"Mock tenant {operation} failure")

    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        self._check("get_by_id")
        return await self.inner.get_by_id(tenant_id)

    async def create(self, tenant: Tenant) -> Tenant:
        self._check("create")
        return await self.inner.create(tenant)

    async def update_fields(self, tenant_id: str, updates: Dict[str, Any]) -> None:
        self._check("update_fields")
        await self.inner.update_fields(tenant_id, updates)

    async def increment_usage(self, tenant_id: str, resource: str, delta: int = 1) -> int:
        self._check("increment_usage")
        return await self.inner.increment_usage(tenant_id, resource, delta)

    async def count_sub_tenants(self, owner_tenant_id: str, statuses: Iterable[TenantStatus]) -> int:
        self._check("count_sub_tenants")
        return await self.inner.count_sub_tenants(owner_tenant_id, statuses)


class RacingTenantRepository(FlakyTenantRepository):
    """Stores ``competing`` tenants right before the next create, as a concurrent request would."""

    def __init__(self, inner: ITenantRepository, competing: Iterable[Tenant]):
        super().__init__(inner)
        self.competing = list(competing)

    async def create(self, tenant: Tenant) -> Tenant:
        while self.competing:
            await self.inner.create(self.competing.pop(0))
        return await super().create(tenant)
