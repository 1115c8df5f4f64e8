"""Unit tests for ActivityRecorder."""

import pytest

from agencyhub.domain.entities.activity import ActivityEvent, ActivityType
from agencyhub.domain.entities.membership import MemberRole
from agencyhub.domain.exceptions import (
    PermissionDeniedError,
    StorageError,
    UnauthenticatedError,
    ValidationError,
)
from agencyhub.application.activity_recorder import MAX_FEED_LIMIT, ActivityRecorder
from agencyhub.application.dependencies import ActivityDependencies
from tests.fixtures.tenant_fixtures import AGENCY_OWNER_ID, TenantTestBuilder, grant_role, seed_agency
from tests.mocks.mock_repositories import MockActivityRepository


def make_event(agency_id="agency-1", subject="client-1") -> ActivityEvent:
    return ActivityEvent(
        agency_tenant_id=agency_id,
        type=ActivityType.CLIENT_CREATED,
        subject_tenant_id=subject,
        actor_id=AGENCY_OWNER_ID,
        payload={"clientName": subject},
    )


@pytest.fixture
def activity_repository():
    return MockActivityRepository()


@pytest.fixture
def recorder(agency_world, activity_repository):
    return ActivityRecorder(ActivityDependencies(
        activity_repository=activity_repository,
        access_verifier=agency_world.verifier,
    ))


class TestRecord:

    async def test_appends_event(self, recorder, activity_repository):
        event = make_event()

        stored = await recorder.record("agency-1", event)

        assert stored is event
        assert activity_repository.events == [event]

    async def test_rejects_event_for_another_agency(self, recorder, activity_repository):
        with pytest.raises(ValidationError):
            await recorder.record("agency-2", make_event(agency_id="agency-1"))
        assert activity_repository.events == []

    async def test_storage_failure_propagates(self, recorder, activity_repository):
        activity_repository.should_fail_on_append = True

        with pytest.raises(StorageError):
            await recorder.record("agency-1", make_event())


class TestListForAgency:

    async def test_order_of_recording_is_kept(self, recorder):
        for subject in ("client-1", "client-2", "client-3"):
            await recorder.record("agency-1", make_event(subject=subject))
        await recorder.record("agency-2", make_event(agency_id="agency-2", subject="other"))

        events = await recorder.list_for_agency("agency-1")

        assert [event.subject_tenant_id for event in events] == ["client-1", "client-2", "client-3"]

    async def test_limit_is_capped(self, recorder, activity_repository):
        await recorder.list_for_agency("agency-1", limit=10_000)
        assert activity_repository.call_log[-1] == ("list_for_agency", "agency-1", MAX_FEED_LIMIT)

    @pytest.mark.parametrize("limit", [0, -5])
    async def test_non_positive_limit(self, recorder, limit):
        with pytest.raises(ValidationError):
            await recorder.list_for_agency("agency-1", limit=limit)


class TestGetFeed:

    async def test_owner_reads_feed(self, agency_world, recorder):
        agency = await seed_agency(agency_world.repos, TenantTestBuilder().with_id("agency-1"))
        await recorder.record(agency.id, make_event())

        events = await recorder.get_feed(AGENCY_OWNER_ID, agency.id)
        assert len(events) == 1

    async def test_agency_admin_reads_feed(self, agency_world, recorder):
        agency = await seed_agency(agency_world.repos, TenantTestBuilder().with_id("agency-1"))
        await grant_role(agency_world.repos, "user-admin", agency.id, MemberRole.AGENCY_ADMIN)

        assert await recorder.get_feed("user-admin", agency.id) == []

    async def test_member_is_denied(self, agency_world, recorder):
        agency = await seed_agency(agency_world.repos, TenantTestBuilder().with_id("agency-1"))
        await grant_role(agency_world.repos, "user-member", agency.id, MemberRole.AGENCY_MEMBER)

        with pytest.raises(PermissionDeniedError):
            await recorder.get_feed("user-member", agency.id)

    async def test_requires_actor(self, recorder):
        with pytest.raises(UnauthenticatedError):
            await recorder.get_feed(None, "agency-1")
