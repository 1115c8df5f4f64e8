"""Unit tests for QuotaGuard admission decisions."""

import pytest

from agencyhub.domain.entities.tenant import SubscriptionPlan, TenantStatus
from agencyhub.domain.exceptions import TenantNotFoundError
from agencyhub.domain.policies import QuotaPolicy, default_policies
from agencyhub.domain.services.quota_guard import QuotaDecision, QuotaGuard
from tests.fixtures.tenant_fixtures import TenantTestBuilder, seed_sub_clients, seed_tenant


@pytest.fixture
def guard(repositories):
    return QuotaGuard(repositories.tenants, default_policies().quota)


class TestSubTenantLimit:

    @pytest.mark.parametrize(
        "plan, expected",
        [
            (SubscriptionPlan.AGENCY, 10),
            (SubscriptionPlan.AGENCY_PLUS, 25),
            (SubscriptionPlan.ENTERPRISE, 100),
        ],
    )
    def test_plan_base_limits(self, guard, plan, expected):
        assert guard.sub_tenant_limit(TenantTestBuilder().with_plan(plan).build()) == expected

    def test_extra_sub_clients_extend_limit_one_to_one(self, guard):
        agency = TenantTestBuilder().with_addons({"extraSubClients": 2}).build()
        assert guard.sub_tenant_limit(agency) == 12

    def test_other_addons_do_not_extend_limit(self, guard):
        agency = TenantTestBuilder().with_addons({"extraStorageGB": 5, "extraAiCredits": 3}).build()
        assert guard.sub_tenant_limit(agency) == 10

    def test_unknown_plan_falls_back_to_lowest_ceiling(self, guard):
        agency = TenantTestBuilder().with_plan("legacy_gold").build()
        assert guard.sub_tenant_limit(agency) == 10

    def test_custom_policy_table(self, repositories):
        guard = QuotaGuard(repositories.tenants, QuotaPolicy(sub_tenant_base_limits={SubscriptionPlan.AGENCY: 3}))
        assert guard.sub_tenant_limit(TenantTestBuilder().build()) == 3

    def test_empty_policy_table_is_rejected(self):
        with pytest.raises(ValueError):
            QuotaPolicy(sub_tenant_base_limits={})


class TestCheckSubTenantLimit:

    async def test_below_limit_with_addon_slots(self, guard, repositories):
        agency = await seed_tenant(repositories, TenantTestBuilder().with_addons({"extraSubClients": 2}).build())
        await seed_sub_clients(repositories, agency.id, 11)

        decision = await guard.check_sub_tenant_limit(agency.id)

        assert decision == QuotaDecision(can_create=True, current=11, limit=12)

    async def test_at_limit_is_rejected(self, guard, repositories):
        agency = await seed_tenant(repositories, TenantTestBuilder().with_addons({"extraSubClients": 2}).build())
        await seed_sub_clients(repositories, agency.id, 12)

        decision = await guard.check_sub_tenant_limit(agency.id)

        assert decision.to_dict() == {"canCreate": False, "current": 12, "limit": 12}

    async def test_only_active_and_trial_count(self, guard, repositories):
        agency = await seed_tenant(repositories, TenantTestBuilder().build())
        await seed_sub_clients(repositories, agency.id, 4, status=TenantStatus.ACTIVE)
        await seed_sub_clients(repositories, agency.id, 3, status=TenantStatus.TRIAL)
        await seed_sub_clients(repositories, agency.id, 5, status=TenantStatus.SUSPENDED)
        await seed_sub_clients(repositories, agency.id, 2, status=TenantStatus.INACTIVE)

        decision = await guard.check_sub_tenant_limit(agency.id)

        assert decision.current == 7
        assert decision.can_create is True

    async def test_sub_clients_of_other_agencies_are_ignored(self, guard, repositories):
        agency = await seed_tenant(repositories, TenantTestBuilder().build())
        await seed_sub_clients(repositories, "agency-other", 10)

        decision = await guard.check_sub_tenant_limit(agency.id)
        assert decision.current == 0

    async def test_missing_agency(self, guard):
        with pytest.raises(TenantNotFoundError):
            await guard.check_sub_tenant_limit("ghost")
