"""
Unit tests for BillingReconciler.

Covers:
- Pricing catalog, price calculation and eligibility views
- Applying add-ons: processor first, then the stored record and activity
- Failure handling on either side of the processor call
- Line item rewrite rules
"""

from dataclasses import replace

import pytest

from agencyhub.application.billing_reconciler import BillingReconciler
from agencyhub.domain.entities.activity import ActivityType
from agencyhub.domain.entities.membership import MemberRole
from agencyhub.domain.entities.tenant import SubscriptionPlan
from agencyhub.domain.exceptions import (
    InternalError,
    PermissionDeniedError,
    TenantNotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from agencyhub.domain.interfaces import SubscriptionItem, SubscriptionSnapshot
from tests.fixtures.tenant_fixtures import (
    AGENCY_OWNER_ID,
    TenantTestBuilder,
    build_world,
    grant_role,
    seed_agency,
    seed_tenant,
)
from tests.mocks.mock_repositories import FlakyTenantRepository
from tests.mocks.mock_services import MockSubscriptionGateway

BASE_ITEM = SubscriptionItem(id="si_base", price_id="price_agency", product_id="prod_agency")


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def gateway():
    gateway = MockSubscriptionGateway()
    gateway.add_subscription("sub_1", BASE_ITEM)
    return gateway


@pytest.fixture
def world(document_store, gateway):
    return build_world(store=document_store, gateway=gateway)


@pytest.fixture
async def agency(world):
    builder = (TenantTestBuilder()
               .with_id("agency-1")
               .with_monthly_price(99)
               .with_subscription("sub_1"))
    return await seed_agency(world.repos, builder)


async def activity_for(world, agency_id="agency-1"):
    return await world.repos.activity.list_for_agency(agency_id)


# ============================================================================
# READ VIEWS
# ============================================================================


class TestGetPricing:

    async def test_catalog_and_current_addons(self, world, agency):
        await world.repos.tenants.update_fields(agency.id, {
            "billing.addons": {"extraSubClients": 1},
            "billing.addonsMonthlyPrice": 15,
        })

        pricing = await world.reconciler.get_pricing(AGENCY_OWNER_ID, agency.id)

        assert pricing["currency"] == "usd"
        assert [addon["id"] for addon in pricing["addons"]] == ["extraSubClients", "extraStorageGB", "extraAiCredits"]
        assert pricing["addons"][1]["saleUnit"] == 100
        assert pricing["currentAddons"] == {"extraSubClients": 1}
        assert pricing["currentAddonsPrice"] == 15

    async def test_requires_billing_access(self, world, agency):
        with pytest.raises(PermissionDeniedError):
            await world.reconciler.get_pricing("stranger", agency.id)


class TestCalculatePrice:

    def test_requires_actor(self, world):
        with pytest.raises(UnauthenticatedError):
            world.reconciler.calculate_price(None, {"extraStorageGB": 2})

    def test_prices_selection(self, world):
        result = world.reconciler.calculate_price("anyone", {"extraStorageGB": 2, "extraAiCredits": 0})

        assert result["totalCost"] == 20
        assert result["breakdown"] == [
            {"addon": "extraStorageGB", "quantity": 2, "pricePerUnit": 10, "total": 20},
            {"addon": "extraAiCredits", "quantity": 0, "pricePerUnit": 20, "total": 0},
        ]

    def test_unknown_keys_are_ignored(self, world):
        assert world.reconciler.calculate_price("anyone", {"extraDomains": 5})["totalCost"] == 0

    def test_negative_quantity_is_rejected(self, world):
        with pytest.raises(ValidationError):
            world.reconciler.calculate_price("anyone", {"extraSubClients": -1})


class TestCheckEligibility:

    async def test_agency_plan(self, world, agency):
        result = await world.reconciler.check_eligibility(AGENCY_OWNER_ID, agency.id)

        assert result["eligible"] is True
        assert result["currentPlan"] == "agency"
        assert result["currentAddons"] == {}

    async def test_pro_plan_is_not_eligible(self, world):
        tenant = await seed_tenant(world.repos, TenantTestBuilder().with_plan(SubscriptionPlan.PRO).build())

        result = await world.reconciler.check_eligibility(AGENCY_OWNER_ID, tenant.id)

        assert result["eligible"] is False
        assert result["currentPlan"] == "pro"
        assert result["reason"] == "Add-ons are only available for agency plans"

    async def test_missing_tenant(self, world):
        with pytest.raises(TenantNotFoundError):
            await world.reconciler.check_eligibility(AGENCY_OWNER_ID, "ghost")


# ============================================================================
# APPLY ADD-ONS
# ============================================================================


class TestApplyAddons:

    async def test_applies_selection(self, world, agency, gateway):
        result = await world.reconciler.apply_addons(
            AGENCY_OWNER_ID, agency.id, {"extraStorageGB": 2, "extraAiCredits": 0}
        )

        assert result["addons"] == {"extraStorageGB": 2, "extraAiCredits": 0}
        assert result["newMonthlyPrice"] == 20
        assert result["totalMonthlyPrice"] == 119
        assert len(result["breakdown"]) == 2
        assert result["subscriptionUpdated"] is True

        stored = await world.repos.tenants.get_by_id(agency.id)
        assert stored.billing.addons == {"extraStorageGB": 2, "extraAiCredits": 0}
        assert stored.billing.addons_monthly_price == 20

        _, _, items, proration = gateway.replace_calls[0]
        assert proration == "always_invoice"
        assert items[0].item_id == "si_base"
        assert [(item.product_id, item.quantity, item.unit_amount) for item in items[1:]] == [
            ("addon_extra_storage", 2, 1000),
        ]

    async def test_records_activity_with_effective_limits(self, world, agency):
        await world.reconciler.apply_addons(AGENCY_OWNER_ID, agency.id, {"extraStorageGB": 2})

        events = await activity_for(world)
        assert len(events) == 1
        event = events[0]
        assert event.type is ActivityType.ADDONS_UPDATED
        assert event.actor_id == AGENCY_OWNER_ID
        assert event.payload["previousAddons"] == {}
        assert event.payload["addonsMonthlyPrice"] == 20
        assert event.payload["effectiveLimits"]["max_storage_gb"] == agency.limits.max_storage_gb + 200

    async def test_reapplying_same_selection_is_idempotent(self, world, agency, gateway):
        selection = {"extraStorageGB": 2, "extraSubClients": 1}

        first = await world.reconciler.apply_addons(AGENCY_OWNER_ID, agency.id, selection)
        second = await world.reconciler.apply_addons(AGENCY_OWNER_ID, agency.id, selection)

        assert first == second
        stored = await world.repos.tenants.get_by_id(agency.id)
        assert stored.billing.addons == selection
        assert sorted(item.product_id for item in gateway.subscriptions["sub_1"]) == [
            "addon_extra_storage",
            "addon_extra_subclients",
            "prod_agency",
        ]

    async def test_prior_addon_items_are_deleted(self, world, agency, gateway):
        await world.reconciler.apply_addons(AGENCY_OWNER_ID, agency.id, {"extraStorageGB": 2})
        storage_item_id = gateway.subscriptions["sub_1"][1].id

        await world.reconciler.apply_addons(AGENCY_OWNER_ID, agency.id, {})

        _, _, items, _ = gateway.replace_calls[-1]
        assert [(item.item_id, item.deleted) for item in items] == [("si_base", False), (storage_item_id, True)]
        assert gateway.subscriptions["sub_1"] == [BASE_ITEM]

    async def test_processor_failure_changes_nothing(self, world, agency, gateway):
        gateway.should_fail_on_replace = True

        with pytest.raises(InternalError) as exc_info:
            await world.reconciler.apply_addons(AGENCY_OWNER_ID, agency.id, {"extraStorageGB": 2})

        assert exc_info.value.upstream_message == "Your card was declined."
        stored = await world.repos.tenants.get_by_id(agency.id)
        assert stored.billing.addons == {}
        assert stored.billing.addons_monthly_price == 0
        assert await activity_for(world) == []

    async def test_local_failure_after_processor_update(self, world, agency, gateway):
        flaky = FlakyTenantRepository(world.repos.tenants, fail_on={"update_fields"})
        reconciler = BillingReconciler(replace(world.reconciler._deps, tenant_repository=flaky))

        with pytest.raises(InternalError, match="Failed to save add-ons"):
            await reconciler.apply_addons(AGENCY_OWNER_ID, agency.id, {"extraStorageGB": 2})

        assert len(gateway.replace_calls) == 1
        assert await activity_for(world) == []

    async def test_without_subscription_only_local_record_changes(self, world, gateway):
        agency = await seed_agency(world.repos, TenantTestBuilder().with_id("agency-2"))

        result = await world.reconciler.apply_addons(AGENCY_OWNER_ID, agency.id, {"extraSubClients": 3})

        assert result["subscriptionUpdated"] is False
        assert result["newMonthlyPrice"] == 45
        assert gateway.call_log == []

    async def test_unknown_key_is_rejected_before_any_write(self, world, agency, gateway):
        with pytest.raises(ValidationError):
            await world.reconciler.apply_addons(AGENCY_OWNER_ID, agency.id, {"extraDomains": 1})
        assert gateway.call_log == []

    async def test_ineligible_plan(self, world, gateway):
        tenant = await seed_tenant(
            world.repos, TenantTestBuilder().with_plan(SubscriptionPlan.PRO).with_subscription("sub_1").build()
        )

        with pytest.raises(PermissionDeniedError):
            await world.reconciler.apply_addons(AGENCY_OWNER_ID, tenant.id, {"extraSubClients": 1})
        assert gateway.call_log == []

    async def test_agency_admin_may_apply(self, world, agency):
        await grant_role(world.repos, "user-admin", agency.id, MemberRole.AGENCY_ADMIN)

        result = await world.reconciler.apply_addons("user-admin", agency.id, {"extraSubClients": 1})
        assert result["newMonthlyPrice"] == 15

    async def test_member_may_not_apply(self, world, agency):
        await grant_role(world.repos, "user-member", agency.id, MemberRole.AGENCY_MEMBER)

        with pytest.raises(PermissionDeniedError):
            await world.reconciler.apply_addons("user-member", agency.id, {"extraSubClients": 1})

    async def test_sub_client_activity_goes_to_agency(self, world, agency):
        client = await seed_tenant(world.repos, TenantTestBuilder().as_sub_client_of(agency.id).build())

        await world.reconciler.apply_addons(AGENCY_OWNER_ID, client.id, {"extraAiCredits": 1})

        events = await activity_for(world, agency.id)
        assert [event.subject_tenant_id for event in events] == [client.id]


class TestBuildLineItems:

    def test_base_item_is_first_non_addon_item(self, world):
        snapshot = SubscriptionSnapshot(id="sub_1", items=[
            SubscriptionItem(id="si_addon", price_id="p1", product_id="addon_extra_subclients"),
            SubscriptionItem(id="si_base", price_id="price_agency", product_id="prod_agency"),
        ])

        changes = world.reconciler.build_line_items(snapshot, {"extraSubClients": 2, "extraStorageGB": 0})

        assert changes[0].item_id == "si_base"
        assert changes[0].price_id == "price_agency"
        assert changes[1].item_id == "si_addon" and changes[1].deleted is True
        assert changes[2].product_id == "addon_extra_subclients"
        assert changes[2].quantity == 2
        assert changes[2].unit_amount == 1500
        assert len(changes) == 3

    def test_subscription_with_only_addon_items(self, world):
        snapshot = SubscriptionSnapshot(id="sub_1", items=[
            SubscriptionItem(id="si_addon", price_id="price_old", product_id="addon_extra_subclients", quantity=1),
        ])

        changes = world.reconciler.build_line_items(snapshot, {"extraSubClients": 3})

        assert len(changes) == 2
        assert changes[0].item_id == "si_addon" and changes[0].deleted is True
        assert changes[1].product_id == "addon_extra_subclients"
        assert changes[1].quantity == 3
        assert not any(change.item_id == "si_addon" and not change.deleted for change in changes)

    def test_empty_subscription(self, world):
        changes = world.reconciler.build_line_items(SubscriptionSnapshot(id="sub_1"), {"extraAiCredits": 1})
        assert [change.product_id for change in changes] == ["addon_extra_ai_credits"]
