"""Application service keeping stored add-on entitlements and the external subscription in step."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

from agencyhub.application.errors import collaborator_failures
from agencyhub.domain.entities.activity import ActivityEvent, ActivityType
from agencyhub.domain.entities.addon import parse_addon_selection
from agencyhub.domain.entities.tenant import Tenant
from agencyhub.domain.exceptions import (
    CollaboratorError,
    InternalError,
    PermissionDeniedError,
    UnauthenticatedError,
)
from agencyhub.domain.interfaces import LineItemChange, SubscriptionSnapshot

if TYPE_CHECKING:
    from agencyhub.application.dependencies.billing_dependencies import BillingDependencies


logger = structlog.get_logger(__name__)


class BillingReconciler:
    """Prices add-on selections and applies them to a tenant.

    ``apply_addons`` writes the external subscription first and the local
    record second. A processor failure aborts before anything local is
    touched; a local failure after the processor accepted the change is
    logged for manual reconciliation and never retried here.
    """

    def __init__(self, dependencies: BillingDependencies) -> None:
        self._deps = dependencies

    async def get_pricing(self, actor_id: Optional[str], tenant_id: str) -> Dict[str, Any]:
        """Add-on catalog plus the tenant's current add-ons."""
        with collaborator_failures("load add-on pricing", tenant_id=tenant_id):
            tenant = await self._deps.access_verifier.verify_billing_access(actor_id, tenant_id)

        catalog = self._deps.catalog
        return {
            "currency": catalog.currency,
            "addons": [
                {
                    "id": spec.key.value,
                    "name": spec.name,
                    "description": spec.description,
                    "pricePerUnit": spec.unit_price,
                    "saleUnit": spec.sale_unit,
                    "unit": spec.unit_label,
                    "minimumQuantity": spec.minimum_quantity,
                    "maximumQuantity": spec.maximum_quantity,
                }
                for spec in catalog.specs
            ],
            "currentAddons": dict(tenant.billing.addons),
            "currentAddonsPrice": tenant.billing.addons_monthly_price,
        }

    def calculate_price(self, actor_id: Optional[str], selection: Any) -> Dict[str, Any]:
        """Price a selection without touching any tenant; unknown keys are ignored."""
        if not actor_id:
            raise UnauthenticatedError()

        parsed = parse_addon_selection(selection, reject_unknown=False)
        pricer = self._deps.pricer
        return {
            "totalCost": pricer.total_price(parsed),
            "breakdown": [line.to_dict() for line in pricer.breakdown(parsed)],
        }

    async def check_eligibility(self, actor_id: Optional[str], tenant_id: str) -> Dict[str, Any]:
        with collaborator_failures("check add-on eligibility", tenant_id=tenant_id):
            tenant = await self._deps.access_verifier.verify_billing_access(actor_id, tenant_id)

        eligibility = self._deps.pricer.check_eligibility(tenant)
        return {
            "eligible": eligibility.eligible,
            "currentPlan": tenant.plan_name,
            "reason": eligibility.reason,
            "currentAddons": dict(tenant.billing.addons),
            "currentAddonsPrice": tenant.billing.addons_monthly_price,
        }

    async def apply_addons(self, actor_id: Optional[str], tenant_id: str, selection: Any) -> Dict[str, Any]:
        """
        Replace the tenant's add-on selection.

        Returns:
            ``addons``, ``newMonthlyPrice`` (add-ons only), ``totalMonthlyPrice``
            (base monthly price plus add-ons), ``breakdown`` and
            ``subscriptionUpdated``.

        Raises:
            UnauthenticatedError, PermissionDeniedError, TenantNotFoundError:
                Access rules
            ValidationError: Unknown keys or invalid quantities
            InternalError: Processor or storage failure
        """
        with collaborator_failures("load tenant for add-on update", tenant_id=tenant_id):
            tenant = await self._deps.access_verifier.verify_billing_access(actor_id, tenant_id)

        parsed = parse_addon_selection(selection, reject_unknown=True)

        eligibility = self._deps.pricer.check_eligibility(tenant)
        if not eligibility.eligible:
            logger.warning(
                "Add-on update rejected for plan",
                tenant_id=tenant_id,
                actor_id=actor_id,
                plan=tenant.plan_name,
            )
            raise PermissionDeniedError(eligibility.reason)

        pricer = self._deps.pricer
        addons_cost = pricer.total_price(parsed)
        breakdown = pricer.breakdown(parsed)

        subscription_updated = False
        if tenant.billing.has_external_subscription():
            with collaborator_failures(
                "update subscription add-ons",
                tenant_id=tenant_id,
                subscription_id=tenant.billing.subscription_id,
            ):
                await self._sync_subscription(tenant, parsed)
            subscription_updated = True

        try:
            await self._deps.tenant_repository.update_fields(tenant.id, {
                "billing.addons": parsed,
                "billing.addonsMonthlyPrice": addons_cost,
            })
            await self._deps.activity_recorder.record(
                tenant.agency_ancestor_id(),
                self._build_event(tenant, actor_id, parsed, addons_cost),
            )
        except CollaboratorError as exc:
            logger.error(
                "Add-ons applied externally but local update failed",
                tenant_id=tenant_id,
                subscription_id=tenant.billing.subscription_id,
                intended_addons=parsed,
                intended_addons_monthly_price=addons_cost,
                subscription_updated=subscription_updated,
                manual_reconciliation_required=subscription_updated,
                error=exc.message,
                exc_info=True,
            )
            raise InternalError("Failed to save add-ons", upstream_message=exc.message) from exc

        logger.info(
            "Add-ons applied",
            tenant_id=tenant_id,
            actor_id=actor_id,
            addons=parsed,
            addons_monthly_price=addons_cost,
            subscription_updated=subscription_updated,
        )

        return {
            "addons": parsed,
            "newMonthlyPrice": addons_cost,
            "totalMonthlyPrice": tenant.billing.monthly_price + addons_cost,
            "breakdown": [line.to_dict() for line in breakdown],
            "subscriptionUpdated": subscription_updated,
        }

    async def _sync_subscription(self, tenant: Tenant, selection: Dict[str, int]) -> SubscriptionSnapshot:
        gateway = self._deps.subscription_gateway
        catalog = self._deps.catalog
        subscription_id = tenant.billing.subscription_id

        snapshot = await gateway.get_subscription(subscription_id)
        changes = self.build_line_items(snapshot, selection)
        return await gateway.replace_items(subscription_id, changes, catalog.proration_behavior)

    def build_line_items(self, snapshot: SubscriptionSnapshot, selection: Dict[str, int]) -> List[LineItemChange]:
        """Base item unchanged, prior add-on items deleted, one item per positive quantity."""
        catalog = self._deps.catalog
        addon_products = catalog.product_ids()

        # A subscription holding only add-on items has no base to keep.
        base = next((item for item in snapshot.items if item.product_id not in addon_products), None)

        changes: List[LineItemChange] = []
        if base is not None:
            changes.append(LineItemChange.keep(base))
        for item in snapshot.items:
            if base is not None and item.id == base.id:
                continue
            if item.product_id in addon_products:
                changes.append(LineItemChange.remove(item))

        for key, quantity in selection.items():
            spec = catalog.get(key)
            if spec is None or quantity <= 0:
                continue
            changes.append(LineItemChange.add_monthly(
                product_id=spec.product_id,
                unit_amount=spec.unit_amount_minor,
                quantity=quantity,
                currency=catalog.currency,
            ))
        return changes

    def _build_event(
        self,
        tenant: Tenant,
        actor_id: str,
        selection: Dict[str, int],
        addons_cost: float,
    ) -> ActivityEvent:
        # Effective limits are reported, never stored, so add-ons are not counted twice.
        effective = tenant.effective_limits(self._deps.catalog.block_sizes(), addons=selection)
        return ActivityEvent(
            agency_tenant_id=tenant.agency_ancestor_id(),
            type=ActivityType.ADDONS_UPDATED,
            subject_tenant_id=tenant.id,
            actor_id=actor_id,
            payload={
                "addons": dict(selection),
                "addonsMonthlyPrice": addons_cost,
                "previousAddons": dict(tenant.billing.addons),
                "previousAddonsMonthlyPrice": tenant.billing.addons_monthly_price,
                "effectiveLimits": asdict(effective),
            },
        )


__all__ = ["BillingReconciler"]
