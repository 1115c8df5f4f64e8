"""
Immutable policy tables for pricing, quotas, provisioning and access.

Instances are built once at process start and handed to each component
explicitly, so tests can substitute their own tables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from agencyhub.domain.entities.addon import AddonKey
from agencyhub.domain.entities.membership import MemberRole
from agencyhub.domain.entities.tenant import SubscriptionPlan, TenantLimits, TenantStatus

UNLIMITED = 999_999


@dataclass(frozen=True)
class AddonSpec:
    """Sale terms for one add-on."""

    key: AddonKey
    name: str
    description: str
    unit_price: float
    sale_unit: int
    unit_label: str
    product_id: str
    minimum_quantity: int = 1
    maximum_quantity: int = 50

    @property
    def unit_amount_minor(self) -> int:
        """Price per sale unit in minor currency units."""
        return int(round(self.unit_price * 100))


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class AddonCatalog:
    """Add-on price and unit table, in declaration order."""

    specs: Tuple[AddonSpec, ...]
    eligible_plans: FrozenSet[SubscriptionPlan]
    currency: str = "usd"
    proration_behavior: str = "always_invoice"

    def get(self, key: str) -> Optional[AddonSpec]:
        for spec in self.specs:
            if spec.key == key:
                return spec
        return None

    def keys(self) -> Tuple[AddonKey, ...]:
        return tuple(spec.key for spec in self.specs)

    def block_sizes(self) -> Dict[AddonKey, int]:
        return {spec.key: spec.sale_unit for spec in self.specs}

    def is_plan_eligible(self, plan: str) -> bool:
        return SubscriptionPlan.parse(plan) in self.eligible_plans

    def product_ids(self) -> FrozenSet[str]:
        return frozenset(spec.product_id for spec in self.specs)


@dataclass(frozen=True)
class QuotaPolicy:
    """Plan-derived sub-tenant ceilings and which statuses consume a slot."""

    sub_tenant_base_limits: Mapping[SubscriptionPlan, int]
    counted_statuses: FrozenSet[TenantStatus] = frozenset({TenantStatus.ACTIVE, TenantStatus.TRIAL})

    def __post_init__(self) -> None:
        if not self.sub_tenant_base_limits:
            raise ValueError("sub_tenant_base_limits cannot be empty")
        object.__setattr__(self, "sub_tenant_base_limits", _freeze(self.sub_tenant_base_limits))

    def base_limit_for(self, plan: str) -> int:
        """Unknown plans fall back to the lowest ceiling in the table."""
        limit = self.sub_tenant_base_limits.get(SubscriptionPlan.parse(plan))
        if limit is None:
            return min(self.sub_tenant_base_limits.values())
        return limit


@dataclass(frozen=True)
class RolePolicy:
    """Capability sets expressed over the closed role enumeration."""

    billing_admin_roles: FrozenSet[MemberRole]
    provisioning_roles: FrozenSet[MemberRole]

    def can_administer_billing(self, role: MemberRole) -> bool:
        return role in self.billing_admin_roles

    def can_provision(self, stored_role: str) -> bool:
        """Exact, case-sensitive match on the stored role string."""
        return stored_role in {role.value for role in self.provisioning_roles}


@dataclass(frozen=True)
class ProvisioningDefaults:
    """Values stamped onto every new sub-client."""

    inherited_plan: SubscriptionPlan = SubscriptionPlan.AGENCY
    primary_color: str = "#3B82F6"
    secondary_color: str = "#10B981"
    language: str = "es"
    invitation_ttl_days: int = 7
    invitation_token_bytes: int = 24
    base_url: str = "https://quimera.ai"
    provisioning_plans: FrozenSet[SubscriptionPlan] = frozenset({
        SubscriptionPlan.AGENCY,
        SubscriptionPlan.AGENCY_PLUS,
        SubscriptionPlan.ENTERPRISE,
        SubscriptionPlan.AGENCY_STARTER,
        SubscriptionPlan.AGENCY_PRO,
        SubscriptionPlan.AGENCY_SCALE,
    })
    client_limits: TenantLimits = field(default_factory=lambda: TenantLimits(
        max_projects=5,
        max_users=5,
        max_storage_gb=10,
        max_ai_credits=500,
        max_domains=1,
        max_leads=1000,
        max_products=100,
        max_sub_clients=0,
    ))

    def invite_link(self, token: str) -> str:
        return f"{self.base_url.rstrip('/')}/accept-invite?token={token}"


@dataclass(frozen=True)
class AgencyPolicies:
    """Bundle of every policy table, constructed once per process."""

    catalog: AddonCatalog
    quota: QuotaPolicy
    roles: RolePolicy
    provisioning: ProvisioningDefaults


AGENCY_PLANS: FrozenSet[SubscriptionPlan] = frozenset({
    SubscriptionPlan.AGENCY,
    SubscriptionPlan.AGENCY_PLUS,
    SubscriptionPlan.ENTERPRISE,
})


def default_addon_specs(product_ids: Optional[Mapping[AddonKey, str]] = None) -> Tuple[AddonSpec, ...]:
    products = dict(product_ids or {})
    return (
        AddonSpec(
            key=AddonKey.EXTRA_SUB_CLIENTS,
            name="Extra Sub-clients",
            description="Additional sub-clients you can manage",
            unit_price=15,
            sale_unit=1,
            unit_label="client",
            product_id=products.get(AddonKey.EXTRA_SUB_CLIENTS, "addon_extra_subclients"),
            minimum_quantity=1,
            maximum_quantity=50,
        ),
        AddonSpec(
            key=AddonKey.EXTRA_STORAGE_GB,
            name="Extra Storage",
            description="Additional storage space (sold in 100GB blocks)",
            unit_price=10,
            sale_unit=100,
            unit_label="GB",
            product_id=products.get(AddonKey.EXTRA_STORAGE_GB, "addon_extra_storage"),
            minimum_quantity=1,
            maximum_quantity=50,
        ),
        AddonSpec(
            key=AddonKey.EXTRA_AI_CREDITS,
            name="Extra AI Credits",
            description="Additional AI credits (sold in 1000 credit blocks)",
            unit_price=20,
            sale_unit=1000,
            unit_label="credit",
            product_id=products.get(AddonKey.EXTRA_AI_CREDITS, "addon_extra_ai_credits"),
            minimum_quantity=1,
            maximum_quantity=100,
        ),
    )


def default_policies(
    *,
    catalog: Optional[AddonCatalog] = None,
    quota: Optional[QuotaPolicy] = None,
    roles: Optional[RolePolicy] = None,
    provisioning: Optional[ProvisioningDefaults] = None,
) -> AgencyPolicies:
    """Production tables; any part may be overridden."""
    return AgencyPolicies(
        catalog=catalog or AddonCatalog(specs=default_addon_specs(), eligible_plans=AGENCY_PLANS),
        quota=quota or QuotaPolicy(sub_tenant_base_limits={
            SubscriptionPlan.AGENCY: 10,
            SubscriptionPlan.AGENCY_PLUS: 25,
            SubscriptionPlan.ENTERPRISE: 100,
            SubscriptionPlan.AGENCY_STARTER: UNLIMITED,
            SubscriptionPlan.AGENCY_PRO: UNLIMITED,
            SubscriptionPlan.AGENCY_SCALE: UNLIMITED,
        }),
        roles=roles or RolePolicy(
            billing_admin_roles=frozenset({
                MemberRole.OWNER,
                MemberRole.AGENCY_OWNER,
                MemberRole.AGENCY_ADMIN,
                MemberRole.SUPER_ADMIN,
            }),
            provisioning_roles=frozenset({MemberRole.AGENCY_OWNER}),
        ),
        provisioning=provisioning or ProvisioningDefaults(),
    )


__all__ = [
    "UNLIMITED",
    "AGENCY_PLANS",
    "AddonSpec",
    "AddonCatalog",
    "QuotaPolicy",
    "RolePolicy",
    "ProvisioningDefaults",
    "AgencyPolicies",
    "default_addon_specs",
    "default_policies",
]
