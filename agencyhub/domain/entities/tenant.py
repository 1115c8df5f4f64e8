"""Pure domain representation of tenant aggregates."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from agencyhub.domain.entities.addon import AddonKey


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TenantKind(str, Enum):
    """Scope of a tenant account."""

    AGENCY = "agency"
    AGENCY_CLIENT = "agency_client"
    INDIVIDUAL = "individual"


class TenantStatus(str, Enum):
    """Tenant account status."""

    ACTIVE = "active"
    TRIAL = "trial"
    SUSPENDED = "suspended"
    EXPIRED = "expired"
    INACTIVE = "inactive"


class SubscriptionPlan(str, Enum):
    """Subscription plans known to the billing tables."""

    FREE = "free"
    HOBBY = "hobby"
    STARTER = "starter"
    INDIVIDUAL = "individual"
    PRO = "pro"
    AGENCY_STARTER = "agency_starter"
    AGENCY_PRO = "agency_pro"
    AGENCY_SCALE = "agency_scale"
    AGENCY = "agency"
    AGENCY_PLUS = "agency_plus"
    ENTERPRISE = "enterprise"

    @classmethod
    def parse(cls, raw: Any) -> Optional["SubscriptionPlan"]:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            return None


@dataclass
class TenantLimits:
    """Per-resource integer ceilings for a tenant."""

    max_projects: int = 0
    max_users: int = 0
    max_storage_gb: int = 0
    max_ai_credits: int = 0
    max_domains: int = 0
    max_leads: int = 0
    max_products: int = 0
    max_sub_clients: int = 0

    def copy(self) -> "TenantLimits":
        return TenantLimits(**{f.name: getattr(self, f.name) for f in fields(self)})


@dataclass
class TenantUsage:
    """Per-resource counters mirroring ``TenantLimits``."""

    projects: int = 0
    users: int = 0
    storage_gb: int = 0
    ai_credits: int = 0
    domains: int = 0
    leads: int = 0
    products: int = 0
    sub_clients: int = 0


@dataclass
class TenantBilling:
    """Billing entitlements and the external subscription reference."""

    addons: Dict[str, int] = field(default_factory=dict)
    addons_monthly_price: float = 0.0
    monthly_price: float = 0.0
    subscription_id: Optional[str] = None
    customer_id: Optional[str] = None
    billing_mode: Optional[str] = None
    status: Optional[str] = None

    def addon_quantity(self, key: AddonKey) -> int:
        return int(self.addons.get(key.value, 0) or 0)

    def has_external_subscription(self) -> bool:
        return bool(self.subscription_id)


@dataclass
class TenantBranding:
    """White-label branding for a tenant portal."""

    company_name: str = ""
    logo: str = ""
    primary_color: str = ""
    secondary_color: str = ""
    favicon: str = ""

    def is_configured(self) -> bool:
        return bool(self.logo or self.primary_color)


@dataclass
class TenantSettings:
    """Tenant configuration and preferences."""

    enabled_features: List[str] = field(default_factory=list)
    default_language: str = "es"
    portal_language: str = "es"
    auto_reports: Dict[str, Any] = field(default_factory=lambda: {
        "enabled": False,
        "frequency": "monthly",
        "recipients": [],
    })


@dataclass
class ContactInfo:
    """Primary contact for a tenant."""

    email: str = ""
    phone: str = ""


@dataclass
class Tenant:
    """Aggregate root representing an agency or one of its sub-clients."""

    id: str
    name: str
    kind: TenantKind
    status: TenantStatus
    subscription_plan: Union[SubscriptionPlan, str]
    slug: str = ""
    owner_tenant_id: Optional[str] = None
    owner_id: Optional[str] = None
    created_by: Optional[str] = None
    industry: str = ""
    limits: TenantLimits = field(default_factory=TenantLimits)
    usage: TenantUsage = field(default_factory=TenantUsage)
    billing: TenantBilling = field(default_factory=TenantBilling)
    branding: TenantBranding = field(default_factory=TenantBranding)
    settings: TenantSettings = field(default_factory=TenantSettings)
    contact: ContactInfo = field(default_factory=ContactInfo)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def plan_name(self) -> str:
        """Stored plan string; plans outside the enum are kept verbatim."""
        return getattr(self.subscription_plan, "value", self.subscription_plan)

    def is_sub_tenant(self) -> bool:
        """Sub-tenants are the only tenants carrying an owner tenant id."""
        return self.owner_tenant_id is not None

    def agency_ancestor_id(self) -> str:
        """Id of the agency this tenant reports its activity under."""
        return self.owner_tenant_id or self.id

    def is_directly_owned_by(self, actor_id: str) -> bool:
        return bool(actor_id) and actor_id in (self.owner_id, self.created_by)

    def counts_toward_quota(self, statuses: Iterable[TenantStatus]) -> bool:
        return self.status in set(statuses)

    def deactivate(self) -> None:
        """Tenants are never hard-deleted; they move to an inactive state."""
        self.status = TenantStatus.INACTIVE
        self.updated_at = utc_now()

    def suspend(self) -> None:
        self.status = TenantStatus.SUSPENDED
        self.updated_at = utc_now()

    def effective_limits(
        self,
        block_sizes: Dict[AddonKey, int],
        addons: Optional[Dict[str, int]] = None,
    ) -> TenantLimits:
        """Stored limits extended by purchased add-ons.

        ``block_sizes`` maps each add-on to the raw units one purchased
        quantity adds (1 for sub-clients, 100 for storage, 1000 for credits).
        ``addons`` overrides the stored selection, e.g. to preview a change.
        """
        selection = self.billing.addons if addons is None else addons

        def extension(key: AddonKey) -> int:
            return int(selection.get(key.value, 0) or 0) * block_sizes.get(key, 1)

        limits = self.limits.copy()
        limits.max_sub_clients += extension(AddonKey.EXTRA_SUB_CLIENTS)
        limits.max_storage_gb += extension(AddonKey.EXTRA_STORAGE_GB)
        limits.max_ai_credits += extension(AddonKey.EXTRA_AI_CREDITS)
        return limits


__all__ = [
    "utc_now",
    "Tenant",
    "TenantKind",
    "TenantStatus",
    "SubscriptionPlan",
    "TenantLimits",
    "TenantUsage",
    "TenantBilling",
    "TenantBranding",
    "TenantSettings",
    "ContactInfo",
]
