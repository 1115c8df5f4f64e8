"""Mapper between Tenant domain entities and tenant documents."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from agencyhub.domain.entities.tenant import (
    ContactInfo,
    SubscriptionPlan,
    Tenant,
    TenantBilling,
    TenantBranding,
    TenantKind,
    TenantLimits,
    TenantSettings,
    TenantStatus,
    TenantUsage,
    utc_now,
)

TENANTS_COLLECTION = "tenants"

_LIMIT_FIELDS = {
    "max_projects": "maxProjects",
    "max_users": "maxUsers",
    "max_storage_gb": "maxStorageGB",
    "max_ai_credits": "maxAiCredits",
    "max_domains": "maxDomains",
    "max_leads": "maxLeads",
    "max_products": "maxProducts",
    "max_sub_clients": "maxSubClients",
}

_USAGE_FIELDS = {
    "projects": "projects",
    "users": "users",
    "storage_gb": "storageUsed",
    "ai_credits": "aiCreditsUsed",
    "domains": "domains",
    "leads": "leads",
    "products": "products",
    "sub_clients": "subClients",
}


def usage_path(resource: str) -> str:
    """Dotted document path of a usage counter, by domain field name."""
    return f"usage.{_USAGE_FIELDS.get(resource, resource)}"


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return utc_now()


def _enum_or_raw(enum_cls, raw: Any, default):
    if raw is None:
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        return raw


class TenantMapper:
    """Maps between Tenant domain entities and camelCase tenant documents."""

    @staticmethod
    def to_domain(doc_id: str, data: Dict[str, Any]) -> Tenant:
        limits_data = data.get("limits") or {}
        usage_data = data.get("usage") or {}
        billing_data = data.get("billing") or {}
        branding_data = data.get("branding") or {}
        settings_data = data.get("settings") or {}
        contact_data = data.get("contactInfo") or {}

        limits = TenantLimits(**{
            attr: int(limits_data.get(key, 0) or 0) for attr, key in _LIMIT_FIELDS.items()
        })
        usage = TenantUsage(**{
            attr: int(usage_data.get(key, 0) or 0) for attr, key in _USAGE_FIELDS.items()
        })
        billing = TenantBilling(
            addons={key: int(value or 0) for key, value in (billing_data.get("addons") or {}).items()},
            addons_monthly_price=float(billing_data.get("addonsMonthlyPrice", 0) or 0),
            monthly_price=float(billing_data.get("monthlyPrice", 0) or 0),
            subscription_id=billing_data.get("stripeSubscriptionId"),
            customer_id=billing_data.get("stripeCustomerId"),
            billing_mode=billing_data.get("billingMode"),
            status=billing_data.get("status"),
        )
        branding = TenantBranding(
            company_name=branding_data.get("companyName", ""),
            logo=branding_data.get("logo", ""),
            primary_color=branding_data.get("primaryColor", ""),
            secondary_color=branding_data.get("secondaryColor", ""),
            favicon=branding_data.get("favicon", ""),
        )
        settings = TenantSettings(
            enabled_features=list(settings_data.get("enabledFeatures", [])),
            default_language=settings_data.get("defaultLanguage", "es"),
            portal_language=settings_data.get("portalLanguage", "es"),
            auto_reports=dict(settings_data.get("autoReports") or TenantSettings().auto_reports),
        )

        return Tenant(
            id=doc_id,
            name=data.get("name", ""),
            kind=_enum_or_raw(TenantKind, data.get("type"), TenantKind.INDIVIDUAL),
            status=_enum_or_raw(TenantStatus, data.get("status"), TenantStatus.ACTIVE),
            subscription_plan=_enum_or_raw(SubscriptionPlan, data.get("subscriptionPlan"), SubscriptionPlan.FREE),
            slug=data.get("slug", ""),
            owner_tenant_id=data.get("ownerTenantId"),
            owner_id=data.get("ownerUserId"),
            created_by=data.get("createdBy"),
            industry=data.get("industry", ""),
            limits=limits,
            usage=usage,
            billing=billing,
            branding=branding,
            settings=settings,
            contact=ContactInfo(email=contact_data.get("email", ""), phone=contact_data.get("phone", "")),
            created_at=_parse_datetime(data.get("createdAt")),
            updated_at=_parse_datetime(data.get("updatedAt")),
        )

    @staticmethod
    def to_document(tenant: Tenant) -> Dict[str, Any]:
        document: Dict[str, Any] = {
            "name": tenant.name,
            "slug": tenant.slug,
            "type": getattr(tenant.kind, "value", tenant.kind),
            "ownerTenantId": tenant.owner_tenant_id,
            "ownerUserId": tenant.owner_id,
            "subscriptionPlan": tenant.plan_name,
            "status": getattr(tenant.status, "value", tenant.status),
            "industry": tenant.industry,
            "branding": {
                "companyName": tenant.branding.company_name,
                "logo": tenant.branding.logo,
                "primaryColor": tenant.branding.primary_color,
                "secondaryColor": tenant.branding.secondary_color,
                "favicon": tenant.branding.favicon,
            },
            "settings": {
                "enabledFeatures": list(tenant.settings.enabled_features),
                "defaultLanguage": tenant.settings.default_language,
                "portalLanguage": tenant.settings.portal_language,
                "autoReports": dict(tenant.settings.auto_reports),
            },
            "contactInfo": {"email": tenant.contact.email, "phone": tenant.contact.phone},
            "usage": {key: getattr(tenant.usage, attr) for attr, key in _USAGE_FIELDS.items()},
            "limits": {key: getattr(tenant.limits, attr) for attr, key in _LIMIT_FIELDS.items()},
            "billing": TenantMapper.billing_to_document(tenant.billing),
            "createdAt": tenant.created_at.isoformat(),
            "createdBy": tenant.created_by,
            "updatedAt": tenant.updated_at.isoformat(),
        }
        return document

    @staticmethod
    def billing_to_document(billing: TenantBilling) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "addons": dict(billing.addons),
            "addonsMonthlyPrice": billing.addons_monthly_price,
            "monthlyPrice": billing.monthly_price,
        }
        optional: Dict[str, Optional[str]] = {
            "stripeSubscriptionId": billing.subscription_id,
            "stripeCustomerId": billing.customer_id,
            "billingMode": billing.billing_mode,
            "status": billing.status,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data


__all__ = ["TenantMapper", "TENANTS_COLLECTION", "usage_path"]
