"""Builds the immutable policy tables from settings, once per process."""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from agencyhub.core.config import Settings, get_settings
from agencyhub.domain.entities.addon import AddonKey
from agencyhub.domain.policies import (
    AGENCY_PLANS,
    AddonCatalog,
    AgencyPolicies,
    ProvisioningDefaults,
    default_addon_specs,
    default_policies,
)

logger = structlog.get_logger(__name__)

_policies: Optional[AgencyPolicies] = None
_lock = asyncio.Lock()


def build_policies(settings: Settings) -> AgencyPolicies:
    """Production tables with the configurable parts taken from settings."""
    catalog = AddonCatalog(
        specs=default_addon_specs({
            AddonKey.EXTRA_SUB_CLIENTS: settings.ADDON_PRODUCT_EXTRA_SUB_CLIENTS,
            AddonKey.EXTRA_STORAGE_GB: settings.ADDON_PRODUCT_EXTRA_STORAGE,
            AddonKey.EXTRA_AI_CREDITS: settings.ADDON_PRODUCT_EXTRA_AI_CREDITS,
        }),
        eligible_plans=AGENCY_PLANS,
        currency=settings.BILLING_CURRENCY,
        proration_behavior=settings.PRORATION_BEHAVIOR,
    )
    provisioning = ProvisioningDefaults(
        primary_color=settings.DEFAULT_PRIMARY_COLOR,
        secondary_color=settings.DEFAULT_SECONDARY_COLOR,
        language=settings.DEFAULT_LANGUAGE,
        invitation_ttl_days=settings.INVITATION_TTL_DAYS,
        invitation_token_bytes=settings.INVITATION_TOKEN_BYTES,
        base_url=settings.BASE_URL,
    )
    return default_policies(catalog=catalog, provisioning=provisioning)


async def get_policies() -> AgencyPolicies:
    global _policies

    if _policies is not None:
        return _policies

    async with _lock:
        if _policies is not None:
            return _policies

        _policies = build_policies(get_settings())
        logger.info(
            "Policy tables built",
            addons=[spec.key.value for spec in _policies.catalog.specs],
            currency=_policies.catalog.currency,
        )
        return _policies


async def reset_policies() -> None:
    global _policies
    async with _lock:
        _policies = None


__all__ = ["build_policies", "get_policies", "reset_policies"]
