"""Subscription gateway provider."""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from agencyhub.core.config import get_settings
from agencyhub.domain.interfaces import ISubscriptionGateway
from agencyhub.infrastructure.adapters.local_subscription_gateway import LocalSubscriptionGateway
from agencyhub.infrastructure.adapters.stripe_subscription_gateway import StripeSubscriptionGateway

logger = structlog.get_logger(__name__)

_subscription_gateway: Optional[ISubscriptionGateway] = None
_lock = asyncio.Lock()


async def get_subscription_gateway() -> ISubscriptionGateway:
    global _subscription_gateway

    if _subscription_gateway is not None:
        return _subscription_gateway

    async with _lock:
        if _subscription_gateway is not None:
            return _subscription_gateway

        settings = get_settings()
        if settings.is_stripe_configured():
            _subscription_gateway = StripeSubscriptionGateway(
                api_key=settings.STRIPE_SECRET_KEY,
                api_version=settings.STRIPE_API_VERSION,
                timeout=settings.PAYMENT_TIMEOUT_SECONDS,
            )
        else:
            _subscription_gateway = LocalSubscriptionGateway()

        logger.info("Subscription gateway ready", gateway=type(_subscription_gateway).__name__)
        return _subscription_gateway


async def reset_subscription_gateway() -> None:
    global _subscription_gateway
    async with _lock:
        _subscription_gateway = None


__all__ = ["get_subscription_gateway", "reset_subscription_gateway"]
