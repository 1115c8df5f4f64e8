"""In-process subscription gateway for local development and tests."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional
from uuid import uuid4

import structlog

from agencyhub.domain.exceptions import PaymentGatewayError
from agencyhub.domain.interfaces import (
    ISubscriptionGateway,
    LineItemChange,
    SubscriptionItem,
    SubscriptionSnapshot,
)

logger = structlog.get_logger(__name__)


class LocalSubscriptionGateway(ISubscriptionGateway):
    """Keeps subscriptions in memory and applies item rewrites like the processor does."""

    def __init__(self) -> None:
        self._subscriptions: Dict[str, List[SubscriptionItem]] = {}
        self._lock = asyncio.Lock()
        self._updates = 0

    async def check_health(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "service": "LocalSubscriptionGateway",
            "subscriptions": len(self._subscriptions),
            "updates": self._updates,
        }

    async def seed(
        self,
        subscription_id: str,
        base_price_id: str,
        base_product_id: Optional[str] = None,
    ) -> SubscriptionSnapshot:
        """Register a subscription holding only its base plan item."""
        async with self._lock:
            self._subscriptions[subscription_id] = [
                SubscriptionItem(id=f"si_{uuid4().hex[:14]}", price_id=base_price_id, product_id=base_product_id)
            ]
            return SubscriptionSnapshot(id=subscription_id, items=list(self._subscriptions[subscription_id]))

    async def get_subscription(self, subscription_id: str) -> SubscriptionSnapshot:
        async with self._lock:
            items = self._subscriptions.get(subscription_id)
            if items is None:
                raise PaymentGatewayError(
                    f"No such subscription: '{subscription_id}'",
                    context={"operation": "retrieve_subscription"},
                )
            return SubscriptionSnapshot(id=subscription_id, items=list(items))

    async def replace_items(
        self,
        subscription_id: str,
        items: List[LineItemChange],
        proration_behavior: str,
    ) -> SubscriptionSnapshot:
        async with self._lock:
            current = self._subscriptions.get(subscription_id)
            if current is None:
                raise PaymentGatewayError(
                    f"No such subscription: '{subscription_id}'",
                    context={"operation": "modify_subscription"},
                )
            by_id = {item.id: item for item in current}
            deleted = {change.item_id for change in items if change.deleted}
            # Items not mentioned in the rewrite stay on the subscription.
            result = [item for item in current if item.id not in deleted]
            for change in items:
                if change.deleted or change.item_id in by_id:
                    continue
                result.append(SubscriptionItem(
                    id=f"si_{uuid4().hex[:14]}",
                    price_id=f"price_{uuid4().hex[:14]}",
                    product_id=change.product_id,
                    quantity=change.quantity or 1,
                ))
            self._subscriptions[subscription_id] = result
            self._updates += 1

        logger.info(
            "Local subscription items replaced",
            subscription_id=subscription_id,
            item_count=len(result),
            proration_behavior=proration_behavior,
        )
        return SubscriptionSnapshot(id=subscription_id, items=list(result))


__all__ = ["LocalSubscriptionGateway"]
