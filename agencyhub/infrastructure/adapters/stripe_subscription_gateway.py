"""
Stripe-backed subscription gateway.

The Stripe SDK is synchronous, so each call runs in a worker thread and is
bounded by ``asyncio.wait_for``. Timeouts and Stripe errors both surface as
``PaymentGatewayError``; nothing is retried here.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import stripe
import structlog

from agencyhub.domain.exceptions import PaymentGatewayError
from agencyhub.domain.interfaces import (
    ISubscriptionGateway,
    LineItemChange,
    SubscriptionItem,
    SubscriptionSnapshot,
)

logger = structlog.get_logger(__name__)


def _snapshot_from_stripe(subscription: Any) -> SubscriptionSnapshot:
    items: List[SubscriptionItem] = []
    for item in subscription["items"]["data"]:
        price = item.get("price") or {}
        items.append(SubscriptionItem(
            id=item["id"],
            price_id=price.get("id"),
            product_id=price.get("product"),
            quantity=item.get("quantity") or 1,
        ))
    return SubscriptionSnapshot(
        id=subscription["id"],
        items=items,
        status=subscription.get("status") or "active",
    )


def _item_payload(change: LineItemChange) -> Dict[str, Any]:
    if change.deleted:
        return {"id": change.item_id, "deleted": True}
    if change.item_id:
        return {"id": change.item_id, "price": change.price_id}
    return {
        "price_data": {
            "currency": change.currency,
            "product": change.product_id,
            "unit_amount": change.unit_amount,
            "recurring": {"interval": change.interval},
        },
        "quantity": change.quantity,
    }


class StripeSubscriptionGateway(ISubscriptionGateway):
    """Reads and rewrites subscription items through the Stripe API."""

    def __init__(
        self,
        api_key: str,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._api_key = api_key
        self._api_version = api_version
        self.timeout = timeout

    async def check_health(self) -> Dict[str, Any]:
        return {
            "status": "healthy" if self._api_key else "unconfigured",
            "service": "StripeSubscriptionGateway",
            "api_version": self._api_version,
        }

    def _request_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"api_key": self._api_key}
        if self._api_version:
            options["stripe_version"] = self._api_version
        return options

    async def _call(self, operation: str, func, *args, **kwargs):
        try:
            return await asyncio.wait_for(asyncio.to_thread(func, *args, **kwargs), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error("Stripe call timed out", operation=operation, timeout=self.timeout)
            raise PaymentGatewayError(
                f"Payment processor timed out during {operation}",
                original_error=e,
                context={"operation": operation},
            )
        except stripe.StripeError as e:
            logger.error(
                "Stripe call failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise PaymentGatewayError(
                e.user_message or str(e),
                original_error=e,
                context={"operation": operation},
            )

    async def get_subscription(self, subscription_id: str) -> SubscriptionSnapshot:
        subscription = await self._call(
            "retrieve_subscription",
            stripe.Subscription.retrieve,
            subscription_id,
            **self._request_options(),
        )
        return _snapshot_from_stripe(subscription)

    async def replace_items(
        self,
        subscription_id: str,
        items: List[LineItemChange],
        proration_behavior: str,
    ) -> SubscriptionSnapshot:
        subscription = await self._call(
            "modify_subscription",
            stripe.Subscription.modify,
            subscription_id,
            items=[_item_payload(change) for change in items],
            proration_behavior=proration_behavior,
            **self._request_options(),
        )
        logger.info(
            "Stripe subscription items replaced",
            subscription_id=subscription_id,
            item_count=len(items),
            proration_behavior=proration_behavior,
        )
        return _snapshot_from_stripe(subscription)


__all__ = ["StripeSubscriptionGateway"]
