"""Domain-layer service interfaces.

These abstractions define the stable contracts that the application layer relies on,
while infrastructure adapters provide concrete implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class IHealthCheck:
    """Health check interface mixin."""

    @abstractmethod
    async def check_health(self) -> Dict[str, Any]:
        """Return health check details."""
        pass


@dataclass(frozen=True)
class SubscriptionItem:
    """A line item currently on an external subscription."""

    id: str
    price_id: Optional[str]
    product_id: Optional[str]
    quantity: int = 1


@dataclass(frozen=True)
class SubscriptionSnapshot:
    """Read model of an external subscription; the first item is usually the base plan."""

    id: str
    items: List[SubscriptionItem] = field(default_factory=list)
    status: str = "active"

    @property
    def base_item(self) -> Optional[SubscriptionItem]:
        return self.items[0] if self.items else None


@dataclass(frozen=True)
class LineItemChange:
    """One entry of a subscription item rewrite.

    Exactly one shape applies: keep an existing item (``item_id`` and
    ``price_id``), delete one (``item_id`` and ``deleted``), or add a new
    recurring monthly item priced inline (``product_id``, ``unit_amount``
    in minor currency units and ``quantity``).
    """

    item_id: Optional[str] = None
    price_id: Optional[str] = None
    deleted: bool = False
    product_id: Optional[str] = None
    unit_amount: Optional[int] = None
    quantity: Optional[int] = None
    currency: str = "usd"
    interval: str = "month"

    @classmethod
    def keep(cls, item: SubscriptionItem) -> "LineItemChange":
        return cls(item_id=item.id, price_id=item.price_id)

    @classmethod
    def remove(cls, item: SubscriptionItem) -> "LineItemChange":
        return cls(item_id=item.id, deleted=True)

    @classmethod
    def add_monthly(cls, product_id: str, unit_amount: int, quantity: int, currency: str) -> "LineItemChange":
        return cls(product_id=product_id, unit_amount=unit_amount, quantity=quantity, currency=currency)


class ISubscriptionGateway(IHealthCheck, ABC):
    """Payment processor subscription read/update capability."""

    @abstractmethod
    async def get_subscription(self, subscription_id: str) -> SubscriptionSnapshot:
        """Fetch the current line items of a subscription."""
        pass

    @abstractmethod
    async def replace_items(
        self,
        subscription_id: str,
        items: List[LineItemChange],
        proration_behavior: str,
    ) -> SubscriptionSnapshot:
        """Rewrite the subscription items, charging only the prorated delta."""
        pass


class INotificationService(IHealthCheck, ABC):
    """Notification dispatch interface."""

    @abstractmethod
    async def send_client_welcome(
        self,
        to: str,
        user_name: str,
        client_name: str,
        agency_name: str,
        invite_link: str,
    ) -> bool:
        """Queue the welcome email sent to a newly invited client user."""
        pass


__all__ = [
    "IHealthCheck",
    "SubscriptionItem",
    "SubscriptionSnapshot",
    "LineItemChange",
    "ISubscriptionGateway",
    "INotificationService",
]
