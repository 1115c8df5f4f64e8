"""
Pure pricing of add-on selections.

Quantities are counted in the add-on's sale unit: ``extraStorageGB: 2``
means two 100GB blocks, so callers convert raw units before pricing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from agencyhub.domain.entities.tenant import Tenant
from agencyhub.domain.exceptions import ValidationError
from agencyhub.domain.policies import AddonCatalog

ELIGIBLE_REASON = "Tenant is eligible for add-ons"
INELIGIBLE_REASON = "Add-ons are only available for agency plans"


@dataclass(frozen=True)
class PriceLine:
    """One entry of a price breakdown."""

    addon: str
    quantity: int
    price_per_unit: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "addon": self.addon,
            "quantity": self.quantity,
            "pricePerUnit": self.price_per_unit,
            "total": self.total,
        }


@dataclass(frozen=True)
class Eligibility:
    eligible: bool
    reason: str


class AddonPricer:
    """Side-effect-free price calculations over an ``AddonCatalog``."""

    def __init__(self, catalog: AddonCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> AddonCatalog:
        return self._catalog

    def unit_price(self, addon_key: str) -> float:
        return self._require(addon_key).unit_price

    def sale_unit(self, addon_key: str) -> int:
        return self._require(addon_key).sale_unit

    def breakdown(self, selection: Mapping[str, Any]) -> List[PriceLine]:
        """Price lines in the iteration order of ``selection``.

        Unknown keys are skipped, zero quantities still produce a line.
        """
        lines: List[PriceLine] = []
        for key, quantity in selection.items():
            spec = self._catalog.get(key)
            if spec is None:
                continue
            count = int(quantity or 0)
            lines.append(PriceLine(
                addon=spec.key.value,
                quantity=count,
                price_per_unit=spec.unit_price,
                total=spec.unit_price * count,
            ))
        return lines

    def total_price(self, selection: Mapping[str, Any]) -> float:
        return sum((line.total for line in self.breakdown(selection)), 0.0)

    def check_eligibility(self, tenant: Tenant) -> Eligibility:
        if self._catalog.is_plan_eligible(tenant.subscription_plan):
            return Eligibility(eligible=True, reason=ELIGIBLE_REASON)
        return Eligibility(eligible=False, reason=INELIGIBLE_REASON)

    def _require(self, addon_key: str):
        spec = self._catalog.get(addon_key)
        if spec is None:
            raise ValidationError(f"Unknown add-on: {addon_key}", field="addon")
        return spec


__all__ = [
    "AddonPricer",
    "Eligibility",
    "PriceLine",
    "ELIGIBLE_REASON",
    "INELIGIBLE_REASON",
]
