"""Add-on keys and parsing of add-on selections."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from agencyhub.domain.exceptions import ValidationError


class AddonKey(str, Enum):
    """Closed set of purchasable add-ons."""

    EXTRA_SUB_CLIENTS = "extraSubClients"
    EXTRA_STORAGE_GB = "extraStorageGB"
    EXTRA_AI_CREDITS = "extraAiCredits"

    @classmethod
    def parse(cls, raw: str) -> Optional["AddonKey"]:
        try:
            return cls(raw)
        except ValueError:
            return None


def parse_addon_selection(raw: Any, *, reject_unknown: bool = True) -> Dict[str, int]:
    """Validate an add-on selection payload.

    Quantities must be non-negative integers counted in the add-on's sale
    unit. Unknown keys raise when ``reject_unknown`` is set and are dropped
    otherwise. Input order is preserved.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError("Add-on selection must be a mapping of add-on key to quantity", field="addons")

    selection: Dict[str, int] = {}
    for key, quantity in raw.items():
        if AddonKey.parse(key) is None:
            if reject_unknown:
                raise ValidationError(f"Unknown add-on: {key}", field="addons")
            continue
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError(f"Quantity for {key} must be an integer", field="addons")
        if quantity < 0:
            raise ValidationError(f"Quantity for {key} cannot be negative", field="addons")
        selection[key] = quantity
    return selection


__all__ = ["AddonKey", "parse_addon_selection"]
