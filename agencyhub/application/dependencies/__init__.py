"""Dependency containers for application services."""

from .activity_dependencies import ActivityDependencies
from .billing_dependencies import BillingDependencies
from .provisioning_dependencies import ProvisioningDependencies

__all__ = [
    "ActivityDependencies",
    "BillingDependencies",
    "ProvisioningDependencies",
]
