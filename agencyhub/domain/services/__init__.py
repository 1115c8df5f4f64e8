"""Pure domain services."""

from agencyhub.domain.services.access_verifier import AccessVerifier
from agencyhub.domain.services.addon_pricer import AddonPricer, Eligibility, PriceLine
from agencyhub.domain.services.quota_guard import QuotaDecision, QuotaGuard

__all__ = [
    "AccessVerifier",
    "AddonPricer",
    "Eligibility",
    "PriceLine",
    "QuotaDecision",
    "QuotaGuard",
]
