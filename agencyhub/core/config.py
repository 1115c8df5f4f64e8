"""
Configuration management for the agency provisioning and billing service.

This module provides centralized configuration management supporting:
- Environment variables and an optional .env file
- Payment processor selection (local in-memory or Stripe)
- Timeouts for every external collaborator call
- Branding and invitation defaults used while provisioning sub-clients
"""

from functools import lru_cache
from typing import Optional

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)


class Settings(BaseSettings):
    """
    Main application settings with defaults suitable for local development.
    """

    # Environment Detection
    ENVIRONMENT: str = Field(
        default="local",
        description="Environment (local/development/staging/production)"
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Minimum structured log level"
    )

    # Core Application Settings
    APP_NAME: str = Field(
        default="Agency Hub",
        description="Application name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version"
    )
    BASE_URL: str = Field(
        default="https://quimera.ai",
        description="Public base URL used to build invitation links"
    )

    # Invitations
    INVITATION_TTL_DAYS: int = Field(
        default=7,
        description="Days a pending invitation remains valid"
    )
    INVITATION_TOKEN_BYTES: int = Field(
        default=24,
        description="Random bytes mixed into each invitation token"
    )

    # Payment Processor
    PAYMENT_PROVIDER: str = Field(
        default="local",
        description="Subscription gateway implementation (local/stripe)"
    )
    STRIPE_SECRET_KEY: Optional[str] = Field(
        default=None,
        description="Stripe secret key (sk_...)"
    )
    STRIPE_API_VERSION: str = Field(
        default="2023-10-16",
        description="Pinned Stripe API version"
    )
    BILLING_CURRENCY: str = Field(
        default="usd",
        description="Currency for synthesized add-on line items"
    )
    PRORATION_BEHAVIOR: str = Field(
        default="always_invoice",
        description="Proration behavior used when subscription items change"
    )
    ADDON_PRODUCT_EXTRA_SUB_CLIENTS: str = Field(
        default="addon_extra_subclients",
        description="Payment product id for the extra sub-clients add-on"
    )
    ADDON_PRODUCT_EXTRA_STORAGE: str = Field(
        default="addon_extra_storage",
        description="Payment product id for the extra storage add-on"
    )
    ADDON_PRODUCT_EXTRA_AI_CREDITS: str = Field(
        default="addon_extra_ai_credits",
        description="Payment product id for the extra AI credits add-on"
    )

    # Timeouts
    PAYMENT_TIMEOUT_SECONDS: float = Field(
        default=15.0,
        description="Timeout for payment processor calls"
    )
    STORAGE_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        description="Timeout for document store calls"
    )

    # Sub-client defaults
    DEFAULT_PRIMARY_COLOR: str = Field(
        default="#3B82F6",
        description="Primary brand color applied when intake omits one"
    )
    DEFAULT_SECONDARY_COLOR: str = Field(
        default="#10B981",
        description="Secondary brand color applied when intake omits one"
    )
    DEFAULT_LANGUAGE: str = Field(
        default="es",
        description="Default and portal language for new sub-clients"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate and normalize environment name."""
        v = v.lower()
        if v not in ('local', 'development', 'staging', 'production'):
            logger.warning(f"Unknown environment: {v}, defaulting to 'local'")
            return 'local'
        return v

    @field_validator('PAYMENT_PROVIDER')
    @classmethod
    def validate_payment_provider(cls, v: str) -> str:
        v = v.lower()
        if v not in ('local', 'stripe'):
            raise ValueError("PAYMENT_PROVIDER must be 'local' or 'stripe'")
        return v

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == 'production'

    def is_stripe_configured(self) -> bool:
        """Check if the Stripe gateway can be used."""
        return self.PAYMENT_PROVIDER == "stripe" and bool(self.STRIPE_SECRET_KEY)


@lru_cache()
def get_settings() -> Settings:
    """Load, validate and cache the application settings."""
    settings = Settings()

    if settings.PAYMENT_PROVIDER == "stripe" and not settings.STRIPE_SECRET_KEY:
        raise ValueError("STRIPE_SECRET_KEY must be configured when PAYMENT_PROVIDER=stripe")

    logger.info(
        "Configuration ready",
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
        payment_provider=settings.PAYMENT_PROVIDER,
        stripe_configured=settings.is_stripe_configured(),
    )
    return settings


__all__ = ["Settings", "get_settings"]
