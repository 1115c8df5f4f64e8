"""Infrastructure provider accessors package."""

from .notification_provider import (  # noqa: F401
    get_notification_service,
    reset_notification_service,
)
from .payment_provider import (  # noqa: F401
    get_subscription_gateway,
    reset_subscription_gateway,
)
from .policy_provider import build_policies, get_policies, reset_policies  # noqa: F401
from .repository_provider import (  # noqa: F401
    get_activity_repository,
    get_invitation_repository,
    get_membership_repository,
    get_project_repository,
    get_tenant_repository,
    reset_repositories,
)
from .storage_provider import get_document_store, reset_document_store  # noqa: F401


async def reset_all_providers() -> None:
    """Drop every cached singleton; used on shutdown and between tests."""
    await reset_repositories()
    await reset_notification_service()
    await reset_subscription_gateway()
    await reset_policies()
    await reset_document_store()
