"""Pytest fixtures for provider-based architecture."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from agencyhub.core.config import get_settings
from agencyhub.infrastructure.providers import reset_all_providers
from tests.fixtures.tenant_fixtures import (  # noqa: F401
    agency_world,
    document_store,
    policies,
    repositories,
)


@pytest.fixture(autouse=True)
async def reset_provider_state() -> AsyncIterator[None]:
    """Ensure each test starts with clean provider singletons."""
    get_settings.cache_clear()
    await reset_all_providers()
    yield
    await reset_all_providers()
    get_settings.cache_clear()
