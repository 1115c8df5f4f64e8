"""Repository provider utilities."""

from __future__ import annotations

import asyncio

from agencyhub.core.config import get_settings
from agencyhub.domain.repositories import (
    IActivityRepository,
    IInvitationRepository,
    IMembershipRepository,
    IProjectRepository,
    ITenantRepository,
)
from agencyhub.infrastructure.persistence.repositories import (
    DocumentActivityRepository,
    DocumentInvitationRepository,
    DocumentMembershipRepository,
    DocumentProjectRepository,
    DocumentTenantRepository,
)
from agencyhub.infrastructure.providers.storage_provider import get_document_store

_tenant_repository: ITenantRepository | None = None
_membership_repository: IMembershipRepository | None = None
_project_repository: IProjectRepository | None = None
_invitation_repository: IInvitationRepository | None = None
_activity_repository: IActivityRepository | None = None

_tenant_lock = asyncio.Lock()
_membership_lock = asyncio.Lock()
_project_lock = asyncio.Lock()
_invitation_lock = asyncio.Lock()
_activity_lock = asyncio.Lock()


async def get_tenant_repository() -> ITenantRepository:
    global _tenant_repository
    if _tenant_repository is not None:
        return _tenant_repository

    async with _tenant_lock:
        if _tenant_repository is None:
            store = await get_document_store()
            _tenant_repository = DocumentTenantRepository(store, timeout=get_settings().STORAGE_TIMEOUT_SECONDS)
        return _tenant_repository


async def get_membership_repository() -> IMembershipRepository:
    global _membership_repository
    if _membership_repository is not None:
        return _membership_repository

    async with _membership_lock:
        if _membership_repository is None:
            store = await get_document_store()
            _membership_repository = DocumentMembershipRepository(store, timeout=get_settings().STORAGE_TIMEOUT_SECONDS)
        return _membership_repository


async def get_project_repository() -> IProjectRepository:
    global _project_repository
    if _project_repository is not None:
        return _project_repository

    async with _project_lock:
        if _project_repository is None:
            store = await get_document_store()
            _project_repository = DocumentProjectRepository(store, timeout=get_settings().STORAGE_TIMEOUT_SECONDS)
        return _project_repository


async def get_invitation_repository() -> IInvitationRepository:
    global _invitation_repository
    if _invitation_repository is not None:
        return _invitation_repository

    async with _invitation_lock:
        if _invitation_repository is None:
            store = await get_document_store()
            _invitation_repository = DocumentInvitationRepository(store, timeout=get_settings().STORAGE_TIMEOUT_SECONDS)
        return _invitation_repository


async def get_activity_repository() -> IActivityRepository:
    global _activity_repository
    if _activity_repository is not None:
        return _activity_repository

    async with _activity_lock:
        if _activity_repository is None:
            store = await get_document_store()
            _activity_repository = DocumentActivityRepository(store, timeout=get_settings().STORAGE_TIMEOUT_SECONDS)
        return _activity_repository


async def reset_repositories() -> None:
    global _tenant_repository, _membership_repository, _project_repository
    global _invitation_repository, _activity_repository
    _tenant_repository = None
    _membership_repository = None
    _project_repository = None
    _invitation_repository = None
    _activity_repository = None


__all__ = [
    "get_tenant_repository",
    "get_membership_repository",
    "get_project_repository",
    "get_invitation_repository",
    "get_activity_repository",
    "reset_repositories",
]
