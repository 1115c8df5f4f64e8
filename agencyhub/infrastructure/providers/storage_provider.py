"""Document store provider."""

from __future__ import annotations

import asyncio
from typing import Optional

from agencyhub.infrastructure.persistence.document_store import InMemoryDocumentStore

_document_store: Optional[InMemoryDocumentStore] = None
_lock = asyncio.Lock()


async def get_document_store() -> InMemoryDocumentStore:
    global _document_store

    if _document_store is not None:
        return _document_store

    async with _lock:
        if _document_store is not None:
            return _document_store

        _document_store = InMemoryDocumentStore()
        return _document_store


async def reset_document_store() -> None:
    global _document_store
    async with _lock:
        _document_store = None


__all__ = ["get_document_store", "reset_document_store"]
