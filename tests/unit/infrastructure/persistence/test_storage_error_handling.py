"""Tests for the storage error handling decorator."""

import asyncio

import pytest

from agencyhub.domain.exceptions import StorageError
from agencyhub.infrastructure.persistence.document_store import DocumentNotFoundError
from agencyhub.infrastructure.persistence.error_handling import handle_storage_errors


class SlowRepository:

    def __init__(self, timeout=None, delay=0.0):
        self.timeout = timeout
        self.delay = delay

    @handle_storage_errors(context={"repository": "slow"})
    async def fetch(self):
        await asyncio.sleep(self.delay)
        return "value"

    @handle_storage_errors()
    async def explode(self):
        raise KeyError("missing field")

    @handle_storage_errors()
    async def not_found(self):
        raise DocumentNotFoundError("Document not found: tenants/x")


class TestHandleStorageErrors:

    async def test_passes_result_through(self):
        assert await SlowRepository(timeout=1).fetch() == "value"

    async def test_timeout_becomes_storage_error(self):
        repository = SlowRepository(timeout=0.01, delay=1)

        with pytest.raises(StorageError) as exc_info:
            await repository.fetch()

        assert "timed out" in exc_info.value.message
        assert exc_info.value.context == {"repository": "slow"}

    async def test_unexpected_error_is_wrapped(self):
        with pytest.raises(StorageError) as exc_info:
            await SlowRepository().explode()

        assert isinstance(exc_info.value.original_error, KeyError)

    async def test_storage_errors_are_not_rewrapped(self):
        with pytest.raises(DocumentNotFoundError):
            await SlowRepository().not_found()
