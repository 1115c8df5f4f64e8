"""
In-memory document store.

Collections hold JSON-like dict documents keyed by id. Every public method
is one atomic single-document read or write, or a simple filtered query;
nothing spans documents, so callers never hold a lock across operations.
"""

import asyncio
import copy
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import uuid4

import structlog

from agencyhub.domain.exceptions import StorageError

logger = structlog.get_logger(__name__)

Filter = Tuple[str, str, Any]

_MISSING = object()


class DocumentNotFoundError(StorageError):
    """Raised when an update targets a document that does not exist."""
    pass


class DocumentExistsError(StorageError):
    """Raised when a create targets an id that is already taken."""
    pass


def _read_path(document: Dict[str, Any], path: str) -> Any:
    current: Any = document
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _write_path(document: Dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    current = document
    for part in parts[:-1]:
        nested = current.get(part)
        if not isinstance(nested, dict):
            nested = {}
            current[part] = nested
        current = nested
    current[parts[-1]] = value


def _matches(document: Dict[str, Any], filters: Iterable[Filter]) -> bool:
    for path, op, expected in filters:
        value = _read_path(document, path)
        if op == "==":
            if value is _MISSING or value != expected:
                return False
        elif op == "in":
            if value is _MISSING or value not in expected:
                return False
        else:
            raise ValueError(f"Unsupported filter operator: {op}")
    return True


class InMemoryDocumentStore:
    """Async document store for local development and tests."""

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = asyncio.Lock()
        self._stats = {"reads": 0, "writes": 0, "queries": 0}

    async def check_health(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "service": "InMemoryDocumentStore",
            "collections": {name: len(docs) for name, docs in self._collections.items()},
            "stats": self._stats.copy(),
        }

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(name, {})

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        async with self._lock:
            self._stats["reads"] += 1
            document = self._collection(collection).get(doc_id)
            return copy.deepcopy(document) if document is not None else None

    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        """Insert under a generated id and return it."""
        doc_id = uuid4().hex
        await self.create(collection, doc_id, data)
        return doc_id

    async def create(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        async with self._lock:
            documents = self._collection(collection)
            if doc_id in documents:
                raise DocumentExistsError(
                    f"Document already exists: {collection}/{doc_id}",
                    context={"collection": collection, "doc_id": doc_id},
                )
            documents[doc_id] = copy.deepcopy(data)
            self._stats["writes"] += 1
            logger.debug("Document created", collection=collection, doc_id=doc_id)

    async def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        async with self._lock:
            self._collection(collection)[doc_id] = copy.deepcopy(data)
            self._stats["writes"] += 1

    async def update(self, collection: str, doc_id: str, updates: Dict[str, Any]) -> None:
        """Apply dotted-path field updates to one existing document."""
        async with self._lock:
            document = self._collection(collection).get(doc_id)
            if document is None:
                raise DocumentNotFoundError(
                    f"Document not found: {collection}/{doc_id}",
                    context={"collection": collection, "doc_id": doc_id},
                )
            for path, value in updates.items():
                _write_path(document, path, copy.deepcopy(value))
            self._stats["writes"] += 1

    async def increment(self, collection: str, doc_id: str, path: str, delta: int = 1) -> int:
        """Atomic read-modify-write of a numeric field; returns the new value."""
        async with self._lock:
            document = self._collection(collection).get(doc_id)
            if document is None:
                raise DocumentNotFoundError(
                    f"Document not found: {collection}/{doc_id}",
                    context={"collection": collection, "doc_id": doc_id},
                )
            current = _read_path(document, path)
            new_value = (0 if current is _MISSING or current is None else current) + delta
            _write_path(document, path, new_value)
            self._stats["writes"] += 1
            return new_value

    async def query(
        self,
        collection: str,
        filters: Iterable[Filter] = (),
        limit: Optional[int] = None,
    ) -> List[Tuple[str, Dict[str, Any]]]:
        """Matching ``(id, document)`` pairs in insertion order; ``limit`` keeps the most recent."""
        filters = list(filters)
        async with self._lock:
            self._stats["queries"] += 1
            results: List[Tuple[str, Dict[str, Any]]] = []
            for doc_id, document in self._collection(collection).items():
                if _matches(document, filters):
                    results.append((doc_id, copy.deepcopy(document)))
            if limit is not None:
                results = results[-limit:] if limit > 0 else []
            return results

    async def count(self, collection: str, filters: Iterable[Filter] = ()) -> int:
        filters = list(filters)
        async with self._lock:
            self._stats["queries"] += 1
            return sum(1 for document in self._collection(collection).values() if _matches(document, filters))

    async def clear(self) -> None:
        async with self._lock:
            self._collections.clear()


__all__ = [
    "InMemoryDocumentStore",
    "DocumentNotFoundError",
    "DocumentExistsError",
]
