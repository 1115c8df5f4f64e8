"""Translation of collaborator failures into classified domain errors."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

import structlog

from agencyhub.domain.exceptions import CollaboratorError, InternalError

logger = structlog.get_logger(__name__)


@contextmanager
def collaborator_failures(operation: str, **context: Any) -> Iterator[None]:
    """Re-raise any ``CollaboratorError`` as ``InternalError``.

    The full error is logged; the caller only sees a short description and
    the upstream message.
    """
    try:
        yield
    except CollaboratorError as exc:
        logger.error(
            "Collaborator failure",
            operation=operation,
            error_type=type(exc).__name__,
            error=exc.message,
            collaborator_context=exc.context,
            exc_info=True,
            **context,
        )
        raise InternalError(f"Failed to {operation}", upstream_message=exc.message) from exc


__all__ = ["collaborator_failures"]
