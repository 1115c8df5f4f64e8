"""Maps classified domain errors to HTTP responses."""

from typing import Any, Dict

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from agencyhub.domain.exceptions import DomainException, ErrorKind

logger = structlog.get_logger(__name__)

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.RESOURCE_EXHAUSTED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_body(exc: DomainException) -> Dict[str, Any]:
    return {"error": exc.kind.value, "message": exc.message, **exc.details()}


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("Request failed", path=request.url.path, kind=exc.kind.value, error=exc.message)
    else:
        logger.info("Request rejected", path=request.url.path, kind=exc.kind.value, error=exc.message)
    return JSONResponse(status_code=status_code, content=error_body(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body") or None
    content: Dict[str, Any] = {
        "error": ErrorKind.INVALID_ARGUMENT.value,
        "message": first.get("msg", "Invalid request"),
    }
    if field:
        content["field"] = field
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


__all__ = ["STATUS_BY_KIND", "error_body", "register_exception_handlers"]
