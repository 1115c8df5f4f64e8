"""
FastAPI application for agency sub-client provisioning and add-on billing.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from agencyhub.api import api_router
from agencyhub.api.errors import register_exception_handlers
from agencyhub.core.config import get_settings
from agencyhub.core.logging import configure_logging
from agencyhub.infrastructure.providers import (
    get_document_store,
    get_policies,
    get_subscription_gateway,
    reset_all_providers,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info("Starting Agency Hub API", version=app.version)

    # Pre-warm provider singletons so configuration errors surface at startup
    await get_policies()
    store = await get_document_store()
    gateway = await get_subscription_gateway()

    store_health = await store.check_health()
    gateway_health = await gateway.check_health()
    logger.info(
        "Services initialized",
        store_status=store_health["status"],
        gateway=gateway_health["service"],
        gateway_status=gateway_health["status"],
    )

    yield

    logger.info("Shutting down Agency Hub API")
    await reset_all_providers()


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Agency sub-client provisioning, quotas and add-on billing",
        version=settings.APP_VERSION,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        openapi_url="/openapi.json" if not settings.is_production() else None,
        lifespan=lifespan,
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        """Basic health check endpoint"""
        return {
            "status": "healthy",
            "version": app.version,
            "environment": settings.ENVIRONMENT,
        }

    return app


app = create_app()
