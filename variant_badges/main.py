"""
Main application for Variant Badges
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from variant_badges.api.dependencies import build_services
from variant_badges.api.v1.health import router as health_router
from variant_badges.api.v1.products import router as products_router
from variant_badges.core.config.settings import Settings, get_settings
from variant_badges.core.database import Database
from variant_badges.core.exceptions import BadgeAppException
from variant_badges.core.logging import LoggingConfig, get_logger, setup_logging
from variant_badges.domains.analytics.api.analytics_api import router as analytics_router
from variant_badges.domains.badges.api.badges_api import router as badges_router
from variant_badges.domains.badges.api.public_api import router as public_router
from variant_badges.domains.badges.api.settings_api import router as settings_router
from variant_badges.domains.billing.api.billing_api import router as billing_router
from variant_badges.domains.shopify.services import ShopifyClients
from variant_badges.domains.shops.api.auth_api import router as auth_router
from variant_badges.domains.shops.api.setup_api import router as setup_router
from variant_badges.webhooks.routes import router as webhooks_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    settings: Settings = app.state.settings
    setup_logging(LoggingConfig.from_settings(settings.logging))
    settings.validate_configuration()

    # Startup: build whatever was not injected
    owns_database = app.state.database is None
    owns_shopify = app.state.shopify is None
    if owns_database:
        app.state.database = Database.from_settings(settings.database)
    if owns_shopify:
        app.state.shopify = ShopifyClients.create(settings.shopify)

    await app.state.database.create_tables()
    logger.info("Database tables verified/created")

    if getattr(app.state, "services", None) is None:
        app.state.services = build_services(
            settings, app.state.database, app.state.shopify
        )
    logger.info("Services initialized", environment=settings.ENVIRONMENT)

    yield

    # Shutdown
    if owns_shopify:
        await app.state.shopify.close()
    if owns_database:
        await app.state.database.close()


async def badge_app_exception_handler(request: Request, exc: BadgeAppException):
    if exc.status_code >= 500:
        logger.error(
            f"Request failed: {exc}",
            path=request.url.path,
            cause=str(exc.cause) if exc.cause else None,
        )
    else:
        logger.info(f"Request rejected: {exc}", path=request.url.path)
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request",
            "details": [
                {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg")}
                for error in exc.errors()
            ],
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    shopify_clients: Optional[ShopifyClients] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    When both a database and Shopify clients are injected the services are
    wired immediately, so the app is usable without running the lifespan.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Variant badges for Shopify storefronts",
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.shopify = shopify_clients
    app.state.services = None
    if database is not None and shopify_clients is not None:
        app.state.services = build_services(settings, database, shopify_clients)

    # Include API routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(webhooks_router)
    app.include_router(public_router)
    app.include_router(analytics_router)
    app.include_router(products_router)
    app.include_router(badges_router)
    app.include_router(settings_router)
    app.include_router(billing_router)
    app.include_router(setup_router)

    app.add_exception_handler(BadgeAppException, badge_app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn"""
    settings = get_settings()
    uvicorn.run(
        "variant_badges.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
