"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.database import Database
from app.core.exceptions import register_exception_handlers
from app.core.health import router as health_router
from app.core.logging import configure_logging, get_logger
from app.core.middleware import RequestIdMiddleware
from app.features.analytics.routes import router as analytics_router
from app.features.business_settings.routes import router as business_settings_router
from app.features.customers.routes import router as customers_router
from app.features.dashboard.routes import router as dashboard_router
from app.features.products.routes import router as products_router
from app.features.sales.routes import router as sales_router
from app.features.seeder.routes import router as seeder_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown.

    Builds the database handle on startup and disposes it on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None after startup, cleans up on shutdown.
    """
    settings = get_settings()

    # Startup
    configure_logging()
    logger.info(
        "app.startup_started",
        app_name=settings.app_name,
        app_env=settings.app_env,
        debug=settings.debug,
        business_timezone=settings.business_timezone,
    )

    database = Database(settings)
    app.state.database = database
    if settings.is_development and settings.database_create_tables:
        await database.create_all()

    logger.info("app.startup_completed")

    yield

    # Shutdown
    await database.dispose()
    logger.info("app.shutdown_completed")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Sales tracking for small businesses: products, customers, sales, "
        "receipts and sales analytics",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # Middleware (order matters - first added = outermost)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    # Routers
    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(customers_router)
    app.include_router(sales_router)
    app.include_router(business_settings_router)
    app.include_router(dashboard_router)
    app.include_router(analytics_router)
    app.include_router(seeder_router)

    return app


app = create_app()
