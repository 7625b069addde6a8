import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request

from orderdesk.api import (
    category_routes,
    config_routes,
    order_routes,
    product_routes,
    public_order_routes,
    public_routes,
)
from orderdesk.auth.routes import auth_backend, fastapi_users
from orderdesk.core.config import Settings, get_settings, setup_logging
from orderdesk.core.errors import register_error_handlers
from orderdesk.db import Database
from orderdesk.utils.storage import build_storage

load_dotenv()

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings)

    db = Database(settings.database_url, echo=settings.database_echo)
    if not settings.is_production:
        # Production schemas are managed by alembic
        await db.create_all()

    app.state.db = db
    app.state.storage = build_storage(settings)
    log.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.env_mode.value)

    try:
        yield
    finally:
        await db.dispose()
        log.info("Database connections closed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Multi-tenant restaurant ordering API: storefront catalog, order intake and admin dashboard.",
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_error_handlers(app)

    # Auth
    app.include_router(
        fastapi_users.get_auth_router(auth_backend),
        prefix="/api/auth/jwt",
        tags=["auth"],
    )

    # Storefront; order routes first so /orders/... never reads as a tenant slug
    app.include_router(public_order_routes.router)
    app.include_router(public_routes.router)

    # Admin dashboard
    app.include_router(category_routes.router)
    app.include_router(product_routes.router)
    app.include_router(order_routes.router)
    app.include_router(config_routes.router)

    @app.get("/health", tags=["health"])
    async def health(request: Request):
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": request.app.state.settings.env_mode.value,
        }

    return app


app = create_app()
