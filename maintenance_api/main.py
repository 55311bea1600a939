"""Maintenance Settings API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MaintenanceApiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Lifespan owns the store: engine created, schema created, seeded once, disposed

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - settingitem router registered before maintenance router: its paths are
      more specific than /api/maintenance/{maintenance_id}
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from maintenance_api import __version__
from maintenance_api.api.error_handlers import register_error_handlers
from maintenance_api.api.routes import health, maintenance, setting_item
from maintenance_api.config import get_settings
from maintenance_api.infrastructure.database import init_db
from maintenance_api.infrastructure.observability import setup_logging
from maintenance_api.services.maintenance_store import MaintenanceStore
from maintenance_api.services.seed_loader import seed

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    if settings.create_schema_on_startup:
        await manager.create_schema()
    if settings.seed_on_startup:
        async with manager.session() as db:
            await seed(MaintenanceStore(db, manager.write_lock))
    logger.info("Maintenance API started")
    yield
    logger.info("Maintenance API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Maintenance Settings API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(setting_item.router)
app.include_router(maintenance.router)

register_error_handlers(app)
