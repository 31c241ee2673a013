"""
Production FastAPI Application
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, engine_manager
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Library Service] Starting up...')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    setup()
    Logger.base.info('🔌 [Library Service] Dependency injection wired')

    # Initialize database schema (tables and partial unique indexes)
    await create_db_and_tables()
    Logger.base.info('🗄️  [Library Service] Database ready')

    yield

    Logger.base.info('🛑 [Library Service] Shutting down...')

    await engine_manager.dispose()
    Logger.base.info('🗄️  [Library Service] Database engine disposed')

    # Unwire DI
    container.unwire()
    cleanup()

    Logger.base.info('👋 [Library Service] Shutdown complete')


# Create FastAPI app using shared factory
app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
