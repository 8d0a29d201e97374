"""
Production FastAPI Application

HTTP API plus the periodic expired-event sweep.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Ticketing] Starting up...')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    setup()
    Logger.base.info('🔌 [Ticketing] Dependency injection wired')

    await create_db_and_tables()
    Logger.base.info('🗄️  [Ticketing] Database tables ready')

    async with anyio.create_task_group() as tg:
        if settings.EXPIRY_SWEEP_ENABLED:
            await container.expiry_sweep_scheduler().start(task_group=tg)
        else:
            Logger.base.info('⏸️  [Ticketing] Expiry sweep disabled')

        Logger.base.info('✅ [Ticketing] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Ticketing] Shutting down...')
        tg.cancel_scope.cancel()

    await dispose_engine()
    Logger.base.info('🗄️  [Ticketing] Database engine disposed')

    # Unwire DI
    container.unwire()
    cleanup()

    Logger.base.info('👋 [Ticketing] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
