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
from src.platform.database.asyncpg_setting import (
    close_all_asyncpg_pools,
    get_asyncpg_pool,
    warmup_asyncpg_pool,
)
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Gift Wave] Starting up...')

    tracing = TracingConfig(service_name='gift-wave-service')
    tracing.setup()
    tracing.instrument_asyncpg()
    Logger.base.info('📊 [Gift Wave] OpenTelemetry tracing configured (FastAPI + asyncpg)')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Gift Wave] Dependency injection wired')

    await get_asyncpg_pool()
    Logger.base.info('🏊 [Gift Wave] Asyncpg pool initialized')

    await warmup_asyncpg_pool()
    Logger.base.info('🔥 [Gift Wave] Asyncpg pool warmed up to MIN_SIZE')

    Logger.base.info('✅ [Gift Wave] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Gift Wave] Shutting down...')

    await close_all_asyncpg_pools()
    Logger.base.info('🏊 [Gift Wave] Asyncpg pools closed')

    tracing.shutdown()
    Logger.base.info('📊 [Gift Wave] Tracing shutdown complete')

    container.unwire()
    cleanup()

    Logger.base.info('👋 [Gift Wave] Shutdown complete')


app = create_app(lifespan=lifespan, service_name='gift-wave-service')


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
