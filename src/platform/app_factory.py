"""
Shared FastAPI App Factory

Provides common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.gifting.driving_adapter.http_controller.admin_controller import (
    router as admin_router,
)
from src.service.gifting.driving_adapter.http_controller.order_controller import (
    router as order_router,
)
from src.service.gifting.driving_adapter.http_controller.otp_controller import (
    router as otp_router,
)
from src.service.gifting.driving_adapter.http_controller.safety_controller import (
    router as safety_router,
)
from src.service.gifting.driving_adapter.http_controller.user_controller import (
    router as auth_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Gift Wave - peer-to-peer gift delivery',
    service_name: str = 'gift-wave-service',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description
        service_name: Service name for tracing

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    tracing_config = TracingConfig(service_name=service_name)
    tracing_config.instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    # Static files (uploaded media lives under static/media)
    static_dir = Path('static')
    if not static_dir.exists():
        static_dir.mkdir(exist_ok=True)
    app.mount('/static', StaticFiles(directory='static'), name='static')

    app.include_router(auth_router, prefix='/api/user', tags=['user'])
    app.include_router(otp_router, prefix='/api/otp', tags=['otp'])
    app.include_router(order_router, prefix='/api/order', tags=['order'])
    app.include_router(admin_router, prefix='/api/admin', tags=['admin'])
    app.include_router(safety_router, prefix='/api/safety', tags=['safety'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    """Register health and metrics endpoints."""

    @app.get('/health')
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @app.get('/metrics')
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
