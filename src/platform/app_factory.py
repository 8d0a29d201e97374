"""
FastAPI app factory shared by the production entrypoint and the test app.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.orm_db_setting import Database
from src.platform.exception.exception_handlers import register_exception_handlers
from src.service.ticketing.driving_adapter.http_controller import (
    event_controller,
    staff_controller,
    ticket_controller,
)


# (router, prefix, tag)
API_ROUTES: tuple[tuple[APIRouter, str, str], ...] = (
    (ticket_controller.router, '/api/ticket', 'ticket'),
    (event_controller.router, '/api/event', 'event'),
    (staff_controller.router, '/api/staff', 'staff'),
)

ops_router = APIRouter()


@ops_router.get('/health')
@inject
async def health_check(
    database: Database = Depends(Provide[Container.database]),
) -> JSONResponse:
    """Liveness plus a one-statement database probe; 503 while the store is unreachable."""
    database_ok = await database.ping()
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            'status': 'healthy' if database_ok else 'degraded',
            'service': settings.PROJECT_NAME,
            'database': 'ok' if database_ok else 'unreachable',
        },
    )


@ops_router.get('/metrics')
async def get_metrics() -> PlainTextResponse:
    return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Event Ticketing Backend',
) -> FastAPI:
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    register_exception_handlers(app)

    for router, prefix, tag in API_ROUTES:
        app.include_router(router, prefix=prefix, tags=[tag])
    app.include_router(ops_router, tags=['ops'])

    return app
