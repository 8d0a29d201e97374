"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- A throwaway SQLite database (aiosqlite) recreated for every integration / API test
- Unit of work, JWT and HTTP client fixtures

Architecture:
- Unit tests (test/**/unit/): mocked ports, no database
- Integration tests (test/**/integration/): real SQLite file, real repositories
- API tests (test/**/api/): FastAPI TestClient against the test app
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['LOG_DIR'] = str(test_log_dir)
    os.environ['LOG_FILE_PREFIX'] = 'test_'

    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_dir = Path(tempfile.mkdtemp(prefix=f'ticketing_test_{worker_id}_'))
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_dir / "ticketing_test.db"}'

    os.environ['EXPIRY_SWEEP_ENABLED'] = 'false'
    os.environ['SECRET_KEY'] = 'test-secret-key-with-at-least-32-bytes'
    os.environ['STAFF_DECISION_BASE_URL'] = 'http://testserver/api/staff'
    # No outbound mail from tests
    os.environ.pop('EMAIL_API_KEY', None)


_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.database.orm_db_setting import Base, Database, build_engine, dispose_engine  # noqa: E402
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from src.service.ticketing.domain.entity.user_entity import UserEntity  # noqa: E402
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth  # noqa: E402


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'integration' in markers:
            item.fixturenames.append('clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def recreate_schema() -> None:
    """Drop and create every table on a private engine, then dispose it."""
    import src.service.ticketing.driven_adapter.model  # noqa: F401

    engine = build_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await recreate_schema()
    yield
    # The shared engine is bound to this test's event loop
    await dispose_engine()


@pytest.fixture
def uow_factory() -> Callable[[], SqlAlchemyUnitOfWork]:
    database = Database()

    def _factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory=database.session)

    return _factory


# =============================================================================
# HTTP Fixtures
# =============================================================================
@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    asyncio.run(recreate_schema())

    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(scope='session')
def jwt_auth() -> JwtAuth:
    return JwtAuth()


@pytest.fixture
def auth_headers(jwt_auth: JwtAuth) -> Callable[..., dict[str, str]]:
    def _headers(*, user_id: int, role: str, email: str = 'user@example.com') -> dict[str, str]:
        token = jwt_auth.create_jwt_token(
            UserEntity(id=user_id, email=email, name='Test User', role=role)
        )
        return {'Authorization': f'Bearer {token}'}

    return _headers


@pytest.fixture
def run_sync() -> Callable[..., Any]:
    """Run a coroutine from a synchronous API test."""

    def _run(coro: Any) -> Any:
        return asyncio.run(coro)

    return _run
