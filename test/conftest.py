"""
Test Configuration and Fixtures

This module provides:
- Test environment setup (SQLite file database, test log dir) before app imports
- Schema creation and seat seeding once per session
- Per-test cleanup: bookings and users deleted, every seat available again
- Session-scoped TestClient with cookie reset between tests

Architecture:
- Unit tests (test/**/unit/): Override fixtures with no-ops in their own conftest.py
- Integration tests: Use the real store with cleanup around every test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# settings and the loguru sinks read these at import time
# =============================================================================
import os
from pathlib import Path


TEST_DIR = Path(__file__).parent


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    default_url = f'sqlite+aiosqlite:///{TEST_DIR / "test_seat_booking.db"}'
    os.environ['DATABASE_URL'] = os.environ.get('TEST_DATABASE_URL', default_url)

    test_log_dir = TEST_DIR / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['SEAT_RESET_ENABLED'] = 'true'
    os.environ['SEED_SEATS_ON_STARTUP'] = 'true'
    os.environ.setdefault('DB_POOL_SIZE_WRITE', '2')
    os.environ.setdefault('DB_POOL_SIZE_READ', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.database.orm_db_setting import (  # noqa: E402
    create_db_and_tables,
    dispose_engines,
    drop_db_and_tables,
    get_session_maker,
)
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from src.service.seat_booking.app.command.initialize_seats_use_case import (  # noqa: E402
    InitializeSeatsUseCase,
)
import src.service.seat_booking.driven_adapter.model  # noqa: E402, F401


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def pytest_sessionstart(session: pytest.Session) -> None:
    if _is_unit_test_only_run(session.config):
        return

    asyncio.run(_setup_test_database())


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _setup_test_database() -> None:
    try:
        await drop_db_and_tables()
        await create_db_and_tables()
        async with get_session_maker()() as session:
            await InitializeSeatsUseCase(uow=SqlAlchemyUnitOfWork(session)).initialize()
    finally:
        await dispose_engines()


async def _clean_all_tables() -> None:
    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            await conn.execute(text('DELETE FROM booking'))
            await conn.execute(text('DELETE FROM "user"'))
            await conn.execute(text('UPDATE seat SET is_available = :available'), {'available': True})
    finally:
        await engine.dispose()


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await _clean_all_tables()
    yield

    from src.platform.database.orm_db_setting import _engine_manager

    # Only dispose engines created on this test's loop, the TestClient owns its own
    if _engine_manager._loop is asyncio.get_running_loop():
        await dispose_engines()


@pytest.fixture(scope='session')
def client() -> Generator[Any, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Skip for unit tests - they don't use the HTTP client
    if 'unit' in [m.name for m in request.node.iter_markers()]:
        yield
        return
    client = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()
