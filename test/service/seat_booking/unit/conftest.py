"""
Unit test configuration for the seat booking service.

Overrides the database cleanup and the session-scoped TestClient so unit
tests run without a store.
"""

from collections.abc import AsyncGenerator, Generator
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
import pytest


@pytest.fixture(autouse=True, scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    """No-op override for unit tests - no real database needed"""
    yield


@pytest.fixture(scope='session')
def client() -> Generator[MagicMock, None, None]:
    """Mock client for unit tests - prevents TestClient/lifespan from being created"""
    mock_client = MagicMock(spec=TestClient)
    yield mock_client


@pytest.fixture(autouse=True)
def clear_client_cookies(client: MagicMock) -> Generator[None, None, None]:
    """No-op override for unit tests - uses mock client"""
    yield
