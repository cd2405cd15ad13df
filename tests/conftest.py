"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from space_api.app.core.config import settings
from space_api.app.core.db import get_connection, init_db
from space_api.app.main import app
from space_api.app.repositories.ship_repository import ShipRepository
from space_api.app.schemas.ship import ShipCreate
from space_api.app.services.ship_service import ShipService
from tests.utils import ship_payload


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    """Point the application at a fresh SQLite file with the schema applied."""
    path = tmp_path / "ships.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    return path


@pytest.fixture
def repository(temp_db):
    conn = get_connection()
    try:
        yield ShipRepository(conn)
    finally:
        conn.close()


@pytest.fixture
def service(repository):
    return ShipService(repository)


@pytest.fixture
def client(temp_db):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_ship():
    """Build a ``ShipCreate`` from a valid default payload plus overrides."""
    def _make(**overrides) -> ShipCreate:
        return ShipCreate(**ship_payload(**overrides))
    return _make
