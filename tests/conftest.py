"""
Shared fixtures: a throwaway SQLite database per test and an API client
running the full application lifespan with the mock generator.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from excusegen.core import config, dao
from excusegen.core.db import init_db


@pytest.fixture
def temp_db(tmp_path):
    """Point DB_PATH at a fresh database file for the duration of a test."""
    db_path = str(tmp_path / "excuses.db")
    with patch.object(config, "DB_PATH", db_path):
        init_db()
        yield db_path


@pytest.fixture
def make_excuse(temp_db):
    """Factory for persisted excuses."""
    def _make(excuse="My train was cancelled.", situation="Late to work", tone="believable",
              length="short", believability_rating=80):
        return dao.save_excuse(situation, tone, length, excuse, believability_rating)
    return _make


@pytest.fixture
def client(temp_db):
    with patch.object(config, "GENERATOR_PROVIDER", "mock"):
        from excusegen.api.main import app
        with TestClient(app) as test_client:
            yield test_client
        app.dependency_overrides.clear()
