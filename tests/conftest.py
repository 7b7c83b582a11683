"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.main import app
from tests.helpers import FakeGateway, make_settings


@pytest.fixture
def settings():
    """Settings with a key, an assistant, a webhook and no poll delay."""
    return make_settings()


@pytest.fixture
def fake_gateway():
    """A gateway whose single run completes with the reply 'Hi there!'."""
    return FakeGateway()


@pytest.fixture
def client(settings):
    """A TestClient whose requests see the `settings` fixture."""
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
