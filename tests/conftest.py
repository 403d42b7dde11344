from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.app import create_app
from core.hearth.settings import HearthSettings
from core.hearth.store import Store


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def client(store: Store) -> TestClient:
    app = create_app(store=store, settings=HearthSettings())
    with TestClient(app) as test_client:
        yield test_client
