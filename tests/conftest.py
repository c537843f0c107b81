import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.counter_service import IPCounterStore


@pytest.fixture
def store() -> IPCounterStore:
    return IPCounterStore()


@pytest.fixture
def app(store):
    return create_app(store=store, report_interval=0.05)


@pytest.fixture
def client(app):
    # No context manager: the lifespan (and the reporter) does not start
    return TestClient(app)
