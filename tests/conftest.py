import os
import tempfile

# Must be set before core.config builds its Settings
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6399/0")
os.environ.setdefault("MEDIA_DIR", tempfile.mkdtemp(prefix="landscaping-media-"))
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from apps.api.main import app as api_app
from apps.api.routers import admin, quotes
from apps.api.utils.relay import RelayError
from apps.worker import jobs
from core.db import Base, SessionLocal, engine


class FakeRelay:
    """Stands in for the Web3Forms relay; fails for addresses listed in fail_for."""

    def __init__(self):
        self.sent = []
        self.fail_all = False
        self.fail_for = set()

    def __call__(self, quote):
        if self.fail_all or quote.email in self.fail_for:
            raise RelayError("relay unavailable")
        self.sent.append(quote.email)


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def relay(monkeypatch) -> FakeRelay:
    fake = FakeRelay()
    monkeypatch.setattr(quotes, "send_quote", fake)
    monkeypatch.setattr(jobs, "send_quote", fake)
    return fake


@pytest.fixture(autouse=True)
def enqueued(monkeypatch) -> list:
    calls = []

    def fake_enqueue():
        calls.append("sync_pending_quotes")
        return f"job-{len(calls)}"

    monkeypatch.setattr(quotes, "enqueue_quote_sync", fake_enqueue)
    monkeypatch.setattr(admin, "enqueue_quote_sync", fake_enqueue)
    return calls


@pytest.fixture
def app() -> FastAPI:
    return api_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def db():
    with SessionLocal() as session:
        yield session


@pytest.fixture
def admin_headers(client: TestClient) -> dict:
    r = client.post("/auth/register", json={"email": "owner@premiumlandscaping.ca", "password": "s3cret-pass"})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def user_headers(client: TestClient, admin_headers: dict) -> dict:
    r = client.post("/auth/register", json={"email": "visitor@rogers.com", "password": "another-pass"})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['access_token']}"}
