"""
Pytest configuration.

Every test gets a fresh in-memory SQLite database (StaticPool keeps the one
connection alive across sessions) and, for API tests, a TestClient whose
database session and billing bridge dependencies are overridden.
"""
import os

# Settings are read once at import time; keep the tests off any real provider
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BILLING_API_KEY"] = ""
os.environ.pop("BILLING_WEBHOOK_TOKEN", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import database  # noqa: F401  (registers the SQLite foreign-key pragma)
from database import get_session
from main import app
from models import Base
from services.billing_bridge import get_billing_bridge
from services.ledger_store import LedgerStore
from tests.factories import FakeBillingBridge


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return LedgerStore(db)


@pytest.fixture
def fake_billing():
    return FakeBillingBridge()


@pytest.fixture
def billing_bridge():
    """Bridge handed to the API. None means "provider not configured"; override per module."""
    return None


@pytest.fixture
def client(session_factory, billing_bridge):
    def override_get_session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_billing_bridge] = lambda: billing_bridge
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
