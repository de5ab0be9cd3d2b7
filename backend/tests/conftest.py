"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; keep tests off the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from typing import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from millops.core.auth import Principal
from millops.core.security import get_password_hash, create_access_token
from millops.db.base import Base
from millops.db.session import enable_sqlite_foreign_keys, get_db
from millops.main import app
# Import all models to ensure they're registered with Base.metadata
from millops.models import *
from millops.models.user import User
from millops.models.supplier import Supplier
from millops.models.delivery import TruckDelivery

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    # Disable rate limiting during tests to avoid flaky failures
    from millops.core.rate_limit import limiter
    limiter.enabled = False
    # Don't raise server exceptions so we can test error status codes
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db_session: Session) -> User:
    """Create a test user."""
    user = User(
        email="operator@example.com",
        password_hash=get_password_hash("testpass123"),
        first_name="Alice",
        last_name="Wambui",
        role="Quality Control",
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def principal(test_user: User) -> Principal:
    return Principal(
        user_id=test_user.id,
        email=test_user.email,
        role=test_user.role,
        name=test_user.display_name,
    )


@pytest.fixture
def auth_token(test_user: User) -> str:
    """Get an authentication token for the test user."""
    return create_access_token(
        data={"sub": str(test_user.id), "email": test_user.email, "role": test_user.role}
    )


@pytest.fixture
def auth_headers(auth_token: str) -> dict:
    """Get authentication headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def test_supplier(db_session: Session) -> Supplier:
    """Create a test supplier."""
    supplier = Supplier(
        name="Green Valley Farms",
        contact_person="John Kamau",
        phone="+254712345678",
        email="contact@greenvalley.co.ke",
    )
    db_session.add(supplier)
    db_session.commit()
    db_session.refresh(supplier)
    return supplier


@pytest.fixture
def test_delivery(db_session: Session, test_supplier: Supplier) -> TruckDelivery:
    """Create a pending delivery of 2500 kg."""
    delivery = TruckDelivery(
        supplier_id=test_supplier.id,
        truck_registration="KCA 123A",
        driver_name="Samuel Mwangi",
        expected_quantity=2500,
    )
    db_session.add(delivery)
    db_session.commit()
    db_session.refresh(delivery)
    return delivery
