"""Pytest fixtures for tenant isolation testing.

Provides reusable test fixtures for:
- Database session on a fresh SQLite schema per test
- Tenant-isolated DataClient
- Test tenants and users with different roles (ADMIN, STAFF)
- Test clients with JWT tokens

Usage:
    def test_list_customers(authenticated_client, customer_factory):
        response = authenticated_client.get("/api/v1/customers")
        assert response.status_code == 200
"""

import sys
import os
from pathlib import Path

# Set environment variables BEFORE any imports to ensure they take effect
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PASSWORD_PEPPER", "test-pepper-secret-key-32-chars-long")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-key-256-bits-minimum-length-required-for-security")
# Cheap hashing for tests (argon2 minimum is 8 KiB per lane)
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("LOG_JSON", "false")

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))
sys.path.insert(0, str(Path(__file__).parent))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session
from typing import Callable, Generator

from models import Base
from models.tenant import Tenant
from models.user import User
from models.customer import Customer
from models.customer_order import CustomerOrder
from database import build_engine, get_db as database_get_db
from tenancy.interceptor import create_data_client
from fixtures.multi_tenant import (  # noqa: F401  (fixtures)
    auth_headers,
    make_tenant,
    make_user,
    multi_tenant_setup,
    tenant_a,
    tenant_b,
    user_a,
    user_b,
)

TEST_DATABASE_URL = os.environ["DATABASE_URL"]

test_engine = build_engine(TEST_DATABASE_URL)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test.

    Creates all tables before the test and drops them after.
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def data_client(db_session: Session):
    """DataClient with tenant isolation installed on the test session."""
    return create_data_client(db_session)


@pytest.fixture(scope="function")
def test_tenant(db_session: Session) -> Tenant:
    """Create a test tenant."""
    return make_tenant(db_session, "tenant-123", name="Sunrise Bakery")


@pytest.fixture(scope="function")
def admin_user(db_session: Session, test_tenant: Tenant) -> User:
    """Create an ADMIN user for testing."""
    return make_user(db_session, test_tenant.id, "admin@sunrise.example", role="ADMIN")


@pytest.fixture(scope="function")
def staff_user(db_session: Session, test_tenant: Tenant) -> User:
    """Create a STAFF user for testing."""
    return make_user(db_session, test_tenant.id, "staff@sunrise.example", role="STAFF")


@pytest.fixture(scope="function")
def custom_user(db_session: Session, test_tenant: Tenant) -> User:
    """Create a CUSTOM-role user for testing."""
    return make_user(db_session, test_tenant.id, "custom@sunrise.example", role="CUSTOM")


@pytest.fixture(scope="function")
def customer_factory(db_session: Session) -> Callable[..., Customer]:
    """Insert customers directly (explicit tenant_id, no context needed)."""

    def _create(tenant_id: str, name: str = "Cafe Central", **kwargs) -> Customer:
        customer = Customer(tenant_id=tenant_id, name=name, **kwargs)
        db_session.add(customer)
        db_session.commit()
        return customer

    return _create


@pytest.fixture(scope="function")
def order_factory(db_session: Session) -> Callable[..., CustomerOrder]:
    """Insert customer orders directly (explicit tenant_id)."""

    def _create(customer: Customer, order_number: str, status: str = "DRAFT", **kwargs) -> CustomerOrder:
        order = CustomerOrder(
            tenant_id=customer.tenant_id,
            customer_id=customer.id,
            order_number=order_number,
            status=status,
            **kwargs
        )
        db_session.add(order)
        db_session.commit()
        return order

    return _create


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create an unauthenticated test client.

    Returns a FastAPI TestClient without any authentication.
    Useful for testing public endpoints and the auth flow.
    """
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[database_get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def authenticated_client(client: TestClient, admin_user: User) -> TestClient:
    """Test client authenticated as the admin user of tenant-123."""
    client.headers.update(auth_headers(admin_user))
    return client
