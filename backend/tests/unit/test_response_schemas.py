"""Unit tests for response schemas built from ORM rows

Tests cover:
- Customer and user responses validate straight from model instances
- password_hash never reaches the user response
"""

from datetime import datetime, timezone

from auth.schemas import UserResponse
from customers.schemas import CustomerResponse
from models import Customer, User

STAMP = datetime(2026, 1, 5, 6, 0, tzinfo=timezone.utc)


def test_customer_response_from_model():
    customer = Customer(
        id="cust-1",
        tenant_id="tenant-123",
        name="Alpine Cafe",
        email="orders@alpine.example",
        phone=None,
        address=None,
        is_active=True,
        created_at=STAMP,
        updated_at=STAMP,
    )

    response = CustomerResponse.model_validate(customer)

    assert response.id == "cust-1"
    assert response.tenant_id == "tenant-123"
    assert response.phone is None
    assert response.created_at == STAMP


def test_user_response_from_model_excludes_password_hash():
    user = User(
        id="user-1",
        tenant_id="tenant-123",
        email="baker@sunrise.example",
        password_hash="$argon2id$v=19$m=65536,t=3,p=4$c2FsdA$aGFzaA",
        first_name="Mia",
        last_name="Huber",
        role="STAFF",
        is_active=True,
        last_login_at=None,
        created_at=STAMP,
        updated_at=STAMP,
    )

    dumped = UserResponse.model_validate(user).model_dump()

    assert dumped["email"] == "baker@sunrise.example"
    assert dumped["role"] == "STAFF"
    assert "password_hash" not in dumped
