"""User SQLAlchemy model"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, CheckConstraint
from sqlalchemy.orm import validates
import re

from .base import Base, TenantScoped, generate_id, utcnow


class User(TenantScoped, Base):
    """User model representing authenticated users.

    Each user belongs to one tenant. Email addresses are unique across all
    tenants because login looks a user up by email before any tenant is known.
    Passwords are hashed using Argon2id.
    """
    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(320), nullable=False, unique=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    role = Column(Text, nullable=False, default="STAFF")
    password_hash = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(
            "role IN ('ADMIN', 'STAFF', 'CUSTOM')",
            name='ck_user_role'
        ),
    )

    @validates('email')
    def validate_email(self, key, value):
        """Basic email format validation"""
        if not re.match(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$', value):
            raise ValueError("Invalid email format")
        return value.lower()
