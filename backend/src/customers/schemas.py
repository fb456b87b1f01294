"""Pydantic schemas for customer management"""

from pydantic import BaseModel, ConfigDict, Field, EmailStr, field_validator
from typing import Optional
from datetime import datetime


class CustomerCreate(BaseModel):
    """Schema for creating a new customer.

    Unknown fields (including tenant_id) are ignored; the tenant always comes
    from the authenticated request.
    """
    name: str = Field(..., min_length=1, max_length=500)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=1000)
    is_active: bool = True

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate name is not empty after stripping whitespace"""
        if not v.strip():
            raise ValueError("Customer name cannot be empty")
        return v.strip()


class CustomerUpdate(BaseModel):
    """Schema for updating an existing customer (partial updates)"""
    name: Optional[str] = Field(None, min_length=1, max_length=500)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=1000)
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Customer name cannot be empty")
        return v.strip() if v else v


class CustomerResponse(BaseModel):
    """Schema for customer response"""
    id: str
    tenant_id: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CustomerListResponse(BaseModel):
    """Schema for paginated customer list response"""
    items: list[CustomerResponse]
    total: int
    page: int
    per_page: int
    total_pages: int
