"""Pydantic schemas for customer endpoints."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.features.data_platform.models import CustomerStatus


class CustomerSortField(str, Enum):
    """Columns the customer list can be sorted by."""

    NAME = "name"
    EMAIL = "email"
    TOTAL_PURCHASES = "total_purchases"
    CREATED_AT = "created_at"


class CustomerCreate(BaseModel):
    """Payload for creating a customer."""

    model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200, description="Display name.")
    email: EmailStr | None = Field(None, description="Contact email, validated when given.")
    phone: str | None = Field(None, max_length=50)
    address: str | None = None
    status: CustomerStatus = Field(CustomerStatus.ACTIVE, description="active or inactive.")
    total_purchases: int = Field(0, ge=0, description="Running purchase total.")


class CustomerUpdate(BaseModel):
    """Partial update; only fields that are sent are changed."""

    model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = None
    status: CustomerStatus | None = None
    total_purchases: int | None = Field(None, ge=0)


class CustomerResponse(BaseModel):
    """Customer record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    status: CustomerStatus
    total_purchases: int
    created_at: datetime
    updated_at: datetime
