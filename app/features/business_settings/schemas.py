"""Pydantic schemas for business settings endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class BusinessSettingsUpdate(BaseModel):
    """Full replacement of the business profile."""

    model_config = ConfigDict(str_strip_whitespace=True)

    business_name: str = Field(..., min_length=1, max_length=200, description="Name on receipts.")
    address: str | None = None
    phone: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    tax_id: str | None = Field(None, max_length=50, description="Tax / VAT number.")
    tax_rate: Decimal = Field(
        ...,
        ge=0,
        le=100,
        max_digits=5,
        decimal_places=2,
        description="Percentage applied to new sales, e.g. 7.5 meaning 7.5%.",
    )
    currency: str = Field(
        ...,
        pattern=r"^[A-Z]{3}$",
        description="ISO 4217 currency code, e.g. NGN.",
    )


class BusinessSettingsResponse(BaseModel):
    """Business profile; configured defaults when nothing is stored yet."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = Field(None, description="Null when defaults are returned.")
    business_name: str
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    tax_id: str | None = None
    tax_rate: Decimal
    currency: str
    is_default: bool = Field(False, description="True when no settings have been saved.")
    updated_at: datetime | None = None
