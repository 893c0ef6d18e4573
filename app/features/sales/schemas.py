"""Pydantic schemas for sales and receipts.

Line items capture unit price and line total at creation; responses
report them as stored, never recomputed from current product prices.
"""

from datetime import date as date_type
from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from app.features.data_platform.models import PaymentMethod, SaleStatus

# =============================================================================
# Requests
# =============================================================================


class SaleSortField(str, Enum):
    """Columns the sale list can be sorted by."""

    DATE = "date"
    TOTAL = "total"
    STATUS = "status"


class SaleItemCreate(BaseModel):
    """One line of a new sale."""

    product_id: str = Field(..., min_length=1, description="Product being sold.")
    quantity: int = Field(..., gt=0, description="Units sold.")
    price: Decimal | None = Field(
        None,
        ge=0,
        max_digits=12,
        decimal_places=2,
        description="Unit price. Defaults to the product's current price.",
    )


class SaleCreate(BaseModel):
    """Payload for recording a sale."""

    model_config = ConfigDict(use_enum_values=True)

    date: datetime | None = Field(None, description="When the sale happened. Defaults to now.")
    customer_id: str | None = Field(None, description="Optional customer; must exist.")
    payment_method: PaymentMethod | None = Field(None, description="Null means unspecified.")
    status: SaleStatus = Field(SaleStatus.COMPLETED)
    notes: str | None = None
    tax: Decimal | None = Field(
        None,
        ge=0,
        max_digits=12,
        decimal_places=2,
        description="Tax amount. Defaults to total x business tax rate / 100, rounded half-up.",
    )
    items: list[SaleItemCreate] = Field(..., min_length=1, max_length=500)


class SaleUpdate(BaseModel):
    """Header changes. Items cannot be changed after creation."""

    model_config = ConfigDict(use_enum_values=True, extra="forbid")

    date: datetime | None = None
    customer_id: str | None = None
    payment_method: PaymentMethod | None = None
    status: SaleStatus | None = None
    notes: str | None = None
    tax: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)

    @model_validator(mode="after")
    def validate_required_fields(self) -> "SaleUpdate":
        """Date, status and tax cannot be cleared."""
        for field in ("date", "status", "tax"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class SaleFilters(BaseModel):
    """List filters for GET /sales."""

    search: str | None = Field(None, min_length=2)
    status: SaleStatus | None = None
    payment_method: PaymentMethod | None = None
    customer_id: str | None = None
    start_date: date_type | None = None
    end_date: date_type | None = None


# =============================================================================
# Responses
# =============================================================================


class ProductSummary(BaseModel):
    """Product a line refers to."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class CustomerSummary(BaseModel):
    """Customer attached to a sale."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str | None = None
    phone: str | None = None


class SaleItemResponse(BaseModel):
    """A captured sale line."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str | None = Field(None, description="Null once the product has been deleted.")
    product: ProductSummary | None = None
    quantity: int
    price: Decimal = Field(..., description="Unit price captured at sale time.")
    total: Decimal = Field(..., description="Line total captured at sale time.")


class SaleResponse(BaseModel):
    """Sale with customer and items."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    date: datetime
    total: Decimal = Field(..., description="Pre-tax total.")
    tax: Decimal
    status: SaleStatus
    payment_method: PaymentMethod | None = None
    customer_id: str | None = None
    customer: CustomerSummary | None = None
    notes: str | None = None
    items: list[SaleItemResponse]
    created_at: datetime
    updated_at: datetime

    @computed_field(description="total + tax.")  # type: ignore[prop-decorator]
    @property
    def grand_total(self) -> Decimal:
        """Total including tax."""
        return self.total + self.tax


class ReceiptBusiness(BaseModel):
    """Business header printed on a receipt."""

    name: str
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    tax_id: str | None = None


class ReceiptLine(BaseModel):
    """One receipt line."""

    product_name: str = Field(..., description='Product name, or "Unknown product".')
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class ReceiptResponse(BaseModel):
    """Receipt data for one sale; layout and printing are left to the client."""

    sale_id: str
    date: datetime
    status: SaleStatus
    payment_method: PaymentMethod | None = None
    business: ReceiptBusiness
    customer: CustomerSummary | None = None
    lines: list[ReceiptLine]
    subtotal: Decimal = Field(..., description="Sale total before tax.")
    tax: Decimal
    tax_rate: Decimal = Field(..., description="Current business tax rate (percent).")
    grand_total: Decimal = Field(..., description="subtotal + tax.")
    currency: str
    notes: str | None = None
