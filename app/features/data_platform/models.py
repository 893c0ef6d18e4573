"""ORM models for the sales-tracking store.

Entities:
- Product, Customer: catalog and customer book.
- Sale, SaleItem: transactions and their captured line items.
- BusinessSettings: single row holding receipt header and tax defaults.

Line items capture unit price and line total at sale time; they are never
recomputed from the current product price.
"""

import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.shared.models import IdMixin, TimestampMixin

# ============================================================================
# ENUMS
# ============================================================================


class ProductStatus(str, Enum):
    """Availability of a product."""

    ACTIVE = "active"
    OUT_OF_STOCK = "out_of_stock"


class CustomerStatus(str, Enum):
    """Whether a customer is still trading with the business."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class SaleStatus(str, Enum):
    """Lifecycle state of a sale."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    """How a sale was paid. NULL in the database means unspecified."""

    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"
    MOBILE_MONEY = "mobile_money"


# ============================================================================
# CATALOG & CUSTOMERS
# ============================================================================


class Product(IdMixin, TimestampMixin, Base):
    """Product catalog entry.

    Attributes:
        id: Opaque identifier.
        name: Display name; analytics group line items by this name.
        description: Free text.
        price: Current list price (line items capture their own price).
        stock: Units on hand.
        category: Product category.
        status: active or out_of_stock.
    """

    __tablename__ = "product"

    name: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    stock: Mapped[int] = mapped_column(Integer, default=0)
    category: Mapped[str | None] = mapped_column(String(100), index=True, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=ProductStatus.ACTIVE.value)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_positive"),
        CheckConstraint("stock >= 0", name="ck_product_stock_positive"),
        CheckConstraint(
            "status IN ('active', 'out_of_stock')",
            name="ck_product_valid_status",
        ),
    )


class Customer(IdMixin, TimestampMixin, Base):
    """Customer record.

    Attributes:
        id: Opaque identifier.
        name: Display name.
        email: Contact email (optional).
        phone: Contact phone (optional).
        address: Postal address (optional).
        status: active or inactive.
        total_purchases: Running purchase total maintained by the business.
    """

    __tablename__ = "customer"

    name: Mapped[str] = mapped_column(String(200), index=True)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=CustomerStatus.ACTIVE.value)
    total_purchases: Mapped[int] = mapped_column(Integer, default=0)

    sales: Mapped[list["Sale"]] = relationship(back_populates="customer", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("total_purchases >= 0", name="ck_customer_total_purchases_positive"),
        CheckConstraint(
            "status IN ('active', 'inactive')",
            name="ck_customer_valid_status",
        ),
    )


# ============================================================================
# SALES
# ============================================================================


class Sale(IdMixin, TimestampMixin, Base):
    """Sale header.

    ``total`` excludes tax; grand total is ``total + tax``.

    Attributes:
        id: Opaque identifier.
        date: When the sale happened (timezone-aware).
        total: Pre-tax amount (sum of captured line totals at creation).
        tax: Tax amount.
        status: pending, completed or cancelled.
        payment_method: cash, card, transfer, mobile_money or NULL.
        customer_id: Optional customer (set NULL when the customer is deleted).
        notes: Free text.
    """

    __tablename__ = "sale"

    date: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    tax: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
    status: Mapped[str] = mapped_column(
        String(20), default=SaleStatus.COMPLETED.value, index=True
    )
    payment_method: Mapped[str | None] = mapped_column(String(20), nullable=True)
    customer_id: Mapped[str | None] = mapped_column(
        String(32), ForeignKey("customer.id", ondelete="SET NULL"), nullable=True, index=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    customer: Mapped["Customer | None"] = relationship(back_populates="sales")
    items: Mapped[list["SaleItem"]] = relationship(
        back_populates="sale",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="SaleItem.position",
    )

    __table_args__ = (
        CheckConstraint("total >= 0", name="ck_sale_total_positive"),
        CheckConstraint("tax >= 0", name="ck_sale_tax_positive"),
        CheckConstraint(
            "status IN ('pending', 'completed', 'cancelled')",
            name="ck_sale_valid_status",
        ),
        CheckConstraint(
            "payment_method IS NULL OR "
            "payment_method IN ('cash', 'card', 'transfer', 'mobile_money')",
            name="ck_sale_valid_payment_method",
        ),
    )


class SaleItem(IdMixin, TimestampMixin, Base):
    """One product line within a sale.

    Attributes:
        id: Opaque identifier.
        sale_id: Owning sale (cascade delete).
        product_id: Product sold (set NULL when the product is deleted).
        position: Order of the line within the sale.
        quantity: Units sold (> 0).
        price: Unit price captured at sale time.
        total: Line total captured at sale time (price * quantity).
    """

    __tablename__ = "sale_item"

    sale_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("sale.id", ondelete="CASCADE"), index=True
    )
    product_id: Mapped[str | None] = mapped_column(
        String(32), ForeignKey("product.id", ondelete="SET NULL"), nullable=True, index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0)
    quantity: Mapped[int] = mapped_column(Integer)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2))

    sale: Mapped["Sale"] = relationship(back_populates="items")
    product: Mapped["Product | None"] = relationship()

    __table_args__ = (
        Index("ix_sale_item_sale_position", "sale_id", "position"),
        CheckConstraint("quantity > 0", name="ck_sale_item_quantity_positive"),
        CheckConstraint("price >= 0", name="ck_sale_item_price_positive"),
        CheckConstraint("total >= 0", name="ck_sale_item_total_positive"),
    )


# ============================================================================
# SETTINGS
# ============================================================================


class BusinessSettings(IdMixin, TimestampMixin, Base):
    """Business profile used for receipts and default tax.

    Single row per deployment; reads fall back to configured defaults.

    Attributes:
        business_name: Name printed on receipts.
        address: Business address.
        phone: Contact phone.
        email: Contact email.
        tax_id: Tax / VAT number.
        tax_rate: Percentage, e.g. 7.5 meaning 7.5%.
        currency: ISO 4217 code.
    """

    __tablename__ = "business_settings"

    business_name: Mapped[str] = mapped_column(String(200))
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    tax_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2))
    currency: Mapped[str] = mapped_column(String(3))

    __table_args__ = (
        CheckConstraint("tax_rate >= 0 AND tax_rate <= 100", name="ck_business_settings_tax_rate"),
    )
