"""Typed, read-only sale snapshots consumed by the aggregator.

Records are built once at the boundary, either from ORM rows
(``record_from_sale``) or from loosely-typed mappings such as JSON exported
by another store (``SaleRecord.from_mapping``). All defaulting happens here:
missing or negative amounts become zero, missing items an empty tuple, blank payment
methods ``None`` and unparseable timestamps ``None``. The aggregation passes
never have to guess.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.features.data_platform.models import Sale

ZERO = Decimal("0")
# No real sale amount comes close; larger values would overflow when summed.
MAX_AMOUNT = Decimal("1e100")


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a sale timestamp, returning None when it cannot be understood.

    Accepts aware or naive datetimes and ISO-8601 strings (a trailing ``Z``
    is accepted). Naive values are taken as UTC.

    Args:
        value: Raw timestamp.

    Returns:
        Timezone-aware datetime, or None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_amount(value: Any) -> Decimal:
    """Parse a monetary amount; anything unusable counts as zero."""
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    if not amount.is_finite() or abs(amount) >= MAX_AMOUNT:
        return ZERO
    return amount


def parse_money(value: Any) -> Decimal:
    """Parse a sale or line amount. Negative amounts count as zero."""
    amount = parse_amount(value)
    return amount if amount > ZERO else ZERO


def parse_quantity(value: Any) -> int:
    """Parse an item quantity; anything unusable counts as zero units."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(Decimal(str(value)))
    except (InvalidOperation, ValueError, OverflowError):
        return 0


def _clean_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True, slots=True)
class ProductRef:
    """The product a line item refers to."""

    id: str | None
    name: str


@dataclass(frozen=True, slots=True)
class CustomerRef:
    """The customer attached to a sale."""

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class SaleItemRecord:
    """One product line, with amounts captured at sale time."""

    product: ProductRef | None
    quantity: int
    price: Decimal
    total: Decimal

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SaleItemRecord:
        """Build an item from a loosely-typed mapping.

        Args:
            data: Item fields (``product`` nested mapping, ``quantity``,
                ``price``, ``total``).

        Returns:
            Item record; ``product`` is None when no usable name exists.
        """
        product: ProductRef | None = None
        raw_product = data.get("product")
        if isinstance(raw_product, Mapping):
            name = _clean_text(raw_product.get("name"))
            if name is not None:
                product = ProductRef(id=_clean_text(raw_product.get("id")), name=name)

        return cls(
            product=product,
            quantity=parse_quantity(data.get("quantity")),
            price=parse_money(data.get("price")),
            total=parse_money(data.get("total")),
        )


@dataclass(frozen=True, slots=True)
class SaleRecord:
    """Read-only snapshot of one sale.

    Attributes:
        id: Opaque identifier.
        date: When the sale happened; None if missing or unparseable.
        total: Pre-tax total.
        tax: Tax amount.
        status: pending, completed or cancelled (kept as given).
        payment_method: Raw payment method, None when unspecified.
        customer: Attached customer, if any.
        items: Line items in sale order.
        notes: Free text.
    """

    id: str
    date: datetime | None
    total: Decimal = ZERO
    tax: Decimal = ZERO
    status: str = "completed"
    payment_method: str | None = None
    customer: CustomerRef | None = None
    items: tuple[SaleItemRecord, ...] = field(default_factory=tuple)
    notes: str | None = None

    @property
    def grand_total(self) -> Decimal:
        """Total including tax."""
        return self.total + self.tax

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SaleRecord:
        """Build a record from a loosely-typed mapping.

        Args:
            data: Sale fields as exported by a document or REST store
                (``id``, ``date``, ``total``, ``tax``, ``status``,
                ``payment_method``, nested ``customer`` and ``items``).

        Returns:
            Sale record with every default applied.
        """
        customer: CustomerRef | None = None
        raw_customer = data.get("customer")
        if isinstance(raw_customer, Mapping):
            customer_id = _clean_text(raw_customer.get("id"))
            if customer_id is not None:
                customer = CustomerRef(
                    id=customer_id,
                    name=_clean_text(raw_customer.get("name")) or customer_id,
                )

        raw_items = data.get("items")
        items: tuple[SaleItemRecord, ...] = ()
        if isinstance(raw_items, Iterable) and not isinstance(raw_items, (str, bytes, Mapping)):
            items = tuple(
                SaleItemRecord.from_mapping(item) for item in raw_items if isinstance(item, Mapping)
            )

        return cls(
            id=_clean_text(data.get("id")) or "",
            date=parse_timestamp(data.get("date")),
            total=parse_money(data.get("total")),
            tax=parse_money(data.get("tax")),
            status=_clean_text(data.get("status")) or "completed",
            payment_method=_clean_text(data.get("payment_method")),
            customer=customer,
            items=items,
            notes=_clean_text(data.get("notes")),
        )


def record_from_sale(sale: Sale) -> SaleRecord:
    """Snapshot an ORM sale (with customer and items loaded).

    Args:
        sale: Sale row with ``customer`` and ``items.product`` loaded.

    Returns:
        Immutable record for the aggregator.
    """
    customer = (
        CustomerRef(id=sale.customer.id, name=sale.customer.name)
        if sale.customer is not None
        else None
    )
    items = tuple(
        SaleItemRecord(
            product=(
                ProductRef(id=item.product.id, name=item.product.name)
                if item.product is not None
                else None
            ),
            quantity=item.quantity or 0,
            price=parse_money(item.price),
            total=parse_money(item.total),
        )
        for item in sale.items
    )
    return SaleRecord(
        id=sale.id,
        date=parse_timestamp(sale.date),
        total=parse_money(sale.total),
        tax=parse_money(sale.tax),
        status=sale.status,
        payment_method=_clean_text(sale.payment_method),
        customer=customer,
        items=items,
        notes=sale.notes,
    )
