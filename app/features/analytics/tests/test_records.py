"""Tests for building sale records at the parse boundary."""

from datetime import UTC, datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.features.analytics.records import (
    CustomerRef,
    ProductRef,
    SaleRecord,
    parse_amount,
    parse_money,
    parse_quantity,
    parse_timestamp,
    record_from_sale,
)


class TestParseTimestamp:
    """Tests for timestamp parsing."""

    def test_iso_with_z_suffix(self) -> None:
        """Test a trailing Z means UTC."""
        assert parse_timestamp("2024-10-18T09:30:00Z") == datetime(2024, 10, 18, 9, 30, tzinfo=UTC)

    def test_iso_with_offset(self) -> None:
        """Test explicit offsets are preserved."""
        parsed = parse_timestamp("2024-10-18T09:30:00+01:00")
        assert parsed is not None
        assert parsed.utcoffset() == timedelta(hours=1)

    def test_naive_is_utc(self) -> None:
        """Test naive strings and datetimes are taken as UTC."""
        assert parse_timestamp("2024-10-18T09:30:00") == datetime(2024, 10, 18, 9, 30, tzinfo=UTC)
        assert parse_timestamp(datetime(2024, 10, 18)) == datetime(2024, 10, 18, tzinfo=UTC)

    def test_aware_datetime_unchanged(self) -> None:
        """Test aware datetimes pass through."""
        moment = datetime(2024, 10, 18, tzinfo=timezone(timedelta(hours=-5)))
        assert parse_timestamp(moment) is moment

    @pytest.mark.parametrize("value", [None, "", "   ", "yesterday", "2024-13-45", 12345, [], {}])
    def test_unparseable_is_none(self, value: object) -> None:
        """Test anything unusable becomes None instead of raising."""
        assert parse_timestamp(value) is None


class TestParseAmounts:
    """Tests for amount and quantity parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1500, Decimal("1500")),
            ("112.50", Decimal("112.50")),
            (12.5, Decimal("12.5")),
            (None, Decimal("0")),
            ("n/a", Decimal("0")),
            ("NaN", Decimal("0")),
            ("Infinity", Decimal("0")),
            (True, Decimal("0")),
            ("-12.5", Decimal("-12.5")),
            ("1e100", Decimal("0")),
            ("-9e999999", Decimal("0")),
        ],
    )
    def test_parse_amount(self, value: object, expected: Decimal) -> None:
        """Test amounts parse to Decimal with zero as the fallback."""
        assert parse_amount(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("250.00", Decimal("250.00")),
            (0, Decimal("0")),
            (-50, Decimal("0")),
            ("-0.01", Decimal("0")),
        ],
    )
    def test_parse_money_is_never_negative(self, value: object, expected: Decimal) -> None:
        """Test sale and line amounts below zero count as zero."""
        assert parse_money(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(3, 3), ("2", 2), ("2.0", 2), (None, 0), ("many", 0)],
    )
    def test_parse_quantity(self, value: object, expected: int) -> None:
        """Test quantities parse to int with zero as the fallback."""
        assert parse_quantity(value) == expected


class TestSaleRecordFromMapping:
    """Tests for building records from loosely-typed mappings."""

    def test_full_mapping(self, sample_sale_mapping: dict) -> None:
        """Test every field is carried over and typed."""
        record = SaleRecord.from_mapping(sample_sale_mapping)

        assert record.id == "abc123"
        assert record.date == datetime(2024, 10, 18, 9, 30, tzinfo=UTC)
        assert record.total == Decimal("1500")
        assert record.tax == Decimal("112.50")
        assert record.grand_total == Decimal("1612.50")
        assert record.payment_method == "transfer"
        assert record.customer == CustomerRef(id="cust-1", name="Ada")
        assert [item.product for item in record.items] == [
            ProductRef(id="p1", name="Rice"),
            ProductRef(id="p2", name="Oil"),
        ]
        assert record.items[1].quantity == 2
        assert record.items[1].total == Decimal("600")
        assert record.notes == "paid in full"

    def test_empty_mapping_gets_defaults(self) -> None:
        """Test an empty mapping yields a fully defaulted record."""
        record = SaleRecord.from_mapping({})

        assert record.id == ""
        assert record.date is None
        assert record.total == 0
        assert record.tax == 0
        assert record.status == "completed"
        assert record.payment_method is None
        assert record.customer is None
        assert record.items == ()

    def test_negative_amounts_become_zero(self) -> None:
        """Test negative sale and line amounts are clamped at the boundary."""
        record = SaleRecord.from_mapping(
            {
                "total": -50,
                "tax": "-3.75",
                "items": [{"product": {"name": "Rice"}, "quantity": 1, "price": -10, "total": -10}],
            }
        )

        assert record.total == 0
        assert record.tax == 0
        assert record.items[0].price == 0
        assert record.items[0].total == 0

    def test_blank_payment_method_is_none(self) -> None:
        """Test a blank payment method is treated as unspecified."""
        assert SaleRecord.from_mapping({"payment_method": "  "}).payment_method is None

    def test_item_without_product_name(self) -> None:
        """Test items whose product has no name keep no product."""
        record = SaleRecord.from_mapping(
            {
                "items": [
                    {"product": {"id": "p1"}, "quantity": 1, "total": 10},
                    {"product": None, "quantity": 1, "total": 10},
                    {"quantity": 1, "total": 10},
                ]
            }
        )

        assert len(record.items) == 3
        assert all(item.product is None for item in record.items)

    def test_malformed_collections_are_ignored(self) -> None:
        """Test non-list items and non-mapping customers are dropped."""
        record = SaleRecord.from_mapping(
            {"items": "Rice x2", "customer": "Ada", "date": "not a date"}
        )

        assert record.items == ()
        assert record.customer is None
        assert record.date is None

    def test_non_mapping_items_skipped(self) -> None:
        """Test stray entries in the item list are skipped."""
        record = SaleRecord.from_mapping({"items": [None, 3, {"quantity": 1}]})
        assert len(record.items) == 1

    def test_customer_without_name_uses_id(self) -> None:
        """Test a nameless customer is labelled by its id."""
        record = SaleRecord.from_mapping({"customer": {"id": "c9"}})
        assert record.customer == CustomerRef(id="c9", name="c9")

    def test_records_are_frozen(self, sample_sale_mapping: dict) -> None:
        """Test records cannot be mutated."""
        record = SaleRecord.from_mapping(sample_sale_mapping)
        with pytest.raises(AttributeError):
            record.total = Decimal("1")  # type: ignore[misc]


class TestRecordFromSale:
    """Tests for snapshotting ORM rows."""

    def test_snapshot(self) -> None:
        """Test customer, items and amounts are copied."""
        rice = SimpleNamespace(id="p1", name="Rice")
        sale = SimpleNamespace(
            id="s1",
            date=datetime(2024, 10, 18, 10, 0, tzinfo=UTC),
            total=Decimal("900.00"),
            tax=Decimal("67.50"),
            status="completed",
            payment_method="cash",
            customer=SimpleNamespace(id="c1", name="Ada"),
            items=[
                SimpleNamespace(product=rice, quantity=3, price=Decimal("300.00"), total=Decimal("900.00")),
                SimpleNamespace(product=None, quantity=1, price=Decimal("5.00"), total=Decimal("5.00")),
            ],
            notes=None,
        )

        record = record_from_sale(sale)  # type: ignore[arg-type]

        assert record.id == "s1"
        assert record.customer == CustomerRef(id="c1", name="Ada")
        assert record.items[0].product == ProductRef(id="p1", name="Rice")
        assert record.items[1].product is None
        assert record.grand_total == Decimal("967.50")

    def test_snapshot_without_customer_or_payment_method(self) -> None:
        """Test optional relations map to None."""
        sale = SimpleNamespace(
            id="s2",
            date=datetime(2024, 10, 18),
            total=Decimal("10"),
            tax=Decimal("0"),
            status="pending",
            payment_method=None,
            customer=None,
            items=[],
            notes="walk-in",
        )

        record = record_from_sale(sale)  # type: ignore[arg-type]

        assert record.customer is None
        assert record.payment_method is None
        assert record.date == datetime(2024, 10, 18, tzinfo=UTC)
        assert record.items == ()
