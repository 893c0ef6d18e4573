"""Configuration dataclasses for the seeder module."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class SaleMixConfig:
    """Shape of generated sales.

    Attributes:
        walk_in_probability: Chance a sale has no customer.
        max_items_per_sale: Upper bound of distinct products per sale.
        max_quantity: Upper bound of units per line.
        payment_weights: Relative weight per payment method; ``None`` is unspecified.
        status_weights: Relative weight per sale status.
    """

    walk_in_probability: float = 0.3
    max_items_per_sale: int = 3
    max_quantity: int = 5
    payment_weights: dict[str | None, int] = field(
        default_factory=lambda: {
            "cash": 35,
            "transfer": 30,
            "card": 20,
            "mobile_money": 10,
            None: 5,
        }
    )
    status_weights: dict[str, int] = field(
        default_factory=lambda: {"completed": 85, "pending": 10, "cancelled": 5}
    )


@dataclass
class SeederConfig:
    """Main configuration for the demo data seeder.

    Attributes:
        seed: Random seed; the same seed and reference time give the same data.
        customers: Customers to generate.
        products: Products to generate.
        sales: Sales to generate.
        days: Sales are spread over this many trailing days.
        tax_rate: Percentage applied to each generated sale.
        sale_mix: Payment, status and basket shape.
        batch_size: Rows per INSERT statement.
    """

    seed: int = 42
    customers: int = 20
    products: int = 30
    sales: int = 200
    days: int = 90
    tax_rate: Decimal = Decimal("7.5")
    sale_mix: SaleMixConfig = field(default_factory=SaleMixConfig)
    batch_size: int = 1000

    def __post_init__(self) -> None:
        """Validate counts.

        Raises:
            ValueError: If counts are negative or sales have no products to sell.
        """
        for name in ("customers", "products", "sales"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.days < 1:
            raise ValueError("days must be at least 1")
        if self.sales > 0 and self.products == 0:
            raise ValueError("Generating sales requires at least one product")
        if not 0 <= self.sale_mix.walk_in_probability <= 1:
            raise ValueError("walk_in_probability must be between 0 and 1")
