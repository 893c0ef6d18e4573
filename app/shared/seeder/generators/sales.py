"""Sale and sale item generator."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from app.shared.seeder.generators.base import random_id
from app.shared.utils import quantize_money

if TYPE_CHECKING:
    from app.shared.seeder.config import SeederConfig

NOTES = [None, None, None, "Delivered", "Paid on pickup", "Bulk order", "Regular customer"]


class SaleGenerator:
    """Generator for sales with 1..N line items.

    Lines capture the product price at generation time; sale totals are the
    sum of line totals and tax follows the configured rate.
    """

    def __init__(
        self,
        rng: random.Random,
        config: SeederConfig,
        products: list[dict[str, Any]],
        customer_ids: list[str],
        end: datetime,
    ) -> None:
        """Initialize the sale generator.

        Args:
            rng: Random number generator for reproducibility.
            config: Seeder configuration (counts, days, tax rate, sale mix).
            products: Product records to sell, each with ``id`` and ``price``.
            customer_ids: Customers to attach; may be empty.
            end: Latest sale time; sales fall in ``[end - days, end]``.
        """
        self.rng = rng
        self.config = config
        self.products = products
        self.customer_ids = customer_ids
        self.end = end

    def _pick(self, weights: dict[Any, int]) -> Any:
        options = list(weights)
        return self.rng.choices(options, weights=[weights[o] for o in options], k=1)[0]

    def _sale_date(self) -> datetime:
        window = self.config.days * 86400
        return self.end - timedelta(seconds=self.rng.randrange(window))

    def _customer_id(self) -> str | None:
        mix = self.config.sale_mix
        if not self.customer_ids or self.rng.random() < mix.walk_in_probability:
            return None
        return self.rng.choice(self.customer_ids)

    def generate(self) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        """Generate sales and their items.

        Returns:
            Tuple of (sale dictionaries, sale item dictionaries), oldest sale first.
        """
        mix = self.config.sale_mix
        sales: list[dict[str, Any]] = []
        items: list[dict[str, Any]] = []

        for _ in range(self.config.sales):
            sale_id = random_id(self.rng)
            line_count = self.rng.randint(1, min(mix.max_items_per_sale, len(self.products)))
            total = Decimal("0")

            for position, product in enumerate(self.rng.sample(self.products, line_count)):
                quantity = self.rng.randint(1, mix.max_quantity)
                line_total = quantize_money(product["price"] * quantity)
                total += line_total
                items.append(
                    {
                        "id": random_id(self.rng),
                        "sale_id": sale_id,
                        "product_id": product["id"],
                        "position": position,
                        "quantity": quantity,
                        "price": product["price"],
                        "total": line_total,
                    }
                )

            sales.append(
                {
                    "id": sale_id,
                    "date": self._sale_date(),
                    "total": total,
                    "tax": quantize_money(total * self.config.tax_rate / Decimal(100)),
                    "status": self._pick(mix.status_weights),
                    "payment_method": self._pick(mix.payment_weights),
                    "customer_id": self._customer_id(),
                    "notes": self.rng.choice(NOTES),
                }
            )

        sales.sort(key=lambda sale: sale["date"])
        return sales, items
