"""Product catalog generator."""

from __future__ import annotations

import random
from decimal import Decimal
from typing import Any

from app.shared.seeder.generators.base import random_id

# (name, category, min price, max price) in whole currency units
PRODUCT_CATALOG: list[tuple[str, str, int, int]] = [
    ("Rice (5kg)", "Grains", 4000, 9000),
    ("Beans (1kg)", "Grains", 1200, 2500),
    ("Garri (2kg)", "Grains", 1000, 2200),
    ("Semovita (1kg)", "Grains", 1300, 2000),
    ("Spaghetti", "Grains", 600, 1100),
    ("Indomie Noodles (carton)", "Grains", 7000, 11000),
    ("Palm Oil (1L)", "Cooking", 1100, 2500),
    ("Groundnut Oil (1L)", "Cooking", 1800, 3200),
    ("Tomato Paste", "Cooking", 300, 700),
    ("Seasoning Cubes", "Cooking", 200, 600),
    ("Salt (500g)", "Cooking", 150, 400),
    ("Sugar (500g)", "Cooking", 700, 1400),
    ("Bottled Water (75cl)", "Beverages", 150, 300),
    ("Malt Drink", "Beverages", 350, 600),
    ("Soft Drink (50cl)", "Beverages", 250, 500),
    ("Tea Bags", "Beverages", 800, 1800),
    ("Powdered Milk (400g)", "Beverages", 2500, 4500),
    ("Chocolate Drink (500g)", "Beverages", 2200, 4000),
    ("Bread", "Bakery", 800, 1800),
    ("Meat Pie", "Bakery", 400, 900),
    ("Chin Chin", "Snacks", 300, 800),
    ("Plantain Chips", "Snacks", 250, 600),
    ("Biscuits", "Snacks", 150, 500),
    ("Laundry Detergent", "Household", 900, 2500),
    ("Bar Soap", "Household", 300, 700),
    ("Toilet Roll (4 pack)", "Household", 900, 1800),
    ("Air Time Voucher", "Services", 100, 1000),
]

DESCRIPTIONS = [
    None,
    "Best seller",
    "Restocked weekly",
    "Local brand",
    "Imported",
]


class ProductGenerator:
    """Generator for catalog products."""

    def __init__(self, rng: random.Random, count: int) -> None:
        """Initialize the product generator.

        Args:
            rng: Random number generator for reproducibility.
            count: Number of products to generate.
        """
        self.rng = rng
        self.count = count

    def _price(self, low: int, high: int) -> Decimal:
        """Price rounded to the nearest 50."""
        return Decimal(self.rng.randrange(low, high + 1, 50)).quantize(Decimal("0.01"))

    def generate(self) -> list[dict[str, Any]]:
        """Generate product records.

        Names are unique; past the catalog size a numbered variant is used.

        Returns:
            List of product dictionaries ready for database insertion.
        """
        catalog = self.rng.sample(PRODUCT_CATALOG, len(PRODUCT_CATALOG))
        products: list[dict[str, Any]] = []

        for i in range(self.count):
            name, category, low, high = catalog[i % len(catalog)]
            variant = i // len(catalog)
            stock = self.rng.randint(0, 200)
            products.append(
                {
                    "id": random_id(self.rng),
                    "name": name if variant == 0 else f"{name} #{variant + 1}",
                    "description": self.rng.choice(DESCRIPTIONS),
                    "price": self._price(low, high),
                    "stock": stock,
                    "category": category,
                    "status": "active" if stock > 0 else "out_of_stock",
                }
            )

        return products
