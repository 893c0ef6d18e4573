"""Data generators for products, customers and sales."""

from app.shared.seeder.generators.customer import CustomerGenerator
from app.shared.seeder.generators.product import ProductGenerator
from app.shared.seeder.generators.sales import SaleGenerator

__all__ = [
    "CustomerGenerator",
    "ProductGenerator",
    "SaleGenerator",
]
