"""Seeder module for generating demo data.

Provides:
- Generators for products, customers and sales with line items
- A seeded orchestrator that inserts, counts and deletes demo rows

The same seed and reference time always produce the same records.
"""

from app.shared.seeder.config import SaleMixConfig, SeederConfig
from app.shared.seeder.core import DataSeeder, SeedData, SeederResult

__all__ = [
    "DataSeeder",
    "SaleMixConfig",
    "SeedData",
    "SeederConfig",
    "SeederResult",
]
