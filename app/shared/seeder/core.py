"""Core seeder orchestration module."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.features.data_platform.models import Customer, Product, Sale, SaleItem
from app.shared.seeder.generators import CustomerGenerator, ProductGenerator, SaleGenerator

if TYPE_CHECKING:
    from app.shared.seeder.config import SeederConfig

logger = get_logger(__name__)

# Deletion order respects foreign keys
TABLES: list[tuple[str, type]] = [
    ("sale_items", SaleItem),
    ("sales", Sale),
    ("customers", Customer),
    ("products", Product),
]


@dataclass
class SeedData:
    """Generated records, ready for insertion."""

    products: list[dict[str, Any]] = field(default_factory=list)
    customers: list[dict[str, Any]] = field(default_factory=list)
    sales: list[dict[str, Any]] = field(default_factory=list)
    sale_items: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class SeederResult:
    """Result of a seeder operation.

    Attributes:
        products_count: Number of products inserted.
        customers_count: Number of customers inserted.
        sales_count: Number of sales inserted.
        sale_items_count: Number of sale items inserted.
        seed: Random seed used.
    """

    products_count: int = 0
    customers_count: int = 0
    sales_count: int = 0
    sale_items_count: int = 0
    seed: int = 42


class DataSeeder:
    """Generates reproducible demo products, customers and sales."""

    def __init__(self, config: SeederConfig) -> None:
        """Initialize the data seeder.

        Args:
            config: Seeder configuration.
        """
        self.config = config

    def build(self, end: datetime) -> SeedData:
        """Generate all records in memory.

        A fresh generator is seeded on every call, so the same config and
        ``end`` always give identical records.

        Args:
            end: Reference time; sales fall in the trailing ``days`` before it.

        Returns:
            Generated records.
        """
        rng = random.Random(self.config.seed)
        products = ProductGenerator(rng, self.config.products).generate()
        customers = CustomerGenerator(rng, self.config.customers).generate()
        sales, sale_items = SaleGenerator(
            rng,
            self.config,
            products,
            [customer["id"] for customer in customers],
            end,
        ).generate()
        return SeedData(products, customers, sales, sale_items)

    async def _batch_insert(
        self,
        db: AsyncSession,
        table: type,
        records: list[dict[str, Any]],
    ) -> int:
        """Insert records in batches.

        Args:
            db: Async database session.
            table: SQLAlchemy model class.
            records: List of record dictionaries.

        Returns:
            Number of records inserted.
        """
        if not records:
            return 0

        total_inserted = 0
        for i in range(0, len(records), self.config.batch_size):
            batch = records[i : i + self.config.batch_size]
            stmt = pg_insert(table).values(batch).on_conflict_do_nothing()
            cursor_result = await db.execute(stmt)
            row_count = getattr(cursor_result, "rowcount", None)
            total_inserted += row_count if row_count is not None and row_count >= 0 else len(batch)

        return total_inserted

    async def generate_full(self, db: AsyncSession, end: datetime) -> SeederResult:
        """Generate and insert a dataset.

        Existing rows are kept. The caller owns the transaction.

        Args:
            db: Async database session.
            end: Reference time for sale dates.

        Returns:
            Counts of inserted records.
        """
        logger.info(
            "seeder.generate.started",
            seed=self.config.seed,
            products=self.config.products,
            customers=self.config.customers,
            sales=self.config.sales,
            days=self.config.days,
        )

        data = self.build(end)
        result = SeederResult(
            products_count=await self._batch_insert(db, Product, data.products),
            customers_count=await self._batch_insert(db, Customer, data.customers),
            sales_count=await self._batch_insert(db, Sale, data.sales),
            sale_items_count=await self._batch_insert(db, SaleItem, data.sale_items),
            seed=self.config.seed,
        )

        logger.info(
            "seeder.generate.completed",
            seed=result.seed,
            products=result.products_count,
            customers=result.customers_count,
            sales=result.sales_count,
            sale_items=result.sale_items_count,
        )
        return result

    async def get_current_counts(self, db: AsyncSession) -> dict[str, int]:
        """Get current row counts for the seeded tables.

        Args:
            db: Async database session.

        Returns:
            Dictionary of table names to row counts.
        """
        counts: dict[str, int] = {}
        for name, model in TABLES:
            result = await db.execute(select(func.count()).select_from(model))
            counts[name] = result.scalar() or 0
        return counts

    async def delete_data(self, db: AsyncSession) -> dict[str, int]:
        """Delete all sales, sale items, customers and products.

        Business settings are left alone. The caller owns the transaction.

        Args:
            db: Async database session.

        Returns:
            Dictionary of table names to deleted row counts.
        """
        counts = await self.get_current_counts(db)

        for name, model in TABLES:
            logger.info(f"seeder.delete.{name}", count=counts[name])
            await db.execute(delete(model))

        logger.info("seeder.delete.completed", total_deleted=sum(counts.values()))
        return counts
