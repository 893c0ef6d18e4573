#!/usr/bin/env python
"""Demo data seeder CLI.

Load reproducible demo products, customers and sales into the SalesTracker
database, or clear them again.

Usage:
    # Generate the default demo dataset
    python scripts/seed_demo.py --generate --seed 42 --confirm

    # Bigger dataset over the last six months
    python scripts/seed_demo.py --generate --sales 2000 --days 180 --confirm

    # Show current counts
    python scripts/seed_demo.py --status

    # Delete all sales, customers and products
    python scripts/seed_demo.py --delete --confirm
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import Database
from app.core.logging import configure_logging
from app.features.business_settings.service import BusinessSettingsService
from app.shared.seeder import DataSeeder, SeederConfig


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        description="SalesTracker demo data seeder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  seed_demo.py --generate --seed 42 --confirm
  seed_demo.py --generate --customers 50 --products 40 --sales 1500 --days 120 --confirm
  seed_demo.py --status
  seed_demo.py --delete --confirm
        """,
    )

    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument(
        "--generate",
        action="store_true",
        help="Insert a demo dataset (existing rows are kept)",
    )
    mode_group.add_argument(
        "--delete",
        action="store_true",
        help="Delete all sales, sale items, customers and products",
    )
    mode_group.add_argument(
        "--status",
        action="store_true",
        help="Show current data counts",
    )

    settings = get_settings()
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.seeder_default_seed,
        help=f"Random seed for reproducibility (default: {settings.seeder_default_seed})",
    )
    parser.add_argument("--customers", type=int, default=20, help="Customers (default: 20)")
    parser.add_argument("--products", type=int, default=30, help="Products (default: 30)")
    parser.add_argument("--sales", type=int, default=200, help="Sales (default: 200)")
    parser.add_argument(
        "--days",
        type=int,
        default=90,
        help="Spread sales over this many trailing days (default: 90)",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding",
    )
    parser.add_argument(
        "--confirm",
        action="store_true",
        help="Confirm write operations",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=1000,
        help="Batch insert size (default: 1000)",
    )

    return parser


def print_counts(counts: dict[str, int], title: str = "Current Data Counts") -> None:
    """Print table counts in a formatted table."""
    print(f"\n{title}:")
    print("-" * 40)
    for table, count in counts.items():
        print(f"  {table:<30} {count:>8,}")
    print("-" * 40)
    print(f"  {'Total':<30} {sum(counts.values()):>8,}")
    print()


async def run_generate(args: argparse.Namespace, session: AsyncSession) -> int:
    """Run generate operation."""
    if not args.confirm:
        print("ERROR: --confirm flag required for data generation.")
        return 1

    business = await BusinessSettingsService().get_business_settings(session)
    try:
        config = SeederConfig(
            seed=args.seed,
            customers=args.customers,
            products=args.products,
            sales=args.sales,
            days=args.days,
            tax_rate=business.tax_rate,
            batch_size=args.batch_size,
        )
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    print("Configuration:")
    print(f"  Seed:      {config.seed}")
    print(f"  Customers: {config.customers}")
    print(f"  Products:  {config.products}")
    print(f"  Sales:     {config.sales} over {config.days} days")
    print(f"  Tax rate:  {config.tax_rate}%")
    print()

    result = await DataSeeder(config).generate_full(
        session, datetime.now(get_settings().timezone)
    )
    await session.commit()

    print_counts(
        {
            "products": result.products_count,
            "customers": result.customers_count,
            "sales": result.sales_count,
            "sale_items": result.sale_items_count,
        },
        title="Generation Complete",
    )
    return 0


async def run_delete(args: argparse.Namespace, session: AsyncSession) -> int:
    """Run delete operation."""
    if not args.confirm:
        print("ERROR: --confirm flag required for data deletion.")
        return 1

    counts = await DataSeeder(SeederConfig(seed=args.seed)).delete_data(session)
    await session.commit()
    print_counts(counts, title="Deleted")
    return 0


async def run_status(session: AsyncSession) -> int:
    """Show current counts."""
    counts = await DataSeeder(SeederConfig()).get_current_counts(session)
    print_counts(counts)
    return 0


async def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()
    settings = get_settings()
    configure_logging()

    if not args.status and settings.is_production and not settings.seeder_allow_production:
        print("ERROR: Cannot run seeder in production environment.")
        print("Set SEEDER_ALLOW_PRODUCTION=true to override.")
        return 1

    database = Database(settings)
    try:
        if args.create_tables:
            await database.create_all()
        async with database.session_maker() as session:
            if args.generate:
                return await run_generate(args, session)
            if args.delete:
                return await run_delete(args, session)
            return await run_status(session)
    finally:
        await database.dispose()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
