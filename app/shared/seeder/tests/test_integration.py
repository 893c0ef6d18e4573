"""Integration tests for seeder (requires PostgreSQL).

Run with: pytest app/shared/seeder/tests/test_integration.py -v -m integration

These tests insert and delete rows in every sales table; point
DATABASE_URL at a throwaway database.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.data_platform.models import Sale, SaleItem
from app.shared.seeder import DataSeeder, SeederConfig

pytestmark = pytest.mark.integration


async def test_generate_and_delete(db_session: AsyncSession, end):
    """Test a generated dataset is consistent in the database and can be wiped."""
    seeder = DataSeeder(SeederConfig(seed=3, customers=4, products=6, sales=25, days=14))

    result = await seeder.generate_full(db_session, end)
    await db_session.flush()

    assert result.sales_count == 25
    counts = await seeder.get_current_counts(db_session)
    assert counts["sales"] == 25
    assert counts["products"] == 6

    # Sale totals equal the sum of their line totals
    line_sums = (
        await db_session.execute(
            select(SaleItem.sale_id, func.sum(SaleItem.total)).group_by(SaleItem.sale_id)
        )
    ).all()
    totals = dict((await db_session.execute(select(Sale.id, Sale.total))).all())
    for sale_id, line_sum in line_sums:
        assert Decimal(line_sum) == totals[sale_id]

    oldest = (await db_session.execute(select(func.min(Sale.date)))).scalar_one()
    assert oldest > end - timedelta(days=14)

    deleted = await seeder.delete_data(db_session)
    assert deleted["sales"] == 25
    assert sum((await seeder.get_current_counts(db_session)).values()) == 0
