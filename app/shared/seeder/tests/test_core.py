"""Tests for DataSeeder core orchestration."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.features.data_platform.models import Product, Sale
from app.shared.seeder.config import SeederConfig
from app.shared.seeder.core import DataSeeder, SeederResult


class TestBuild:
    """Tests for in-memory generation."""

    def test_same_seed_same_data(self, small_config, end):
        """Test the same seed and reference time reproduce every record."""
        first = DataSeeder(small_config).build(end)
        second = DataSeeder(small_config).build(end)

        assert first == second

    def test_build_is_repeatable_on_one_seeder(self, small_config, end):
        """Test calling build twice does not advance the random state."""
        seeder = DataSeeder(small_config)
        assert seeder.build(end) == seeder.build(end)

    def test_different_seeds_differ(self, end):
        """Test different seeds give different data."""
        first = DataSeeder(SeederConfig(seed=1, sales=10)).build(end)
        second = DataSeeder(SeederConfig(seed=2, sales=10)).build(end)

        assert first.sales != second.sales

    def test_counts(self, small_config, end):
        """Test requested counts are produced."""
        data = DataSeeder(small_config).build(end)

        assert len(data.products) == 8
        assert len(data.customers) == 5
        assert len(data.sales) == 40
        assert len(data.sale_items) >= 40


class TestBatchInsert:
    """Tests for batched inserts."""

    @pytest.mark.asyncio
    async def test_empty_records(self, small_config):
        """Test nothing is executed for an empty list."""
        db = AsyncMock()
        count = await DataSeeder(small_config)._batch_insert(db, MagicMock(), [])

        assert count == 0
        db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_batches(self, small_config, end):
        """Test records are split by batch size and rowcounts summed."""
        data = DataSeeder(small_config).build(end)
        db = AsyncMock()
        db.execute.return_value = MagicMock(rowcount=10)

        count = await DataSeeder(small_config)._batch_insert(db, Sale, data.sales)

        assert db.execute.await_count == 4
        assert count == 40

    @pytest.mark.asyncio
    async def test_unknown_rowcount_falls_back_to_batch_length(self, small_config, end):
        """Test a driver reporting -1 counts the batch as inserted."""
        data = DataSeeder(small_config).build(end)
        db = AsyncMock()
        db.execute.return_value = MagicMock(rowcount=-1)

        count = await DataSeeder(small_config)._batch_insert(db, Product, data.products)

        assert count == 8


class TestGenerateFull:
    """Tests for generate_full."""

    @pytest.mark.asyncio
    async def test_returns_counts(self, small_config, end):
        """Test result carries inserted counts and seed."""
        seeder = DataSeeder(small_config)
        data = seeder.build(end)
        db = AsyncMock()
        db.execute.return_value = MagicMock(rowcount=None)

        result = await seeder.generate_full(db, end)

        assert isinstance(result, SeederResult)
        assert result.seed == 7
        assert result.products_count == 8
        assert result.customers_count == 5
        assert result.sales_count == 40
        assert result.sale_items_count == len(data.sale_items)
        db.commit.assert_not_called()


class TestDeleteData:
    """Tests for delete_data."""

    @pytest.mark.asyncio
    async def test_counts_then_deletes(self, small_config):
        """Test counts are reported and one DELETE runs per table."""
        db = AsyncMock()
        count_result = MagicMock()
        count_result.scalar.return_value = 3
        db.execute.return_value = count_result

        counts = await DataSeeder(small_config).delete_data(db)

        assert counts == {"sale_items": 3, "sales": 3, "customers": 3, "products": 3}
        # 4 counts + 4 deletes
        assert db.execute.await_count == 8
