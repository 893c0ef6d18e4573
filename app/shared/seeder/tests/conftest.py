"""Pytest fixtures for seeder tests."""

import random
from datetime import UTC, datetime

import pytest

from app.shared.seeder.config import SeederConfig


@pytest.fixture
def rng():
    """Create a seeded random number generator."""
    return random.Random(42)


@pytest.fixture
def end():
    """Reference time for generated sale dates."""
    return datetime(2024, 10, 19, 14, 0, tzinfo=UTC)


@pytest.fixture
def small_config():
    """Create a small seeder config for fast tests."""
    return SeederConfig(seed=7, customers=5, products=8, sales=40, days=30, batch_size=10)
