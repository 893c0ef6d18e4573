"""Seeder feature module for managing demo data via REST API.

Loads reproducible demo products, customers and sales into an empty
install, and clears them again.
"""

from app.features.seeder.routes import router

__all__ = ["router"]
