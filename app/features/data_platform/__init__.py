"""Persistence models for products, customers, sales and business settings."""

from app.features.data_platform.models import (
    BusinessSettings,
    Customer,
    CustomerStatus,
    PaymentMethod,
    Product,
    ProductStatus,
    Sale,
    SaleItem,
    SaleStatus,
)

__all__ = [
    "BusinessSettings",
    "Customer",
    "CustomerStatus",
    "PaymentMethod",
    "Product",
    "ProductStatus",
    "Sale",
    "SaleItem",
    "SaleStatus",
]
