"""Product catalog: list, search and manage products."""

from app.features.products.routes import router
from app.features.products.schemas import ProductCreate, ProductResponse, ProductUpdate
from app.features.products.service import ProductService

__all__ = [
    "ProductCreate",
    "ProductResponse",
    "ProductService",
    "ProductUpdate",
    "router",
]
