"""Customer book: list, search and manage customers."""

from app.features.customers.routes import router
from app.features.customers.schemas import CustomerCreate, CustomerResponse, CustomerUpdate
from app.features.customers.service import CustomerService

__all__ = [
    "CustomerCreate",
    "CustomerResponse",
    "CustomerService",
    "CustomerUpdate",
    "router",
]
