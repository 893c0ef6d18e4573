"""Sales: recording transactions, listing them and producing receipt data."""

from app.features.sales.routes import router
from app.features.sales.schemas import ReceiptResponse, SaleCreate, SaleResponse, SaleUpdate
from app.features.sales.service import SaleService, compute_tax

__all__ = [
    "ReceiptResponse",
    "SaleCreate",
    "SaleResponse",
    "SaleService",
    "SaleUpdate",
    "compute_tax",
    "router",
]
