"""Shared utilities used across 3+ features."""

from app.shared.models import IdMixin, TimestampMixin, generate_id
from app.shared.schemas import PaginatedResponse, PaginationParams, SortOrder
from app.shared.utils import paginate_response, quantize_money

__all__ = [
    "IdMixin",
    "PaginatedResponse",
    "PaginationParams",
    "SortOrder",
    "TimestampMixin",
    "generate_id",
    "paginate_response",
    "quantize_money",
]
