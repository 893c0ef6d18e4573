"""API routes for the product catalog."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.data_platform.models import ProductStatus
from app.features.products.schemas import (
    CategoryListResponse,
    ProductCreate,
    ProductResponse,
    ProductSortField,
    ProductUpdate,
)
from app.features.products.service import ProductService
from app.shared.schemas import PaginatedResponse, PaginationParams, SortOrder

router = APIRouter(prefix="/products", tags=["products"])


@router.get(
    "",
    response_model=PaginatedResponse[ProductResponse],
    summary="List products",
    description="""
List products with pagination, filtering and sorting.

**Filtering Options**:
- `search`: Case-insensitive match in name, category or description (min 2 chars)
- `category`: Exact category
- `status`: `active` or `out_of_stock`

**Sorting**: `sort_by` one of name, price, stock, category, created_at; `order` asc or desc.
""",
)
async def list_products(
    db: AsyncSession = Depends(get_db),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Products per page (max 100)"),
    search: str | None = Query(None, min_length=2, description="Search text"),
    category: str | None = Query(None, description="Filter by category (exact match)"),
    product_status: ProductStatus | None = Query(None, alias="status", description="Filter by status"),
    sort_by: ProductSortField = Query(ProductSortField.NAME, description="Sort column"),
    order: SortOrder = Query(SortOrder.ASC, description="Sort direction"),
) -> PaginatedResponse[ProductResponse]:
    """List products."""
    service = ProductService()
    return await service.list_products(
        db=db,
        pagination=PaginationParams(page=page, page_size=page_size),
        search=search,
        category=category,
        status=product_status,
        sort_by=sort_by,
        order=order,
    )


@router.get(
    "/categories",
    response_model=CategoryListResponse,
    summary="List product categories",
)
async def list_categories(db: AsyncSession = Depends(get_db)) -> CategoryListResponse:
    """Distinct product categories."""
    service = ProductService()
    return await service.list_categories(db=db)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID",
    description="Returns 404 if the product does not exist.",
)
async def get_product(
    product_id: str,
    db: AsyncSession = Depends(get_db),
) -> ProductResponse:
    """Get product details by ID."""
    service = ProductService()
    return await service.get_product(db=db, product_id=product_id)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(
    data: ProductCreate,
    db: AsyncSession = Depends(get_db),
) -> ProductResponse:
    """Create a product."""
    service = ProductService()
    return await service.create_product(db=db, data=data)


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update a product",
    description="Partial update: only fields present in the body are changed.",
)
async def update_product(
    product_id: str,
    data: ProductUpdate,
    db: AsyncSession = Depends(get_db),
) -> ProductResponse:
    """Update a product."""
    service = ProductService()
    return await service.update_product(db=db, product_id=product_id, data=data)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
    description="Sale line items that referenced the product keep existing without a product.",
)
async def delete_product(
    product_id: str,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a product."""
    service = ProductService()
    await service.delete_product(db=db, product_id=product_id)
