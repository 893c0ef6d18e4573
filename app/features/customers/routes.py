"""API routes for customers."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.customers.schemas import (
    CustomerCreate,
    CustomerResponse,
    CustomerSortField,
    CustomerUpdate,
)
from app.features.customers.service import CustomerService
from app.features.data_platform.models import CustomerStatus
from app.shared.schemas import PaginatedResponse, PaginationParams, SortOrder

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get(
    "",
    response_model=PaginatedResponse[CustomerResponse],
    summary="List customers",
    description="""
List customers with pagination, filtering and sorting.

**Filtering Options**:
- `search`: Case-insensitive match in name, email or phone (min 2 chars)
- `status`: `active` or `inactive`

**Sorting**: `sort_by` one of name, email, total_purchases, created_at; `order` asc or desc.
""",
)
async def list_customers(
    db: AsyncSession = Depends(get_db),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Customers per page (max 100)"),
    search: str | None = Query(None, min_length=2, description="Search text"),
    customer_status: CustomerStatus | None = Query(
        None, alias="status", description="Filter by status"
    ),
    sort_by: CustomerSortField = Query(CustomerSortField.NAME, description="Sort column"),
    order: SortOrder = Query(SortOrder.ASC, description="Sort direction"),
) -> PaginatedResponse[CustomerResponse]:
    """List customers."""
    service = CustomerService()
    return await service.list_customers(
        db=db,
        pagination=PaginationParams(page=page, page_size=page_size),
        search=search,
        status=customer_status,
        sort_by=sort_by,
        order=order,
    )


@router.get("/{customer_id}", response_model=CustomerResponse, summary="Get customer by ID")
async def get_customer(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
) -> CustomerResponse:
    """Get customer details by ID."""
    service = CustomerService()
    return await service.get_customer(db=db, customer_id=customer_id)


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a customer",
)
async def create_customer(
    data: CustomerCreate,
    db: AsyncSession = Depends(get_db),
) -> CustomerResponse:
    """Create a customer."""
    service = CustomerService()
    return await service.create_customer(db=db, data=data)


@router.patch("/{customer_id}", response_model=CustomerResponse, summary="Update a customer")
async def update_customer(
    customer_id: str,
    data: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
) -> CustomerResponse:
    """Update a customer."""
    service = CustomerService()
    return await service.update_customer(db=db, customer_id=customer_id, data=data)


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a customer",
    description="The customer's sales keep existing with no customer attached.",
)
async def delete_customer(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a customer."""
    service = CustomerService()
    await service.delete_customer(db=db, customer_id=customer_id)
