"""API routes for sales and receipts."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.data_platform.models import PaymentMethod, SaleStatus
from app.features.sales.schemas import (
    ReceiptResponse,
    SaleCreate,
    SaleFilters,
    SaleResponse,
    SaleSortField,
    SaleUpdate,
)
from app.features.sales.service import SaleService
from app.shared.schemas import PaginatedResponse, PaginationParams, SortOrder

router = APIRouter(prefix="/sales", tags=["sales"])


@router.get(
    "",
    response_model=PaginatedResponse[SaleResponse],
    summary="List sales",
    description="""
List sales with customer and items, newest first by default.

**Filtering Options**:
- `search`: Case-insensitive match in sale id, notes or customer name (min 2 chars)
- `status`: pending, completed or cancelled
- `payment_method`: cash, card, transfer or mobile_money
- `customer_id`: Sales of one customer
- `start_date` / `end_date`: Inclusive calendar days (business timezone)

**Sorting**: `sort_by` one of date, total, status; `order` asc or desc.
""",
)
async def list_sales(
    db: AsyncSession = Depends(get_db),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Sales per page (max 100)"),
    search: str | None = Query(None, min_length=2, description="Search text"),
    sale_status: SaleStatus | None = Query(None, alias="status", description="Filter by status"),
    payment_method: PaymentMethod | None = Query(None, description="Filter by payment method"),
    customer_id: str | None = Query(None, description="Filter by customer"),
    start_date: date | None = Query(None, description="First day (inclusive). YYYY-MM-DD."),
    end_date: date | None = Query(None, description="Last day (inclusive). YYYY-MM-DD."),
    sort_by: SaleSortField = Query(SaleSortField.DATE, description="Sort column"),
    order: SortOrder = Query(SortOrder.DESC, description="Sort direction"),
) -> PaginatedResponse[SaleResponse]:
    """List sales."""
    service = SaleService()
    return await service.list_sales(
        db=db,
        pagination=PaginationParams(page=page, page_size=page_size),
        filters=SaleFilters(
            search=search,
            status=sale_status,
            payment_method=payment_method,
            customer_id=customer_id,
            start_date=start_date,
            end_date=end_date,
        ),
        sort_by=sort_by,
        order=order,
    )


@router.get("/{sale_id}", response_model=SaleResponse, summary="Get sale by ID")
async def get_sale(
    sale_id: str,
    db: AsyncSession = Depends(get_db),
) -> SaleResponse:
    """Get a sale with customer and items."""
    service = SaleService()
    return await service.get_sale(db=db, sale_id=sale_id)


@router.get(
    "/{sale_id}/receipt",
    response_model=ReceiptResponse,
    summary="Get receipt data",
    description="""
Receipt data for a sale: business header, customer, lines and totals.

- `subtotal` is the pre-tax sale total, `grand_total` is subtotal + tax
- Lines whose product was deleted show "Unknown product"
- `tax_rate` and `currency` come from the current business settings
""",
)
async def get_receipt(
    sale_id: str,
    db: AsyncSession = Depends(get_db),
) -> ReceiptResponse:
    """Get receipt data for a sale."""
    service = SaleService()
    return await service.get_receipt(db=db, sale_id=sale_id)


@router.post(
    "",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a sale",
    description="""
Record a sale with at least one item.

- Each `product_id` must exist (404 otherwise); so must `customer_id` when given
- Unit `price` defaults to the product's current price
- Line total = price x quantity; sale `total` = sum of line totals
- `tax` defaults to total x business tax rate / 100, rounded half-up to cents
- `date` defaults to now
""",
)
async def create_sale(
    data: SaleCreate,
    db: AsyncSession = Depends(get_db),
) -> SaleResponse:
    """Record a sale."""
    service = SaleService()
    return await service.create_sale(db=db, data=data)


@router.patch(
    "/{sale_id}",
    response_model=SaleResponse,
    summary="Update a sale",
    description="Updates header fields (date, status, payment_method, notes, customer_id, tax). "
    "Items cannot be changed once recorded.",
)
async def update_sale(
    sale_id: str,
    data: SaleUpdate,
    db: AsyncSession = Depends(get_db),
) -> SaleResponse:
    """Update a sale header."""
    service = SaleService()
    return await service.update_sale(db=db, sale_id=sale_id, data=data)


@router.delete(
    "/{sale_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a sale",
    description="Deletes the sale and its items.",
)
async def delete_sale(
    sale_id: str,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a sale."""
    service = SaleService()
    await service.delete_sale(db=db, sale_id=sale_id)
