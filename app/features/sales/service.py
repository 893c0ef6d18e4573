"""Service layer for sales.

Handles recording sales (capturing line prices and computing tax),
header updates, deletion, paginated listing and receipt data.
"""

from datetime import datetime, time, timedelta
from decimal import Decimal

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import get_settings
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.core.logging import get_logger
from app.features.business_settings.service import BusinessSettingsService
from app.features.customers.service import CustomerService
from app.features.data_platform.models import Customer, Product, Sale, SaleItem
from app.features.sales.schemas import (
    CustomerSummary,
    ReceiptBusiness,
    ReceiptLine,
    ReceiptResponse,
    SaleCreate,
    SaleFilters,
    SaleResponse,
    SaleSortField,
    SaleUpdate,
)
from app.shared.schemas import PaginatedResponse, PaginationParams, SortOrder
from app.shared.utils import paginate_response, quantize_money

logger = get_logger(__name__)

UNKNOWN_PRODUCT = "Unknown product"

SORT_COLUMNS = {
    SaleSortField.DATE: Sale.date,
    SaleSortField.TOTAL: Sale.total,
    SaleSortField.STATUS: Sale.status,
}


def compute_tax(total: Decimal, tax_rate: Decimal) -> Decimal:
    """Tax for a pre-tax total at a percentage rate, rounded half-up to cents.

    Args:
        total: Pre-tax amount.
        tax_rate: Percentage, e.g. 7.5 meaning 7.5%.

    Returns:
        Tax amount.
    """
    return quantize_money(total * tax_rate / Decimal(100))


def _with_details(stmt: Select[tuple[Sale]]) -> Select[tuple[Sale]]:
    return stmt.options(
        selectinload(Sale.customer),
        selectinload(Sale.items).selectinload(SaleItem.product),
    )


class SaleService:
    """Service for recording and querying sales."""

    def __init__(self) -> None:
        """Initialize sale service."""
        self.settings = get_settings()

    async def get_sale_row(self, db: AsyncSession, sale_id: str) -> Sale:
        """Load a sale with customer and items (and their products).

        Raises:
            NotFoundError: If the sale does not exist.
        """
        stmt = (
            _with_details(select(Sale))
            .where(Sale.id == sale_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(stmt)
        sale = result.scalar_one_or_none()
        if sale is None:
            raise NotFoundError(
                message=f"Sale not found: {sale_id}",
                details={"sale_id": sale_id},
            )
        return sale

    async def get_sale(self, db: AsyncSession, sale_id: str) -> SaleResponse:
        """Get a single sale with customer and items."""
        return SaleResponse.model_validate(await self.get_sale_row(db, sale_id))

    async def list_sales(
        self,
        db: AsyncSession,
        pagination: PaginationParams,
        filters: SaleFilters,
        sort_by: SaleSortField = SaleSortField.DATE,
        order: SortOrder = SortOrder.DESC,
    ) -> PaginatedResponse[SaleResponse]:
        """List sales, newest first by default.

        Args:
            db: Database session.
            pagination: Page and page size.
            filters: Search text, status, payment method, customer and
                inclusive date range (calendar days in the business timezone).
            sort_by: Sort column.
            order: Sort direction.

        Returns:
            Paginated list of sales.

        Raises:
            BadRequestError: If end_date is before start_date.
        """
        if filters.start_date and filters.end_date and filters.end_date < filters.start_date:
            raise BadRequestError(
                message="end_date must not be before start_date",
                details={
                    "start_date": filters.start_date.isoformat(),
                    "end_date": filters.end_date.isoformat(),
                },
            )

        stmt = select(Sale).outerjoin(Sale.customer)

        if filters.status is not None:
            stmt = stmt.where(Sale.status == filters.status.value)
        if filters.payment_method is not None:
            stmt = stmt.where(Sale.payment_method == filters.payment_method.value)
        if filters.customer_id is not None:
            stmt = stmt.where(Sale.customer_id == filters.customer_id)
        tz = self.settings.timezone
        if filters.start_date is not None:
            stmt = stmt.where(Sale.date >= datetime.combine(filters.start_date, time.min, tz))
        if filters.end_date is not None:
            end = datetime.combine(filters.end_date + timedelta(days=1), time.min, tz)
            stmt = stmt.where(Sale.date < end)
        if filters.search is not None and len(filters.search) >= 2:
            search_pattern = f"%{filters.search}%"
            stmt = stmt.where(
                or_(
                    Sale.id.ilike(search_pattern),
                    Sale.notes.ilike(search_pattern),
                    Customer.name.ilike(search_pattern),
                )
            )

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await db.execute(count_stmt)).scalar_one()

        column = SORT_COLUMNS[sort_by]
        ordering = column.desc() if order == SortOrder.DESC else column.asc()
        stmt = (
            _with_details(stmt)
            .order_by(ordering, Sale.id)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )

        result = await db.execute(stmt)
        sales = result.scalars().all()

        logger.info(
            "sales.listed",
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
            filters=filters.model_dump(mode="json", exclude_none=True),
        )

        return paginate_response(
            [SaleResponse.model_validate(sale) for sale in sales],
            total,
            pagination,
        )

    async def create_sale(self, db: AsyncSession, data: SaleCreate) -> SaleResponse:
        """Record a sale.

        Unit prices default to each product's current price; line totals are
        price x quantity and the sale total is their sum. Tax defaults to the
        business tax rate applied to that total.

        Args:
            db: Database session.
            data: Sale header and items.

        Returns:
            The created sale.

        Raises:
            NotFoundError: If the customer or any product does not exist.
            ConflictError: If a referenced row disappears before the insert.
        """
        customer: Customer | None = None
        if data.customer_id is not None:
            customer = await CustomerService().get_customer_row(db, data.customer_id)

        product_ids = {item.product_id for item in data.items}
        result = await db.execute(select(Product).where(Product.id.in_(product_ids)))
        products = {product.id: product for product in result.scalars().all()}
        missing = sorted(product_ids - products.keys())
        if missing:
            raise NotFoundError(
                message=f"Product not found: {', '.join(missing)}",
                details={"product_ids": missing},
            )

        items: list[SaleItem] = []
        for position, item in enumerate(data.items):
            product = products[item.product_id]
            price = item.price if item.price is not None else product.price
            items.append(
                SaleItem(
                    product=product,
                    position=position,
                    quantity=item.quantity,
                    price=price,
                    total=quantize_money(price * item.quantity),
                )
            )
        total = sum((item.total for item in items), Decimal("0"))

        tax = data.tax
        tax_rate: Decimal | None = None
        if tax is None:
            business = await BusinessSettingsService().get_business_settings(db)
            tax_rate = business.tax_rate
            tax = compute_tax(total, tax_rate)

        sale = Sale(
            date=data.date or datetime.now(self.settings.timezone),
            total=total,
            tax=tax,
            status=data.status,
            payment_method=data.payment_method,
            customer=customer,
            notes=data.notes,
            items=items,
        )
        db.add(sale)
        try:
            await db.flush()
        except IntegrityError as e:
            # A referenced product or customer was deleted after it was looked up.
            logger.warning("sales.create_conflict", error=str(e.orig), customer_id=data.customer_id)
            raise ConflictError(
                message="Sale references a product or customer that no longer exists",
                details={"product_ids": sorted(product_ids), "customer_id": data.customer_id},
            ) from e

        logger.info(
            "sales.created",
            sale_id=sale.id,
            total=str(total),
            tax=str(tax),
            tax_rate=None if tax_rate is None else str(tax_rate),
            items=len(items),
            customer_id=data.customer_id,
        )
        return await self.get_sale(db, sale.id)

    async def update_sale(
        self,
        db: AsyncSession,
        sale_id: str,
        data: SaleUpdate,
    ) -> SaleResponse:
        """Update sale header fields. Items are immutable.

        Raises:
            NotFoundError: If the sale or a newly referenced customer does not exist.
            ConflictError: If the change violates a constraint.
        """
        sale = await self.get_sale_row(db, sale_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("customer_id") is not None:
            sale.customer = await CustomerService().get_customer_row(db, changes["customer_id"])
        elif "customer_id" in changes:
            sale.customer = None
        changes.pop("customer_id", None)

        for field, value in changes.items():
            setattr(sale, field, value)
        try:
            await db.flush()
        except IntegrityError as e:
            logger.warning("sales.update_conflict", sale_id=sale_id, error=str(e.orig))
            raise ConflictError(
                message=f"Sale update conflicts with stored data: {sale_id}",
                details={"sale_id": sale_id},
            ) from e

        logger.info("sales.updated", sale_id=sale_id, fields=sorted(data.model_fields_set))
        return await self.get_sale(db, sale_id)

    async def delete_sale(self, db: AsyncSession, sale_id: str) -> None:
        """Delete a sale and its items.

        Raises:
            NotFoundError: If the sale does not exist.
        """
        sale = await db.get(Sale, sale_id)
        if sale is None:
            raise NotFoundError(
                message=f"Sale not found: {sale_id}",
                details={"sale_id": sale_id},
            )
        await db.delete(sale)
        await db.flush()

        logger.info("sales.deleted", sale_id=sale_id)

    async def get_receipt(self, db: AsyncSession, sale_id: str) -> ReceiptResponse:
        """Assemble receipt data for a sale.

        Args:
            db: Database session.
            sale_id: Sale identifier.

        Returns:
            Business header, customer, lines and totals.
        """
        sale = await self.get_sale_row(db, sale_id)
        business = await BusinessSettingsService().get_business_settings(db)

        return ReceiptResponse(
            sale_id=sale.id,
            date=sale.date,
            status=sale.status,
            payment_method=sale.payment_method,
            business=ReceiptBusiness(
                name=business.business_name,
                address=business.address,
                phone=business.phone,
                email=business.email,
                tax_id=business.tax_id,
            ),
            customer=(
                CustomerSummary.model_validate(sale.customer) if sale.customer is not None else None
            ),
            lines=[
                ReceiptLine(
                    product_name=item.product.name if item.product is not None else UNKNOWN_PRODUCT,
                    quantity=item.quantity,
                    unit_price=item.price,
                    line_total=item.total,
                )
                for item in sale.items
            ],
            subtotal=sale.total,
            tax=sale.tax,
            tax_rate=business.tax_rate,
            grand_total=sale.total + sale.tax,
            currency=business.currency,
            notes=sale.notes,
        )
