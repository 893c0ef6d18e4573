"""Service layer for the customer book."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.features.customers.schemas import (
    CustomerCreate,
    CustomerResponse,
    CustomerSortField,
    CustomerUpdate,
)
from app.features.data_platform.models import Customer, CustomerStatus
from app.shared.schemas import PaginatedResponse, PaginationParams, SortOrder
from app.shared.utils import paginate_response

logger = get_logger(__name__)

SORT_COLUMNS = {
    CustomerSortField.NAME: Customer.name,
    CustomerSortField.EMAIL: Customer.email,
    CustomerSortField.TOTAL_PURCHASES: Customer.total_purchases,
    CustomerSortField.CREATED_AT: Customer.created_at,
}


class CustomerService:
    """Service for managing customers."""

    async def list_customers(
        self,
        db: AsyncSession,
        pagination: PaginationParams,
        search: str | None = None,
        status: CustomerStatus | None = None,
        sort_by: CustomerSortField = CustomerSortField.NAME,
        order: SortOrder = SortOrder.ASC,
    ) -> PaginatedResponse[CustomerResponse]:
        """List customers with pagination and filtering.

        Args:
            db: Database session.
            pagination: Page and page size.
            search: Search in name, email and phone (case-insensitive).
            status: Filter by status.
            sort_by: Sort column.
            order: Sort direction.

        Returns:
            Paginated list of customers.
        """
        stmt = select(Customer)

        if status is not None:
            stmt = stmt.where(Customer.status == status.value)
        if search is not None and len(search) >= 2:
            search_pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    Customer.name.ilike(search_pattern),
                    Customer.email.ilike(search_pattern),
                    Customer.phone.ilike(search_pattern),
                )
            )

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await db.execute(count_stmt)).scalar_one()

        column = SORT_COLUMNS[sort_by]
        ordering = column.desc() if order == SortOrder.DESC else column.asc()
        stmt = stmt.order_by(ordering, Customer.id).offset(pagination.offset).limit(pagination.limit)

        result = await db.execute(stmt)
        customers = result.scalars().all()

        logger.info(
            "customers.listed",
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
            filters={"search": search, "status": status},
        )

        return paginate_response(
            [CustomerResponse.model_validate(customer) for customer in customers],
            total,
            pagination,
        )

    async def get_customer_row(self, db: AsyncSession, customer_id: str) -> Customer:
        """Load a customer row.

        Raises:
            NotFoundError: If the customer does not exist.
        """
        customer = await db.get(Customer, customer_id)
        if customer is None:
            raise NotFoundError(
                message=f"Customer not found: {customer_id}",
                details={"customer_id": customer_id},
            )
        return customer

    async def get_customer(self, db: AsyncSession, customer_id: str) -> CustomerResponse:
        """Get a single customer."""
        return CustomerResponse.model_validate(await self.get_customer_row(db, customer_id))

    async def create_customer(self, db: AsyncSession, data: CustomerCreate) -> CustomerResponse:
        """Create a customer."""
        customer = Customer(**data.model_dump())
        db.add(customer)
        await db.flush()
        await db.refresh(customer)

        logger.info("customers.created", customer_id=customer.id)
        return CustomerResponse.model_validate(customer)

    async def update_customer(
        self,
        db: AsyncSession,
        customer_id: str,
        data: CustomerUpdate,
    ) -> CustomerResponse:
        """Apply a partial update to a customer."""
        customer = await self.get_customer_row(db, customer_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(customer, field, value)
        await db.flush()
        await db.refresh(customer)

        logger.info("customers.updated", customer_id=customer_id, fields=sorted(changes))
        return CustomerResponse.model_validate(customer)

    async def delete_customer(self, db: AsyncSession, customer_id: str) -> None:
        """Delete a customer; their sales remain with no customer attached."""
        customer = await self.get_customer_row(db, customer_id)
        await db.delete(customer)
        await db.flush()

        logger.info("customers.deleted", customer_id=customer_id)
