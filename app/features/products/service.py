"""Service layer for the product catalog.

Provides paginated listing with search and filtering, plus create, update
and delete of products.
"""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.features.data_platform.models import Product, ProductStatus
from app.features.products.schemas import (
    CategoryListResponse,
    ProductCreate,
    ProductResponse,
    ProductSortField,
    ProductUpdate,
)
from app.shared.schemas import PaginatedResponse, PaginationParams, SortOrder
from app.shared.utils import paginate_response

logger = get_logger(__name__)

SORT_COLUMNS = {
    ProductSortField.NAME: Product.name,
    ProductSortField.PRICE: Product.price,
    ProductSortField.STOCK: Product.stock,
    ProductSortField.CATEGORY: Product.category,
    ProductSortField.CREATED_AT: Product.created_at,
}


class ProductService:
    """Service for managing products.

    All methods are async and use SQLAlchemy 2.0 style queries.
    """

    async def list_products(
        self,
        db: AsyncSession,
        pagination: PaginationParams,
        search: str | None = None,
        category: str | None = None,
        status: ProductStatus | None = None,
        sort_by: ProductSortField = ProductSortField.NAME,
        order: SortOrder = SortOrder.ASC,
    ) -> PaginatedResponse[ProductResponse]:
        """List products with pagination and filtering.

        Args:
            db: Database session.
            pagination: Page and page size.
            search: Search in name, category and description (case-insensitive).
            category: Filter by category (exact match).
            status: Filter by status.
            sort_by: Sort column.
            order: Sort direction.

        Returns:
            Paginated list of products.
        """
        stmt = select(Product)

        if category is not None:
            stmt = stmt.where(Product.category == category)
        if status is not None:
            stmt = stmt.where(Product.status == status.value)
        if search is not None and len(search) >= 2:
            search_pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    Product.name.ilike(search_pattern),
                    Product.category.ilike(search_pattern),
                    Product.description.ilike(search_pattern),
                )
            )

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await db.execute(count_stmt)).scalar_one()

        column = SORT_COLUMNS[sort_by]
        ordering = column.desc() if order == SortOrder.DESC else column.asc()
        stmt = stmt.order_by(ordering, Product.id).offset(pagination.offset).limit(pagination.limit)

        result = await db.execute(stmt)
        products = result.scalars().all()

        logger.info(
            "products.listed",
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
            filters={"search": search, "category": category, "status": status},
        )

        return paginate_response(
            [ProductResponse.model_validate(product) for product in products],
            total,
            pagination,
        )

    async def list_categories(self, db: AsyncSession) -> CategoryListResponse:
        """Distinct, non-empty product categories in alphabetical order."""
        stmt = (
            select(Product.category)
            .where(Product.category.is_not(None), Product.category != "")
            .distinct()
            .order_by(Product.category)
        )
        result = await db.execute(stmt)
        return CategoryListResponse(categories=list(result.scalars().all()))

    async def _get_or_raise(self, db: AsyncSession, product_id: str) -> Product:
        product = await db.get(Product, product_id)
        if product is None:
            raise NotFoundError(
                message=f"Product not found: {product_id}",
                details={"product_id": product_id},
            )
        return product

    async def get_product(self, db: AsyncSession, product_id: str) -> ProductResponse:
        """Get a single product.

        Raises:
            NotFoundError: If the product does not exist.
        """
        return ProductResponse.model_validate(await self._get_or_raise(db, product_id))

    async def create_product(self, db: AsyncSession, data: ProductCreate) -> ProductResponse:
        """Create a product.

        Args:
            db: Database session.
            data: Product fields.

        Returns:
            The created product.
        """
        product = Product(**data.model_dump())
        db.add(product)
        await db.flush()
        await db.refresh(product)

        logger.info("products.created", product_id=product.id, name=product.name)
        return ProductResponse.model_validate(product)

    async def update_product(
        self,
        db: AsyncSession,
        product_id: str,
        data: ProductUpdate,
    ) -> ProductResponse:
        """Apply a partial update to a product.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = await self._get_or_raise(db, product_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(product, field, value)
        await db.flush()
        await db.refresh(product)

        logger.info("products.updated", product_id=product_id, fields=sorted(changes))
        return ProductResponse.model_validate(product)

    async def delete_product(self, db: AsyncSession, product_id: str) -> None:
        """Delete a product. Line items that referenced it keep existing without it.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = await self._get_or_raise(db, product_id)
        await db.delete(product)
        await db.flush()

        logger.info("products.deleted", product_id=product_id)
