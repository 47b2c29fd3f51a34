"""
Product service.
Handles the catalog: products, categories, display properties,
bundled sub-items and price matrices.
"""

import logging
from typing import List
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status

from app.core import cache
from app.core.cache import query_cache
from app.models.product import (
    Product,
    ProductCategory,
    ProductProperty,
    ProductSubItem,
    ProductMatrix,
    MatrixValue,
)
from app.models.user import User
from app.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductCategoryCreate,
    ProductCategoryUpdate,
    ProductPropertyCreate,
    ProductSubItemCreate,
    ProductMatrixCreate,
    MatrixValueCreate,
)


logger = logging.getLogger(__name__)


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ProductService:
    """Service for product operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _invalidate(self) -> None:
        query_cache.invalidate_on_commit(self.db, cache.DASHBOARD)

    # Products

    async def create(self, creator: User, data: ProductCreate) -> Product:
        """
        Create a new product.

        Args:
            creator: User creating the product
            data: Product data

        Returns:
            Created product
        """
        if data.category_id is not None:
            await self.get_category_or_404(data.category_id)

        product = Product(
            created_by=creator.id,
            **data.model_dump(),
        )

        self.db.add(product)
        await self.db.flush()
        await self.db.refresh(product)

        self._invalidate()
        logger.info("Product %s created: %s", product.id, product.name)
        return product

    async def get_by_id(self, product_id: int) -> Product | None:
        result = await self.db.execute(
            select(Product).where(Product.id == product_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, product_id: int) -> Product:
        """
        Get product by ID or raise 404.

        Raises:
            HTTPException: If product not found
        """
        product = await self.get_by_id(product_id)
        if not product:
            raise _not_found("Product not found")
        return product

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        search: str | None = None,
        category_id: int | None = None,
    ) -> tuple[List[Product], int]:
        """
        List products with pagination and filters.

        Args:
            skip: Number of records to skip
            limit: Maximum records to return
            search: Search term for name, brand or model
            category_id: Filter by category

        Returns:
            Tuple of (products list, total count)
        """
        filters = []
        if search:
            search_filter = f"%{search}%"
            filters.append(or_(
                Product.name.ilike(search_filter),
                Product.brand.ilike(search_filter),
                Product.model.ilike(search_filter),
            ))
        if category_id is not None:
            filters.append(Product.category_id == category_id)

        total_result = await self.db.execute(
            select(func.count(Product.id)).where(*filters)
        )
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Product)
            .where(*filters)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def update(self, product: Product, data: ProductUpdate) -> Product:
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("category_id") is not None:
            await self.get_category_or_404(update_data["category_id"])

        for field, value in update_data.items():
            setattr(product, field, value)

        await self.db.flush()
        await self.db.refresh(product)

        self._invalidate()
        logger.info("Product %s updated", product.id)
        return product

    async def delete(self, product: Product) -> None:
        """
        Delete product with its properties, sub-items and matrices.

        Raises:
            HTTPException: If quotation or order items still reference it
        """
        product_id = product.id
        try:
            await self.db.delete(product)
            await self.db.flush()
        except IntegrityError as exc:
            logger.warning("Product %s could not be deleted: %s", product_id, exc.orig)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Product cannot be deleted while quotations or orders reference it",
            ) from exc

        self._invalidate()
        logger.info("Product %s deleted", product_id)

    # Categories

    async def create_category(self, data: ProductCategoryCreate) -> ProductCategory:
        category = ProductCategory(**data.model_dump())
        self.db.add(category)
        await self.db.flush()
        await self.db.refresh(category)
        self._invalidate()
        return category

    async def list_categories(self) -> List[ProductCategory]:
        result = await self.db.execute(
            select(ProductCategory).order_by(ProductCategory.name)
        )
        return list(result.scalars().all())

    async def get_category_or_404(self, category_id: int) -> ProductCategory:
        category = await self.db.get(ProductCategory, category_id)
        if not category:
            raise _not_found("Category not found")
        return category

    async def update_category(
        self,
        category: ProductCategory,
        data: ProductCategoryUpdate,
    ) -> ProductCategory:
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(category, field, value)
        await self.db.flush()
        await self.db.refresh(category)
        self._invalidate()
        return category

    async def delete_category(self, category: ProductCategory) -> None:
        await self.db.delete(category)
        await self.db.flush()
        self._invalidate()

    # Properties

    async def list_properties(self, product: Product) -> List[ProductProperty]:
        result = await self.db.execute(
            select(ProductProperty)
            .where(ProductProperty.product_id == product.id)
            .order_by(ProductProperty.display_order, ProductProperty.id)
        )
        return list(result.scalars().all())

    async def add_property(self, product: Product, data: ProductPropertyCreate) -> ProductProperty:
        prop = ProductProperty(product_id=product.id, **data.model_dump())
        self.db.add(prop)
        await self.db.flush()
        await self.db.refresh(prop)
        self._invalidate()
        return prop

    async def remove_property(self, product: Product, property_id: int) -> None:
        prop = await self.db.get(ProductProperty, property_id)
        if not prop or prop.product_id != product.id:
            raise _not_found("Property not found")
        await self.db.delete(prop)
        await self.db.flush()
        self._invalidate()

    # Sub-items

    async def list_sub_items(self, product_id: int) -> List[ProductSubItem]:
        """Sub-items of a product, each with its sub product loaded."""
        result = await self.db.execute(
            select(ProductSubItem)
            .where(ProductSubItem.parent_product_id == product_id)
            .order_by(ProductSubItem.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def add_sub_item(self, product: Product, data: ProductSubItemCreate) -> ProductSubItem:
        """
        Bundle another product with this one.

        Raises:
            HTTPException: If the product would contain itself or the sub product does not exist
        """
        if data.sub_product_id == product.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A product cannot be its own sub-item",
            )
        await self.get_or_404(data.sub_product_id)

        sub_item = ProductSubItem(parent_product_id=product.id, **data.model_dump())
        self.db.add(sub_item)
        await self.db.flush()
        await self.db.refresh(sub_item)
        self._invalidate()
        return sub_item

    async def remove_sub_item(self, product: Product, sub_item_id: int) -> None:
        sub_item = await self.db.get(ProductSubItem, sub_item_id)
        if not sub_item or sub_item.parent_product_id != product.id:
            raise _not_found("Sub-item not found")
        await self.db.delete(sub_item)
        await self.db.flush()
        self._invalidate()

    # Matrices

    async def list_matrices(self, product: Product) -> List[ProductMatrix]:
        result = await self.db.execute(
            select(ProductMatrix)
            .where(ProductMatrix.product_id == product.id)
            .order_by(ProductMatrix.id)
        )
        return list(result.scalars().all())

    async def add_matrix(self, product: Product, data: ProductMatrixCreate) -> ProductMatrix:
        matrix = ProductMatrix(product_id=product.id, **data.model_dump())
        self.db.add(matrix)
        await self.db.flush()
        await self.db.refresh(matrix)
        self._invalidate()
        logger.info("Matrix %s added to product %s", matrix.id, product.id)
        return matrix

    async def get_matrix_or_404(self, product_id: int, matrix_id: int) -> ProductMatrix:
        result = await self.db.execute(
            select(ProductMatrix).where(
                ProductMatrix.id == matrix_id,
                ProductMatrix.product_id == product_id,
            )
        )
        matrix = result.scalar_one_or_none()
        if not matrix:
            raise _not_found("Price matrix not found")
        return matrix

    async def remove_matrix(self, matrix: ProductMatrix) -> None:
        await self.db.delete(matrix)
        await self.db.flush()
        self._invalidate()

    async def list_matrix_values(self, matrix: ProductMatrix) -> List[MatrixValue]:
        result = await self.db.execute(
            select(MatrixValue)
            .where(MatrixValue.matrix_id == matrix.id)
            .order_by(MatrixValue.id)
        )
        return list(result.scalars().all())

    async def add_matrix_value(self, matrix: ProductMatrix, data: MatrixValueCreate) -> MatrixValue:
        """
        Price one parameter combination.

        Raises:
            HTTPException: If a parameter beyond the matrix's parameter_count is filled
        """
        value = MatrixValue(matrix_id=matrix.id, **data.model_dump())
        if any(v is not None for v in value.parameters[matrix.parameter_count:]):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"This matrix has {matrix.parameter_count} parameter(s)",
            )

        self.db.add(value)
        await self.db.flush()
        await self.db.refresh(value)
        self._invalidate()
        return value

    async def remove_matrix_value(self, matrix: ProductMatrix, value_id: int) -> None:
        value = await self.db.get(MatrixValue, value_id)
        if not value or value.matrix_id != matrix.id:
            raise _not_found("Matrix value not found")
        await self.db.delete(value)
        await self.db.flush()
        self._invalidate()

    async def lookup_price(
        self,
        matrix: ProductMatrix,
        parameters: List[str | None],
    ) -> Decimal:
        """
        Price of the matrix value whose parameters match exactly.

        Only the first parameter_count parameters take part in the match.

        Raises:
            HTTPException: If no value matches
        """
        wanted = (list(parameters) + [None] * 4)[:matrix.parameter_count]
        for value in await self.list_matrix_values(matrix):
            if value.parameters[:matrix.parameter_count] == wanted:
                return value.price
        raise _not_found("No price defined for these parameters")
