"""
Product catalog schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any
from pydantic import Field

from app.schemas.base import BaseSchema, PaginatedResponse
from app.models.base import Language
from app.models.product import MAX_MATRIX_PARAMETERS


# Categories

class ProductCategoryCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class ProductCategoryUpdate(BaseSchema):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None


class ProductCategoryResponse(ProductCategoryCreate):
    id: int
    created_at: datetime


# Properties

class ProductPropertyCreate(BaseSchema):
    """Schema for adding a display property to a product."""

    property_name: str = Field(..., min_length=1, max_length=255)
    property_value: str = Field(..., min_length=1)
    language: Language = Language.TR
    show_in_quotation: bool = True
    display_order: int = 0
    conditional_display: str | None = Field(None, max_length=255)


class ProductPropertyResponse(ProductPropertyCreate):
    id: int
    product_id: int


# Sub-items

class ProductSubItemCreate(BaseSchema):
    sub_product_id: int
    quantity: Decimal = Field(default=Decimal("1"), gt=0)


class ProductSubItemResponse(ProductSubItemCreate):
    id: int
    parent_product_id: int
    sub_product_name: str | None = None
    sub_product_price: Decimal | None = None


# Matrices

class ProductMatrixCreate(BaseSchema):
    """Price matrix with one to four named parameters."""

    name: str = Field(..., min_length=1, max_length=255)
    parameter_count: int = Field(default=1, ge=1, le=MAX_MATRIX_PARAMETERS)
    parameter_1_name: str | None = Field(None, max_length=100)
    parameter_2_name: str | None = Field(None, max_length=100)
    parameter_3_name: str | None = Field(None, max_length=100)
    parameter_4_name: str | None = Field(None, max_length=100)


class MatrixValueCreate(BaseSchema):
    param_1_value: str | None = Field(None, max_length=100)
    param_2_value: str | None = Field(None, max_length=100)
    param_3_value: str | None = Field(None, max_length=100)
    param_4_value: str | None = Field(None, max_length=100)
    price: Decimal = Field(..., ge=0)


class MatrixValueResponse(MatrixValueCreate):
    id: int
    matrix_id: int


class ProductMatrixResponse(ProductMatrixCreate):
    id: int
    product_id: int
    values: list[MatrixValueResponse] = []


class MatrixPriceResponse(BaseSchema):
    matrix_id: int
    parameters: list[str | None]
    price: Decimal


# Products

class ProductBase(BaseSchema):
    """Base product schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    brand: str | None = Field(None, max_length=100)
    model: str | None = Field(None, max_length=100)
    category_id: int | None = None
    unit_price: Decimal = Field(..., ge=0, decimal_places=2)
    currency: str = Field(default="TRY", max_length=10)
    unit: str | None = Field(default="adet", max_length=50)
    stock_quantity: int | None = Field(default=0, ge=0)
    hs_code: str | None = Field(None, max_length=50)
    image_url: str | None = Field(None, max_length=500)
    warranty_period: str | None = Field(None, max_length=100)
    technical_specs: Any | None = None
    ignore_sub_item_pricing: bool = False


class ProductCreate(ProductBase):
    """Schema for creating a new product."""
    pass


class ProductUpdate(BaseSchema):
    """Schema for updating a product."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    brand: str | None = Field(None, max_length=100)
    model: str | None = Field(None, max_length=100)
    category_id: int | None = None
    unit_price: Decimal | None = Field(None, ge=0, decimal_places=2)
    currency: str | None = Field(None, max_length=10)
    unit: str | None = Field(None, max_length=50)
    stock_quantity: int | None = Field(None, ge=0)
    hs_code: str | None = Field(None, max_length=50)
    image_url: str | None = Field(None, max_length=500)
    warranty_period: str | None = Field(None, max_length=100)
    technical_specs: Any | None = None
    ignore_sub_item_pricing: bool | None = None


class ProductResponse(ProductBase):
    """Product response schema."""

    id: int
    created_by: int | None
    properties: list[ProductPropertyResponse] = []
    created_at: datetime
    updated_at: datetime


class ProductListResponse(PaginatedResponse):
    """Paginated product list response."""

    items: list[ProductResponse]

