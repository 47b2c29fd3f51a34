"""
Product catalog models.
Products with categories, display properties, bundled sub-items and
parameterised price matrices.
"""

from typing import Optional, List, Any
from decimal import Decimal
from sqlalchemy import String, Text, ForeignKey, Integer, Numeric, Boolean, JSON, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, CreatorMixin, Language


MAX_MATRIX_PARAMETERS = 4


class ProductCategory(BaseModel):
    """Product category."""

    __tablename__ = "product_categories"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<ProductCategory(id={self.id}, name='{self.name}')>"


class Product(BaseModel, CreatorMixin):
    """
    Product model.

    Attributes:
        name: Product name
        description: Detailed description
        brand: Manufacturer brand
        model: Manufacturer model code
        category_id: Optional category
        unit_price: List price per unit
        currency: Currency of unit_price
        unit: Unit of measurement
        stock_quantity: Units in stock
        hs_code: Customs tariff code
        image_url: Product image
        warranty_period: Warranty description
        technical_specs: Free-form technical data
        ignore_sub_item_pricing: Bundle sub-items at no extra charge
    """

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    brand: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    model: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("product_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Pricing
    unit_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
    )
    currency: Mapped[str] = mapped_column(
        String(10),
        default="TRY",
        nullable=False,
    )
    unit: Mapped[Optional[str]] = mapped_column(
        String(50),
        default="adet",
        nullable=True,
    )
    stock_quantity: Mapped[Optional[int]] = mapped_column(
        Integer,
        default=0,
        nullable=True,
    )

    # Catalog details
    hs_code: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    image_url: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )
    warranty_period: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    technical_specs: Mapped[Optional[Any]] = mapped_column(
        JSON,
        nullable=True,
    )
    ignore_sub_item_pricing: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    # Relationships
    category: Mapped[Optional["ProductCategory"]] = relationship(
        "ProductCategory",
        lazy="selectin",
    )
    properties: Mapped[List["ProductProperty"]] = relationship(
        "ProductProperty",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductProperty.display_order",
        lazy="selectin",
    )
    sub_items: Mapped[List["ProductSubItem"]] = relationship(
        "ProductSubItem",
        foreign_keys="ProductSubItem.parent_product_id",
        back_populates="parent_product",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    matrices: Mapped[List["ProductMatrix"]] = relationship(
        "ProductMatrix",
        back_populates="product",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def quotation_properties(self) -> List["ProductProperty"]:
        """Properties flagged for display on quotations, in display order."""
        return [p for p in self.properties if p.show_in_quotation]

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.unit_price})>"


class ProductProperty(BaseModel):
    """
    Named property shown with a product (e.g. "Power: 5 kW").

    Attributes:
        product_id: Owning product
        property_name: Label
        property_value: Value
        language: Language of the label/value
        show_in_quotation: Print on quotation PDFs
        display_order: Sort key
        conditional_display: Optional display condition
    """

    __tablename__ = "product_properties"

    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    property_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    property_value: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    language: Mapped[Language] = mapped_column(
        SQLEnum(Language),
        default=Language.TR,
        nullable=False,
    )
    show_in_quotation: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    display_order: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    conditional_display: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    product: Mapped["Product"] = relationship(
        "Product",
        back_populates="properties",
    )


class ProductSubItem(BaseModel):
    """A product bundled with another product."""

    __tablename__ = "product_sub_items"

    parent_product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sub_product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    quantity: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        default=Decimal("1"),
        nullable=False,
    )

    parent_product: Mapped["Product"] = relationship(
        "Product",
        foreign_keys=[parent_product_id],
        back_populates="sub_items",
    )
    sub_product: Mapped["Product"] = relationship(
        "Product",
        foreign_keys=[sub_product_id],
        lazy="selectin",
    )

    @property
    def sub_product_name(self) -> Optional[str]:
        return self.sub_product.name if self.sub_product else None

    @property
    def sub_product_price(self) -> Optional[Decimal]:
        return self.sub_product.unit_price if self.sub_product else None


class ProductMatrix(BaseModel):
    """
    Price matrix for product variants.

    A matrix declares up to four parameter names (e.g. width, height);
    each MatrixValue row prices one combination of parameter values.
    """

    __tablename__ = "product_matrices"

    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    parameter_count: Mapped[int] = mapped_column(
        Integer,
        default=1,
        nullable=False,
    )
    parameter_1_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    parameter_2_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    parameter_3_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    parameter_4_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    product: Mapped["Product"] = relationship(
        "Product",
        back_populates="matrices",
    )
    values: Mapped[List["MatrixValue"]] = relationship(
        "MatrixValue",
        back_populates="matrix",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def parameter_names(self) -> List[Optional[str]]:
        names = [
            self.parameter_1_name,
            self.parameter_2_name,
            self.parameter_3_name,
            self.parameter_4_name,
        ]
        return names[:self.parameter_count]

    def __repr__(self) -> str:
        return f"<ProductMatrix(id={self.id}, name='{self.name}', params={self.parameter_count})>"


class MatrixValue(BaseModel):
    """Price of one parameter combination in a product matrix."""

    __tablename__ = "matrix_values"

    matrix_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("product_matrices.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    param_1_value: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    param_2_value: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    param_3_value: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    param_4_value: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
    )

    matrix: Mapped["ProductMatrix"] = relationship(
        "ProductMatrix",
        back_populates="values",
    )

    @property
    def parameters(self) -> List[Optional[str]]:
        return [
            self.param_1_value,
            self.param_2_value,
            self.param_3_value,
            self.param_4_value,
        ]
