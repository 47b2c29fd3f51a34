"""
Quotation service.
Handles quotation CRUD, line items with the total rollup, per-quotation
settings, revisions and conversion to an order.
"""

import logging
import re
from typing import List
from datetime import date
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from fastapi import HTTPException, status

from app.core import cache
from app.core.cache import query_cache
from app.core.config import settings
from app.models.company import Company
from app.models.order import Order, OrderItem, OrderStatus
from app.models.product import Product
from app.models.quotation import (
    Quotation,
    QuotationItem,
    QuotationSettings,
    QuotationResponsibility,
    QuotationStatus,
    ResponsibilityType,
)
from app.models.user import User
from app.schemas.quotation import (
    QuotationCreate,
    QuotationUpdate,
    QuotationItemCreate,
    QuotationItemUpdate,
    QuotationSettingsUpdate,
    QuotationSettingsResponse,
    QuotationPdfOptions,
    ResponsibilityResponse,
)
from app.services.order import OrderService, next_daily_number
from app.services.pdf import QuotationPDFService
from app.services.pricing import line_total, items_total, quantize
from app.services.product import ProductService
from app.services.settings import SettingsService


logger = logging.getLogger(__name__)

RESPONSIBLE_PARTIES = {
    ResponsibilityType.CUSTOMER: "Müşteri",
    ResponsibilityType.SUPPLIER: "Tedarikçi",
}

REVISION_SUFFIX = re.compile(r"-R\d+$")


class QuotationService:
    """Service for quotation operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.products = ProductService(db)

    def _invalidate(self) -> None:
        query_cache.invalidate_on_commit(self.db, cache.DASHBOARD)

    async def _generate_quotation_number(self, day: date | None = None) -> str:
        """
        Generate unique quotation number.
        Format: TKL-{YYYYMMDD}-{sequence of the day}
        """
        day = day or date.today()
        prefix = f"TKL-{day:%Y%m%d}-"

        # Revisions end in -R<n> and never match the numeric suffix
        result = await self.db.execute(
            select(Quotation.quotation_number).where(
                Quotation.quotation_number.like(f"{prefix}%")
            )
        )
        return next_daily_number(prefix, result.scalars().all())

    async def _get_company_or_404(self, company_id: int) -> Company:
        company = await self.db.get(Company, company_id)
        if not company:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company not found",
            )
        return company

    async def create(self, creator: User, data: QuotationCreate) -> Quotation:
        """
        Create a new quotation, optionally with items.

        Args:
            creator: User creating the quotation
            data: Quotation data

        Returns:
            Created quotation with its total computed
        """
        await self._get_company_or_404(data.company_id)

        quotation = Quotation(
            created_by=creator.id,
            company_id=data.company_id,
            title=data.title,
            quotation_number=data.quotation_number or await self._generate_quotation_number(),
            status=data.status,
            currency=data.currency or settings.DEFAULT_CURRENCY,
            language=data.language,
            quotation_date=data.quotation_date or date.today(),
            valid_until=data.valid_until,
            notes=data.notes,
            prepared_by=data.prepared_by or creator.id,
            reviewed_by=data.reviewed_by,
        )

        self.db.add(quotation)
        await self.db.flush()

        for item_data in data.items:
            await self._create_item(quotation, item_data)

        await self._recalculate_total(quotation)

        self._invalidate()
        logger.info("Quotation %s created: %s", quotation.id, quotation.quotation_number)
        return await self.reload(quotation.id)

    async def get_by_id(self, quotation_id: int) -> Quotation | None:
        result = await self.db.execute(
            select(Quotation).where(Quotation.id == quotation_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, quotation_id: int) -> Quotation:
        """Get quotation by ID or raise 404."""
        quotation = await self.get_by_id(quotation_id)
        if not quotation:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Quotation not found",
            )
        return quotation

    async def reload(self, quotation_id: int) -> Quotation:
        """Re-read a quotation and its collections after a write."""
        result = await self.db.execute(
            select(Quotation)
            .where(Quotation.id == quotation_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        status: QuotationStatus | None = None,
        company_id: int | None = None,
        search: str | None = None,
    ) -> tuple[List[Quotation], int]:
        """List quotations, newest first, each with its company."""
        filters = []
        if status:
            filters.append(Quotation.status == status)
        if company_id:
            filters.append(Quotation.company_id == company_id)
        if search:
            search_filter = f"%{search}%"
            filters.append(or_(
                Quotation.title.ilike(search_filter),
                Quotation.quotation_number.ilike(search_filter),
            ))

        total_result = await self.db.execute(
            select(func.count(Quotation.id)).where(*filters)
        )
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Quotation)
            .where(*filters)
            .order_by(Quotation.created_at.desc(), Quotation.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def update(self, quotation: Quotation, data: QuotationUpdate) -> Quotation:
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("company_id") is not None:
            await self._get_company_or_404(update_data["company_id"])

        for field, value in update_data.items():
            setattr(quotation, field, value)

        await self.db.flush()

        self._invalidate()
        logger.info("Quotation %s updated", quotation.id)
        return await self.reload(quotation.id)

    async def delete(self, quotation: Quotation) -> None:
        """Delete quotation with its items, settings and responsibilities."""
        await self.db.delete(quotation)
        await self.db.flush()

        self._invalidate()
        logger.info("Quotation %s deleted", quotation.id)

    # Items

    async def _create_item(
        self,
        quotation: Quotation,
        data: QuotationItemCreate,
    ) -> QuotationItem:
        """
        Create a line item and, on request, one child row per product sub-item.

        Raises:
            HTTPException: If the product, matrix or matrix price does not exist
        """
        product = await self.products.get_or_404(data.product_id)

        unit_price = data.unit_price
        if unit_price is None and data.selected_matrix_id and data.matrix_parameters:
            matrix = await self.products.get_matrix_or_404(product.id, data.selected_matrix_id)
            unit_price = await self.products.lookup_price(matrix, data.matrix_parameters)
        if unit_price is None:
            unit_price = product.unit_price

        custom_properties = dict(data.custom_properties or {})
        if data.matrix_parameters:
            custom_properties["matrix_parameters"] = data.matrix_parameters

        item = QuotationItem(
            quotation_id=quotation.id,
            product_id=product.id,
            quantity=data.quantity,
            unit_price=unit_price,
            discount_percentage=data.discount_percentage,
            total_price=line_total(unit_price, data.quantity, data.discount_percentage),
            selected_matrix_id=data.selected_matrix_id,
            custom_properties=custom_properties or None,
        )
        self.db.add(item)
        await self.db.flush()

        if data.include_sub_items:
            await self._add_sub_item_rows(item, product)

        return item

    async def _add_sub_item_rows(self, parent: QuotationItem, product: Product) -> None:
        for sub in await self.products.list_sub_items(product.id):
            quantity = Decimal(sub.quantity) * Decimal(parent.quantity)
            unit_price = Decimal("0") if product.ignore_sub_item_pricing else sub.sub_product.unit_price
            self.db.add(QuotationItem(
                quotation_id=parent.quotation_id,
                product_id=sub.sub_product_id,
                quantity=quantity,
                unit_price=unit_price,
                discount_percentage=parent.discount_percentage,
                total_price=line_total(unit_price, quantity, parent.discount_percentage),
                is_sub_item=True,
                parent_item_id=parent.id,
            ))
        await self.db.flush()

    async def _load_items(self, quotation_id: int) -> List[QuotationItem]:
        result = await self.db.execute(
            select(QuotationItem)
            .where(QuotationItem.quotation_id == quotation_id)
            .order_by(QuotationItem.id)
        )
        return list(result.scalars().all())

    async def _recalculate_total(self, quotation: Quotation) -> Decimal:
        """Store the sum of the remaining item totals on the quotation."""
        quotation.total_amount = items_total(await self._load_items(quotation.id))
        await self.db.flush()
        return quotation.total_amount

    async def list_items(self, quotation: Quotation) -> List[QuotationItem]:
        return await self._load_items(quotation.id)

    async def _get_item_or_404(self, quotation: Quotation, item_id: int) -> QuotationItem:
        item = await self.db.get(QuotationItem, item_id)
        if not item or item.quotation_id != quotation.id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Quotation item not found",
            )
        return item

    async def add_item(self, quotation: Quotation, data: QuotationItemCreate) -> Quotation:
        """Add an item and recompute the quotation total."""
        item = await self._create_item(quotation, data)
        await self._recalculate_total(quotation)

        self._invalidate()
        logger.info("Item %s added to quotation %s", item.id, quotation.id)
        return await self.reload(quotation.id)

    async def update_item(
        self,
        quotation: Quotation,
        item_id: int,
        data: QuotationItemUpdate,
    ) -> Quotation:
        """
        Update an item and recompute the quotation total.

        Changing the quantity of a bundle scales its sub-item rows.
        """
        item = await self._get_item_or_404(quotation, item_id)
        update_data = data.model_dump(exclude_unset=True)
        old_quantity = Decimal(item.quantity)

        for field, value in update_data.items():
            setattr(item, field, value)
        item.total_price = line_total(item.unit_price, item.quantity, item.discount_percentage)

        if not item.is_sub_item:
            for child in await self._children(item):
                if "quantity" in update_data:
                    child.quantity = Decimal(child.quantity) / old_quantity * Decimal(item.quantity)
                if "discount_percentage" in update_data:
                    child.discount_percentage = item.discount_percentage
                child.total_price = line_total(child.unit_price, child.quantity, child.discount_percentage)

        await self.db.flush()
        await self._recalculate_total(quotation)

        self._invalidate()
        logger.info("Item %s of quotation %s updated", item.id, quotation.id)
        return await self.reload(quotation.id)

    async def _children(self, item: QuotationItem) -> List[QuotationItem]:
        result = await self.db.execute(
            select(QuotationItem).where(QuotationItem.parent_item_id == item.id)
        )
        return list(result.scalars().all())

    async def remove_item(self, quotation: Quotation, item_id: int) -> Quotation:
        """Remove an item with its sub-item rows and recompute the quotation total."""
        item = await self._get_item_or_404(quotation, item_id)

        for child in await self._children(item):
            await self.db.delete(child)
        await self.db.flush()
        await self.db.delete(item)
        await self.db.flush()

        await self._recalculate_total(quotation)

        self._invalidate()
        logger.info("Item %s removed from quotation %s", item_id, quotation.id)
        return await self.reload(quotation.id)

    # Settings

    def _settings_response(self, quotation: Quotation) -> QuotationSettingsResponse:
        texts = {r.responsibility_type: r.description for r in quotation.responsibilities}
        row = quotation.settings
        return QuotationSettingsResponse(
            quotation_id=quotation.id,
            company_info_id=row.company_info_id if row else None,
            bank_info_id=row.bank_info_id if row else None,
            payment_method_id=row.payment_method_id if row else None,
            delivery_method_id=row.delivery_method_id if row else None,
            customer_responsibilities=texts.get(ResponsibilityType.CUSTOMER),
            supplier_responsibilities=texts.get(ResponsibilityType.SUPPLIER),
            responsibilities=[ResponsibilityResponse.model_validate(r) for r in quotation.responsibilities],
        )

    async def get_settings(self, quotation: Quotation) -> QuotationSettingsResponse:
        return self._settings_response(quotation)

    async def save_settings(
        self,
        quotation: Quotation,
        data: QuotationSettingsUpdate,
    ) -> QuotationSettingsResponse:
        """
        Upsert the settings row and replace the responsibilities.

        A blank responsibility text removes that responsibility.
        """
        row = quotation.settings
        if row is None:
            row = QuotationSettings(quotation_id=quotation.id)
            self.db.add(row)
        row.company_info_id = data.company_info_id
        row.bank_info_id = data.bank_info_id
        row.payment_method_id = data.payment_method_id
        row.delivery_method_id = data.delivery_method_id

        texts = {
            ResponsibilityType.CUSTOMER: data.customer_responsibilities,
            ResponsibilityType.SUPPLIER: data.supplier_responsibilities,
        }
        existing = {r.responsibility_type: r for r in quotation.responsibilities}
        for kind, text in texts.items():
            current = existing.get(kind)
            if not text:
                if current is not None:
                    await self.db.delete(current)
            elif current is not None:
                current.description = text
            else:
                self.db.add(QuotationResponsibility(
                    quotation_id=quotation.id,
                    responsibility_type=kind,
                    responsible_party=RESPONSIBLE_PARTIES[kind],
                    description=text,
                    language=quotation.language,
                ))

        await self.db.flush()

        self._invalidate()
        logger.info("Settings saved for quotation %s", quotation.id)
        return self._settings_response(await self.reload(quotation.id))

    # Revisions and conversion

    async def revise(self, quotation: Quotation, creator: User) -> Quotation:
        """
        Copy a quotation and its items into a new draft revision.

        The revision is numbered <base number>-R<n> within its family.
        """
        base_number = REVISION_SUFFIX.sub("", quotation.quotation_number)
        result = await self.db.execute(
            select(func.max(Quotation.revision_number)).where(
                or_(
                    Quotation.quotation_number == base_number,
                    Quotation.quotation_number.like(f"{base_number}-R%"),
                )
            )
        )
        revision_number = (result.scalar() or 0) + 1

        revision = Quotation(
            created_by=creator.id,
            company_id=quotation.company_id,
            title=quotation.title,
            quotation_number=f"{base_number}-R{revision_number}",
            status=QuotationStatus.DRAFT,
            currency=quotation.currency,
            language=quotation.language,
            quotation_date=date.today(),
            valid_until=quotation.valid_until,
            notes=quotation.notes,
            total_amount=quotation.total_amount,
            revision_number=revision_number,
            parent_quotation_id=quotation.id,
            prepared_by=creator.id,
        )
        self.db.add(revision)
        await self.db.flush()

        items = await self._load_items(quotation.id)
        copies: dict[int, QuotationItem] = {}
        # Parents first so children can point at the copied parent
        for item in sorted(items, key=lambda i: i.is_sub_item):
            copy = QuotationItem(
                quotation_id=revision.id,
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
                discount_percentage=item.discount_percentage,
                total_price=item.total_price,
                is_sub_item=item.is_sub_item,
                parent_item_id=copies[item.parent_item_id].id if item.parent_item_id in copies else None,
                selected_matrix_id=item.selected_matrix_id,
                custom_properties=item.custom_properties,
            )
            self.db.add(copy)
            await self.db.flush()
            copies[item.id] = copy

        await self._recalculate_total(revision)

        self._invalidate()
        logger.info(
            "Quotation %s revised as %s",
            quotation.quotation_number,
            revision.quotation_number,
        )
        return await self.reload(revision.id)

    async def convert_to_order(self, quotation: Quotation, creator: User) -> Order:
        """
        Convert an accepted quotation into an order.

        Each main item becomes one order line carrying its sub-item rows'
        totals, so the order total equals the quotation total.

        Raises:
            HTTPException: If the quotation is not accepted or was already converted
        """
        if quotation.status != QuotationStatus.ACCEPTED:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Only accepted quotations can be converted to an order",
            )

        existing = await self.db.execute(
            select(func.count(Order.id)).where(Order.quotation_id == quotation.id)
        )
        if existing.scalar():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="This quotation has already been converted to an order",
            )

        orders = OrderService(self.db)
        order = Order(
            created_by=creator.id,
            company_id=quotation.company_id,
            quotation_id=quotation.id,
            title=quotation.title,
            order_number=await orders.generate_order_number(),
            status=OrderStatus.PENDING,
            currency=quotation.currency,
            notes=quotation.notes,
        )
        self.db.add(order)
        await self.db.flush()

        items = await self._load_items(quotation.id)
        child_totals: dict[int, Decimal] = {}
        for item in items:
            if item.is_sub_item and item.parent_item_id is not None:
                child_totals[item.parent_item_id] = (
                    child_totals.get(item.parent_item_id, Decimal("0")) + Decimal(item.total_price)
                )

        for item in items:
            if item.is_sub_item:
                continue
            total_price = quantize(Decimal(item.total_price) + child_totals.get(item.id, Decimal("0")))
            self.db.add(OrderItem(
                order_id=order.id,
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=quantize(total_price / Decimal(item.quantity)),
                total_price=total_price,
            ))

        await self.db.flush()
        order.total_amount = quantize(Decimal(quotation.total_amount))
        await self.db.flush()

        self._invalidate()
        logger.info("Quotation %s converted to order %s", quotation.id, order.order_number)
        return await orders.reload(order.id)

    # PDF

    async def _pdf_context(self, quotation: Quotation) -> dict:
        """
        Seller, bank and printed parameters of a quotation.

        Seller and bank come from the quotation settings, falling back to
        the default company and bank records.
        """
        lookups = SettingsService(self.db)
        row = quotation.settings
        seller = row.company_info if row and row.company_info else await lookups.default_company_info()
        bank = row.bank_info if row and row.bank_info else await lookups.default_bank_info()
        parameters = await lookups.pdf_parameters(quotation.language)

        return {"seller": seller, "bank": bank, "parameters": parameters}

    async def render_pdf(self, quotation: Quotation, options: QuotationPdfOptions) -> bytes:
        """Render a quotation as PDF bytes."""
        context = await self._pdf_context(quotation)
        return QuotationPDFService(options).build_quotation_pdf(quotation, **context)

    async def archive_pdf(
        self,
        quotation: Quotation,
        options: QuotationPdfOptions,
        storage_path: str | None = None,
    ) -> str:
        """Render a quotation and keep the file under PDF_STORAGE_PATH."""
        context = await self._pdf_context(quotation)
        path = QuotationPDFService(options, storage_path).save_quotation_pdf(quotation, **context)
        logger.info("Quotation %s archived as %s", quotation.id, path)
        return path
