"""
Settings service.
Uniform CRUD over the settings and lookup tables, with cached list reads.
"""

import logging
from typing import Any, List, Type
from fastapi import HTTPException, status
from pydantic import BaseModel as PydanticModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from app.core import cache
from app.core.cache import query_cache
from app.models.base import BaseModel, Language
from app.models.settings import CompanyInfo, BankInfo, DictionaryEntry, CompanySetting
from app.models.user import User


logger = logging.getLogger(__name__)


class LookupService:
    """
    CRUD for one settings table.

    List results are served through the query cache as plain dicts
    rendered with the response schema.
    """

    def __init__(
        self,
        db: AsyncSession,
        model: Type[BaseModel],
        response_schema: Type[PydanticModel],
        label: str,
    ):
        self.db = db
        self.model = model
        self.response_schema = response_schema
        self.label = label

    @property
    def has_default_flag(self) -> bool:
        return hasattr(self.model, "is_default")

    def _invalidate(self) -> None:
        query_cache.invalidate_on_commit(self.db, cache.SETTINGS)

    def _filters(self, filters: dict[str, Any]) -> list:
        return [
            getattr(self.model, column) == value
            for column, value in filters.items()
            if value is not None
        ]

    async def _query(self, **filters) -> List[dict]:
        query = select(self.model).where(*self._filters(filters))
        if self.has_default_flag:
            query = query.order_by(self.model.is_default.desc(), self.model.id)
        else:
            query = query.order_by(self.model.id)
        result = await self.db.execute(query)
        return [
            self.response_schema.model_validate(row).model_dump(mode="json")
            for row in result.scalars().all()
        ]

    async def list(self, **filters) -> List[dict]:
        """Rows matching the equality filters, defaults first, through the cache."""
        return await query_cache.get_or_set(
            cache.SETTINGS,
            lambda: self._query(**filters),
            self.model.__tablename__,
            **filters,
        )

    async def get_or_404(self, row_id: int) -> Any:
        row = await self.db.get(self.model, row_id)
        if not row:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{self.label} not found",
            )
        return row

    async def _clear_other_defaults(self, row: Any) -> None:
        """Only one row of a table with is_default may be the default."""
        if self.has_default_flag and row.is_default:
            await self.db.execute(
                update(self.model)
                .where(self.model.id != row.id, self.model.is_default.is_(True))
                .values(is_default=False)
            )

    async def _check_unique(self, values: dict[str, Any], exclude_id: int | None = None) -> None:
        if self.model is not DictionaryEntry:
            return
        query = select(DictionaryEntry.id).where(
            DictionaryEntry.key_name == values["key_name"],
            DictionaryEntry.language == values["language"],
        )
        if exclude_id is not None:
            query = query.where(DictionaryEntry.id != exclude_id)
        if (await self.db.execute(query)).first() is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Translation for '{values['key_name']}' in {values['language']} already exists",
            )

    async def create(self, creator: User, data: PydanticModel) -> Any:
        values = data.model_dump()
        await self._check_unique(values)
        if hasattr(self.model, "created_by"):
            values["created_by"] = creator.id

        row = self.model(**values)
        self.db.add(row)
        await self.db.flush()
        await self._clear_other_defaults(row)
        await self.db.refresh(row)

        self._invalidate()
        logger.info("%s %s created", self.label, row.id)
        return row

    async def update(self, row: Any, data: PydanticModel) -> Any:
        update_data = data.model_dump(exclude_unset=True)
        if self.model is DictionaryEntry and ({"key_name", "language"} & update_data.keys()):
            await self._check_unique(
                {
                    "key_name": update_data.get("key_name", row.key_name),
                    "language": update_data.get("language", row.language),
                },
                exclude_id=row.id,
            )

        for field, value in update_data.items():
            setattr(row, field, value)
        await self.db.flush()
        await self._clear_other_defaults(row)
        await self.db.refresh(row)

        self._invalidate()
        logger.info("%s %s updated", self.label, row.id)
        return row

    async def delete(self, row: Any) -> None:
        await self.db.delete(row)
        await self.db.flush()

        self._invalidate()
        logger.info("%s %s deleted", self.label, row.id)


class SettingsService:
    """Settings lookups used outside the settings endpoints."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def default_company_info(self) -> CompanyInfo | None:
        result = await self.db.execute(
            select(CompanyInfo).order_by(CompanyInfo.is_default.desc(), CompanyInfo.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def default_bank_info(self) -> BankInfo | None:
        result = await self.db.execute(
            select(BankInfo).order_by(BankInfo.is_default.desc(), BankInfo.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def translations(self, language: Language = Language.TR, category: str | None = None) -> dict[str, str]:
        """key_name -> value for one language."""
        query = select(DictionaryEntry).where(DictionaryEntry.language == language)
        if category:
            query = query.where(DictionaryEntry.category == category)
        result = await self.db.execute(query)
        return {entry.key_name: entry.value for entry in result.scalars().all()}

    async def set_pdf_visibility(self, parameter: CompanySetting, show_in_pdf: bool) -> CompanySetting:
        """Toggle whether a quotation parameter is printed on PDFs."""
        value = dict(parameter.value or {})
        value.setdefault("name", parameter.name)
        value["show_in_pdf"] = show_in_pdf
        parameter.value = value
        await self.db.flush()
        await self.db.refresh(parameter)

        query_cache.invalidate_on_commit(self.db, cache.SETTINGS)
        logger.info("Quotation parameter %s show_in_pdf=%s", parameter.id, show_in_pdf)
        return parameter

    async def pdf_parameters(self, language: Language) -> List[CompanySetting]:
        """Quotation parameters of a language that are printed on PDFs."""
        result = await self.db.execute(
            select(CompanySetting)
            .where(CompanySetting.language == language)
            .order_by(CompanySetting.setting_type, CompanySetting.id)
        )
        return [p for p in result.scalars().all() if p.show_in_pdf]
