"""
Company service.
Handles company CRUD operations.
"""

import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status

from app.core import cache
from app.core.cache import query_cache
from app.models.company import Company, CompanyType
from app.models.user import User
from app.schemas.company import CompanyCreate, CompanyUpdate


logger = logging.getLogger(__name__)


class CompanyService:
    """Service for company operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, creator: User, data: CompanyCreate) -> Company:
        """
        Create a new company.

        Args:
            creator: User creating the company
            data: Company data (name already validated as non-blank)

        Returns:
            Created company
        """
        company = Company(
            created_by=creator.id,
            **data.model_dump(),
        )

        self.db.add(company)
        await self.db.flush()
        await self.db.refresh(company)

        query_cache.invalidate_on_commit(self.db, cache.DASHBOARD)
        logger.info("Company %s created: %s", company.id, company.name)
        return company

    async def get_by_id(self, company_id: int) -> Company | None:
        result = await self.db.execute(
            select(Company).where(Company.id == company_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, company_id: int) -> Company:
        """
        Get company by ID or raise 404.

        Raises:
            HTTPException: If company not found
        """
        company = await self.get_by_id(company_id)
        if not company:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company not found",
            )
        return company

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        search: str | None = None,
        company_type: CompanyType | None = None,
    ) -> tuple[List[Company], int]:
        """
        List companies, newest first.

        Args:
            skip: Number of records to skip
            limit: Maximum records to return
            search: Matches name, contact person or email
            company_type: Filter by type

        Returns:
            Tuple of (companies list, total count)
        """
        filters = []
        if search:
            search_filter = f"%{search}%"
            filters.append(or_(
                Company.name.ilike(search_filter),
                Company.contact_person.ilike(search_filter),
                Company.email.ilike(search_filter),
            ))
        if company_type:
            filters.append(Company.type == company_type)

        total_result = await self.db.execute(
            select(func.count(Company.id)).where(*filters)
        )
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Company)
            .where(*filters)
            .order_by(Company.created_at.desc(), Company.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def update(self, company: Company, data: CompanyUpdate) -> Company:
        """Apply the fields present in data."""
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(company, field, value)

        await self.db.flush()
        await self.db.refresh(company)

        query_cache.invalidate_on_commit(self.db, cache.DASHBOARD)
        logger.info("Company %s updated", company.id)
        return company

    async def delete(self, company: Company) -> None:
        """
        Delete company.

        Raises:
            HTTPException: If quotations or orders still reference it
        """
        company_id = company.id
        try:
            await self.db.delete(company)
            await self.db.flush()
        except IntegrityError as exc:
            logger.warning("Company %s could not be deleted: %s", company_id, exc.orig)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Company cannot be deleted while quotations or orders reference it",
            ) from exc

        query_cache.invalidate_on_commit(self.db, cache.DASHBOARD)
        logger.info("Company %s deleted", company_id)
