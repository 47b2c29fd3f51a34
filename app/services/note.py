"""
Note and document services.
"""

import logging
from typing import List
from fastapi import HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_

from app.models.note import Note, Document
from app.models.user import User
from app.schemas.note import (
    NoteCreate,
    NoteUpdate,
    DocumentMetadata,
    DocumentMetadataUpdate,
)
from app.services.storage import StorageService


logger = logging.getLogger(__name__)


class NoteService:
    """Service for note operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, creator: User, data: NoteCreate) -> Note:
        note = Note(created_by=creator.id, **data.model_dump())
        self.db.add(note)
        await self.db.flush()
        await self.db.refresh(note)

        logger.info("Note %s created", note.id)
        return note

    async def get_or_404(self, note_id: int) -> Note:
        note = await self.db.get(Note, note_id)
        if not note:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Note not found",
            )
        return note

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        category: str | None = None,
        favorite: bool | None = None,
        search: str | None = None,
    ) -> tuple[List[Note], int]:
        """List notes, most recently updated first."""
        filters = []
        if category:
            filters.append(Note.category == category)
        if favorite is not None:
            filters.append(Note.is_favorite.is_(favorite))
        if search:
            search_filter = f"%{search}%"
            filters.append(or_(
                Note.title.ilike(search_filter),
                Note.content.ilike(search_filter),
            ))

        total_result = await self.db.execute(
            select(func.count(Note.id)).where(*filters)
        )
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Note)
            .where(*filters)
            .order_by(Note.updated_at.desc(), Note.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def update(self, note: Note, data: NoteUpdate) -> Note:
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(note, field, value)
        await self.db.flush()
        await self.db.refresh(note)

        logger.info("Note %s updated", note.id)
        return note

    async def delete(self, note: Note) -> None:
        await self.db.delete(note)
        await self.db.flush()
        logger.info("Note %s deleted", note.id)

    async def categories(self) -> List[str]:
        """Distinct categories used by notes and documents, sorted."""
        notes = await self.db.execute(
            select(Note.category).where(Note.category.is_not(None)).distinct()
        )
        documents = await self.db.execute(
            select(Document.category).where(Document.category.is_not(None)).distinct()
        )
        return sorted(set(notes.scalars().all()) | set(documents.scalars().all()))


class DocumentService:
    """Service for documents: metadata rows backed by stored files."""

    def __init__(self, db: AsyncSession, storage: StorageService | None = None):
        self.db = db
        self.storage = storage or StorageService()

    async def create(
        self,
        creator: User,
        data: DocumentMetadata,
        upload: UploadFile,
    ) -> Document:
        """
        Store the file and record its metadata.

        If the row cannot be written the stored file is removed again.
        """
        stored = await self.storage.save(upload)
        document = Document(
            created_by=creator.id,
            file_url=stored.file_url,
            file_name=stored.file_name,
            file_size=stored.file_size,
            file_type=stored.file_type,
            **data.model_dump(),
        )
        self.db.add(document)
        try:
            await self.db.flush()
        except Exception:
            self.storage.delete(stored.file_url)
            raise
        await self.db.refresh(document)

        logger.info("Document %s uploaded: %s", document.id, document.file_name)
        return document

    async def get_or_404(self, document_id: int) -> Document:
        document = await self.db.get(Document, document_id)
        if not document:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Document not found",
            )
        return document

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        category: str | None = None,
        favorite: bool | None = None,
        search: str | None = None,
    ) -> tuple[List[Document], int]:
        filters = []
        if category:
            filters.append(Document.category == category)
        if favorite is not None:
            filters.append(Document.is_favorite.is_(favorite))
        if search:
            search_filter = f"%{search}%"
            filters.append(or_(
                Document.title.ilike(search_filter),
                Document.description.ilike(search_filter),
                Document.file_name.ilike(search_filter),
            ))

        total_result = await self.db.execute(
            select(func.count(Document.id)).where(*filters)
        )
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Document)
            .where(*filters)
            .order_by(Document.updated_at.desc(), Document.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def update(
        self,
        document: Document,
        data: DocumentMetadataUpdate,
        upload: UploadFile | None = None,
    ) -> Document:
        """Update metadata and, when a new file is given, replace the stored file."""
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(document, field, value)

        old_url = None
        if upload is not None:
            stored = await self.storage.save(upload)
            old_url = document.file_url
            document.file_url = stored.file_url
            document.file_name = stored.file_name
            document.file_size = stored.file_size
            document.file_type = stored.file_type

        await self.db.flush()
        await self.db.refresh(document)

        if old_url:
            self.storage.delete(old_url)

        logger.info("Document %s updated", document.id)
        return document

    async def delete(self, document: Document) -> None:
        """Delete the row and its stored file."""
        file_url = document.file_url
        await self.db.delete(document)
        await self.db.flush()

        if file_url:
            self.storage.delete(file_url)

        logger.info("Document %s deleted", document.id)
