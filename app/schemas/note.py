"""
Note and document schemas.
"""

from datetime import datetime
from pydantic import Field

from app.schemas.base import BaseSchema, PaginatedResponse


class NoteBase(BaseSchema):
    title: str = Field(..., min_length=1, max_length=255)
    content: str | None = None
    category: str | None = Field(None, max_length=100)
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False


class NoteCreate(NoteBase):
    pass


class NoteUpdate(BaseSchema):
    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = None
    category: str | None = Field(None, max_length=100)
    tags: list[str] | None = None
    is_favorite: bool | None = None


class NoteResponse(NoteBase):
    id: int
    tags: list[str] | None = None
    created_by: int | None
    created_at: datetime
    updated_at: datetime


class NoteListResponse(PaginatedResponse):
    items: list[NoteResponse]


class DocumentMetadata(BaseSchema):
    """Document fields sent alongside the uploaded file."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False


class DocumentMetadataUpdate(BaseSchema):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    tags: list[str] | None = None
    is_favorite: bool | None = None


class DocumentResponse(BaseSchema):
    id: int
    title: str
    description: str | None
    file_name: str | None
    file_size: int | None
    file_type: str | None
    file_url: str | None
    category: str | None
    tags: list[str] | None = None
    is_favorite: bool
    created_by: int | None
    created_at: datetime
    updated_at: datetime


class DocumentListResponse(PaginatedResponse):
    items: list[DocumentResponse]
