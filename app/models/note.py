"""
Notes and stored documents.
"""

from typing import Optional, List
from sqlalchemy import String, Text, Integer, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, CreatorMixin


class Note(BaseModel, CreatorMixin):
    """Free-form note."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    content: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    category: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        index=True,
    )
    tags: Mapped[Optional[List[str]]] = mapped_column(
        JSON,
        nullable=True,
    )
    is_favorite: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}')>"


class Document(BaseModel, CreatorMixin):
    """
    Uploaded file with its metadata.

    Attributes:
        title: Display title
        description: Description
        file_name: Original file name
        file_size: Size in bytes
        file_type: MIME type
        file_url: Object path inside the documents bucket
        category: Category
        tags: List of tags
        is_favorite: Starred by the user
    """

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    file_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    file_size: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )
    file_type: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    file_url: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )
    category: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        index=True,
    )
    tags: Mapped[Optional[List[str]]] = mapped_column(
        JSON,
        nullable=True,
    )
    is_favorite: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, title='{self.title}', file='{self.file_name}')>"
