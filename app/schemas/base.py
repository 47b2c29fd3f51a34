"""
Base schema configuration and common schemas.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""
    
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class PaginatedResponse(BaseSchema):
    """Paging fields shared by list responses; subclasses declare items."""
    
    total: int
    page: int
    per_page: int
    pages: int
    
    @classmethod
    def create(cls, items: list, total: int, page: int, per_page: int):
        pages = (total + per_page - 1) // per_page if per_page > 0 else 0
        return cls(items=items, total=total, page=page, per_page=per_page, pages=pages)


class MessageResponse(BaseSchema):
    """Simple message response."""
    
    message: str
    success: bool = True
