"""
Note and document endpoints.
Free-text notes and uploaded documents sharing one category list.
"""

from fastapi import APIRouter, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse

from app.api.deps import DbSession, CurrentUser, Storage
from app.schemas.note import (
    NoteCreate,
    NoteUpdate,
    NoteResponse,
    NoteListResponse,
    DocumentMetadata,
    DocumentMetadataUpdate,
    DocumentResponse,
    DocumentListResponse,
)
from app.schemas.base import MessageResponse
from app.services.note import NoteService, DocumentService


router = APIRouter()
documents_router = APIRouter()


def _split_tags(tags: str | None) -> list[str] | None:
    """Comma-separated form field to a tag list."""
    if tags is None:
        return None
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


# Notes

@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a note",
)
async def create_note(
    data: NoteCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> NoteResponse:
    service = NoteService(db)
    note = await service.create(current_user, data)
    return NoteResponse.model_validate(note)


@router.get("", response_model=NoteListResponse, summary="List notes")
async def list_notes(
    current_user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    category: str | None = Query(None, description="Filter by category"),
    favorite: bool | None = Query(None, description="Only favorites (or non-favorites)"),
    search: str | None = Query(None, description="Search title and content"),
) -> NoteListResponse:
    service = NoteService(db)
    skip = (page - 1) * per_page

    notes, total = await service.list(
        skip=skip,
        limit=per_page,
        category=category,
        favorite=favorite,
        search=search,
    )

    return NoteListResponse.create(
        items=[NoteResponse.model_validate(n) for n in notes],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get(
    "/categories",
    response_model=list[str],
    summary="List categories",
    description="Categories used by notes and documents",
)
async def list_categories(
    current_user: CurrentUser,
    db: DbSession,
) -> list[str]:
    service = NoteService(db)
    return await service.categories()


@router.get("/{note_id}", response_model=NoteResponse, summary="Get a note")
async def get_note(
    note_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> NoteResponse:
    service = NoteService(db)
    note = await service.get_or_404(note_id)
    return NoteResponse.model_validate(note)


@router.patch("/{note_id}", response_model=NoteResponse, summary="Update a note")
async def update_note(
    note_id: int,
    data: NoteUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> NoteResponse:
    service = NoteService(db)
    note = await service.get_or_404(note_id)
    note = await service.update(note, data)
    return NoteResponse.model_validate(note)


@router.delete("/{note_id}", response_model=MessageResponse, summary="Delete a note")
async def delete_note(
    note_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = NoteService(db)
    note = await service.get_or_404(note_id)
    await service.delete(note)
    return MessageResponse(message="Note deleted")


# Documents

@documents_router.post(
    "",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a document",
)
async def upload_document(
    current_user: CurrentUser,
    db: DbSession,
    storage: Storage,
    file: UploadFile = File(...),
    title: str = Form(..., min_length=1, max_length=255),
    description: str | None = Form(None),
    category: str | None = Form(None, max_length=100),
    tags: str | None = Form(None, description="Comma-separated tags"),
    is_favorite: bool = Form(False),
) -> DocumentResponse:
    service = DocumentService(db, storage)
    metadata = DocumentMetadata(
        title=title,
        description=description,
        category=category,
        tags=_split_tags(tags) or [],
        is_favorite=is_favorite,
    )
    document = await service.create(current_user, metadata, file)
    return DocumentResponse.model_validate(document)


@documents_router.get("", response_model=DocumentListResponse, summary="List documents")
async def list_documents(
    current_user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    category: str | None = Query(None, description="Filter by category"),
    favorite: bool | None = Query(None, description="Only favorites (or non-favorites)"),
    search: str | None = Query(None, description="Search title, description and file name"),
) -> DocumentListResponse:
    service = DocumentService(db)
    skip = (page - 1) * per_page

    documents, total = await service.list(
        skip=skip,
        limit=per_page,
        category=category,
        favorite=favorite,
        search=search,
    )

    return DocumentListResponse.create(
        items=[DocumentResponse.model_validate(d) for d in documents],
        total=total,
        page=page,
        per_page=per_page,
    )


@documents_router.get("/{document_id}", response_model=DocumentResponse, summary="Get a document")
async def get_document(
    document_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> DocumentResponse:
    service = DocumentService(db)
    document = await service.get_or_404(document_id)
    return DocumentResponse.model_validate(document)


@documents_router.get("/{document_id}/download", summary="Download a document")
async def download_document(
    document_id: int,
    current_user: CurrentUser,
    db: DbSession,
    storage: Storage,
) -> FileResponse:
    service = DocumentService(db, storage)
    document = await service.get_or_404(document_id)
    path = storage.open_path(document.file_url)
    return FileResponse(
        path=path,
        filename=document.file_name,
        media_type=document.file_type or "application/octet-stream",
    )


@documents_router.patch(
    "/{document_id}",
    response_model=DocumentResponse,
    summary="Update a document",
    description="Update metadata and optionally replace the file",
)
async def update_document(
    document_id: int,
    current_user: CurrentUser,
    db: DbSession,
    storage: Storage,
    file: UploadFile | None = File(None),
    title: str | None = Form(None, min_length=1, max_length=255),
    description: str | None = Form(None),
    category: str | None = Form(None, max_length=100),
    tags: str | None = Form(None, description="Comma-separated tags"),
    is_favorite: bool | None = Form(None),
) -> DocumentResponse:
    service = DocumentService(db, storage)
    document = await service.get_or_404(document_id)

    fields = {
        "title": title,
        "description": description,
        "category": category,
        "tags": _split_tags(tags),
        "is_favorite": is_favorite,
    }
    metadata = DocumentMetadataUpdate(**{k: v for k, v in fields.items() if v is not None})
    document = await service.update(document, metadata, file)
    return DocumentResponse.model_validate(document)


@documents_router.delete(
    "/{document_id}",
    response_model=MessageResponse,
    summary="Delete a document",
    description="Delete the document and its stored file",
)
async def delete_document(
    document_id: int,
    current_user: CurrentUser,
    db: DbSession,
    storage: Storage,
) -> MessageResponse:
    service = DocumentService(db, storage)
    document = await service.get_or_404(document_id)
    await service.delete(document)
    return MessageResponse(message="Document deleted")
