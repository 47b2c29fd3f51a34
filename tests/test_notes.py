"""
Note and document endpoint tests.
"""

import io
import pytest
from fastapi import HTTPException, UploadFile
from httpx import AsyncClient

from app.services.storage import CHUNK_SIZE, StorageService, sanitize_filename


@pytest.mark.asyncio
async def test_note_crud_and_filters(auth_client: AsyncClient):
    response = await auth_client.post(
        "/api/v1/notes",
        json={"title": "Fair leads", "content": "Call Acme after the fair", "category": "sales", "tags": ["fair"]},
    )
    assert response.status_code == 201
    note = response.json()
    assert note["tags"] == ["fair"]
    assert note["is_favorite"] is False

    await auth_client.post("/api/v1/notes", json={"title": "Shopping", "is_favorite": True})

    response = await auth_client.get("/api/v1/notes", params={"search": "acme"})
    assert [n["id"] for n in response.json()["items"]] == [note["id"]]

    response = await auth_client.get("/api/v1/notes", params={"favorite": True})
    assert [n["title"] for n in response.json()["items"]] == ["Shopping"]

    response = await auth_client.patch(f"/api/v1/notes/{note['id']}", json={"is_favorite": True})
    assert response.json()["is_favorite"] is True

    response = await auth_client.delete(f"/api/v1/notes/{note['id']}")
    assert response.status_code == 200
    assert (await auth_client.get(f"/api/v1/notes/{note['id']}")).status_code == 404


async def upload(client: AsyncClient, content: bytes = b"hello", **fields) -> dict:
    response = await client.post(
        "/api/v1/documents",
        files={"file": ("price list.txt", content, "text/plain")},
        data={"title": "Price list", **fields},
    )
    return response


@pytest.mark.asyncio
async def test_upload_and_download(auth_client: AsyncClient, storage: StorageService):
    response = await upload(auth_client, category="pricing", tags="2026, prices ,")
    assert response.status_code == 201, response.text
    document = response.json()

    assert document["file_name"] == "price list.txt"
    assert document["file_size"] == 5
    assert document["file_type"].startswith("text/plain")
    assert document["tags"] == ["2026", "prices"]
    assert document["file_url"].startswith("documents/")
    assert document["file_url"].endswith("_price_list.txt")
    assert storage.open_path(document["file_url"]).read_bytes() == b"hello"

    response = await auth_client.get(f"/api/v1/documents/{document['id']}/download")
    assert response.status_code == 200
    assert response.content == b"hello"

    response = await auth_client.get("/api/v1/notes/categories")
    assert response.json() == ["pricing"]


@pytest.mark.asyncio
async def test_empty_and_oversized_uploads(auth_client: AsyncClient, storage: StorageService):
    response = await upload(auth_client, content=b"")
    assert response.status_code == 400

    response = await upload(auth_client, content=b"x" * (1024 * 1024 + 1))
    assert response.status_code == 413

    response = await auth_client.get("/api/v1/documents")
    assert response.json()["total"] == 0
    bucket = storage.root / storage.bucket
    assert list(bucket.iterdir()) == []


@pytest.mark.asyncio
async def test_replace_file_removes_old_object(auth_client: AsyncClient, storage: StorageService):
    document = (await upload(auth_client)).json()
    old_path = storage.open_path(document["file_url"])

    response = await auth_client.patch(
        f"/api/v1/documents/{document['id']}",
        files={"file": ("new.txt", b"updated", "text/plain")},
        data={"is_favorite": "true"},
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "Price list"
    assert updated["file_name"] == "new.txt"
    assert updated["is_favorite"] is True
    assert not old_path.exists()
    assert storage.open_path(updated["file_url"]).read_bytes() == b"updated"


@pytest.mark.asyncio
async def test_delete_document_removes_file(auth_client: AsyncClient, storage: StorageService):
    document = (await upload(auth_client)).json()
    path = storage.open_path(document["file_url"])

    response = await auth_client.delete(f"/api/v1/documents/{document['id']}")
    assert response.status_code == 200
    assert not path.exists()
    assert (await auth_client.get(f"/api/v1/documents/{document['id']}")).status_code == 404


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("report.pdf", "report.pdf"),
        ("../../etc/passwd", "passwd"),
        ("C:\\temp\\my file (1).docx", "my_file_1_.docx"),
        ("...", "file"),
    ],
)
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


def test_paths_outside_the_root_are_rejected(storage: StorageService):
    with pytest.raises(HTTPException) as exc_info:
        storage.open_path("../outside.txt")
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_large_upload_is_stored_in_chunks(tmp_path):
    storage = StorageService(root=str(tmp_path), bucket="documents", max_size_mb=3)
    data = bytes(range(256)) * (CHUNK_SIZE * 5 // 2 // 256)

    stored = await storage.save(UploadFile(file=io.BytesIO(data), filename="catalogue.pdf"))

    assert stored.file_size == len(data)
    assert storage.open_path(stored.file_url).read_bytes() == data


@pytest.mark.asyncio
async def test_oversized_upload_is_not_read_in_full(storage: StorageService):
    source = io.BytesIO(b"x" * (CHUNK_SIZE * 4))

    with pytest.raises(HTTPException) as exc_info:
        await storage.save(UploadFile(file=source, filename="huge.bin"))

    assert exc_info.value.status_code == 413
    assert source.tell() < CHUNK_SIZE * 4
    assert list((storage.root / storage.bucket).iterdir()) == []
