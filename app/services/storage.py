"""
File storage service.
Stores uploaded files as objects in a bucket directory under STORAGE_PATH.
"""

import logging
import os
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from fastapi import HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from app.core.config import settings


logger = logging.getLogger(__name__)

UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
CHUNK_SIZE = 1024 * 1024


def sanitize_filename(filename: str) -> str:
    """Strip directories and unsafe characters from a client file name."""
    name = os.path.basename(filename.replace("\\", "/"))
    safe_name = UNSAFE_CHARS.sub("_", name).strip("._")
    return safe_name or "file"


@dataclass
class StoredFile:
    """Metadata of a stored object."""

    file_url: str
    file_name: str
    file_size: int
    file_type: str


class StorageService:
    """
    Local object storage.

    Objects are addressed by "<bucket>/<object name>" and live at
    STORAGE_PATH/<bucket>/<object name>.
    """

    def __init__(
        self,
        root: str | None = None,
        bucket: str | None = None,
        max_size_mb: int | None = None,
    ):
        self.root = Path(root or settings.STORAGE_PATH)
        self.bucket = bucket or settings.DOCUMENTS_BUCKET
        self.max_size = (max_size_mb or settings.MAX_UPLOAD_SIZE_MB) * 1024 * 1024

    def _resolve(self, file_url: str) -> Path:
        """
        Absolute path of an object.

        Raises:
            HTTPException: If the object path escapes the storage root
        """
        root = self.root.resolve()
        path = (root / file_url).resolve()
        if root not in path.parents:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid file path",
            )
        return path

    async def _write_chunks(self, upload: UploadFile, path: Path) -> int:
        """
        Copy the upload to path chunk by chunk.

        Reading stops once the size passes max_size, so an oversized
        upload is never read in full.
        """
        size = 0
        handle = await run_in_threadpool(path.open, "wb")
        try:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > self.max_size:
                    break
                await run_in_threadpool(handle.write, chunk)
        finally:
            await run_in_threadpool(handle.close)
        return size

    async def save(self, upload: UploadFile) -> StoredFile:
        """
        Write an uploaded file under a generated unique object name.

        Raises:
            HTTPException: If the file is empty or larger than MAX_UPLOAD_SIZE_MB
        """
        file_name = sanitize_filename(upload.filename or "file")
        file_url = f"{self.bucket}/{uuid.uuid4().hex}_{file_name}"
        path = self._resolve(file_url)
        await run_in_threadpool(path.parent.mkdir, parents=True, exist_ok=True)

        try:
            size = await self._write_chunks(upload, path)
        except Exception:
            await run_in_threadpool(path.unlink, missing_ok=True)
            raise

        if size == 0 or size > self.max_size:
            await run_in_threadpool(path.unlink, missing_ok=True)
            if size == 0:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="File is empty",
                )
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large (maximum {self.max_size // (1024 * 1024)} MB)",
            )

        logger.info("Stored %s (%d bytes)", file_url, size)
        return StoredFile(
            file_url=file_url,
            file_name=upload.filename or file_name,
            file_size=size,
            file_type=upload.content_type or "application/octet-stream",
        )

    def open_path(self, file_url: str) -> Path:
        """
        Path of a stored object, for streaming it back.

        Raises:
            HTTPException: If the object does not exist
        """
        path = self._resolve(file_url)
        if not path.is_file():
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="File not found",
            )
        return path

    def delete(self, file_url: str) -> bool:
        """Remove a stored object. Returns False if it was already gone."""
        path = self._resolve(file_url)
        if not path.is_file():
            logger.warning("Stored file %s already missing", file_url)
            return False
        path.unlink()
        logger.info("Deleted %s", file_url)
        return True
