"""Document store service — verification documents and real-work photos.

Files are kept inline as ``data:`` URLs in ``vendor_files`` and referenced
from applications by their short retrieval URL. File contents are never
updated; submitting an application links the files it references.

Rule: No SQLAlchemy queries / no FastAPI here. Pure Python business logic.
"""


import base64
import binascii
import logging
import math
import re
from urllib.parse import unquote_to_bytes

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from amari.core.config import settings
from amari.core.exceptions import (
    NotFoundError,
    PayloadTooLargeError,
    PersistenceError,
    ValidationError,
)
from amari.domain.stored_file import FileCategory, StoredFile
from amari.repositories.stored_file import StoredFileRepository

logger = logging.getLogger(__name__)

FILES_URL_PREFIX = "/api/v1/files"

_FILE_URL_ID = re.compile(rf"{re.escape(FILES_URL_PREFIX)}/([0-9a-fA-F-]{{36}})(?:[/?#]|$)")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._\- ]")
_CATEGORIES = {c.value for c in FileCategory}


# ---------------------------------------------------------------------------
# Data URL helpers
# ---------------------------------------------------------------------------

def file_url(file_id: str) -> str:
    return f"{FILES_URL_PREFIX}/{file_id}"


def file_id_from_url(url: str | None) -> str | None:
    """Stored-file id in a retrieval URL, or None for anything else."""
    match = _FILE_URL_ID.search(url or "")
    return match.group(1) if match else None


def estimate_size(data_url: str) -> int:
    """Approximate decoded byte size from the base64 part of a data URL."""
    _, _, payload = data_url.partition(",")
    return math.ceil(len(payload) * 0.75)


def data_url_mime_type(data_url: str) -> str | None:
    header, sep, _ = data_url.partition(",")
    if not sep or not header.startswith("data:"):
        return None
    mime = header[len("data:"):].split(";", 1)[0]
    return mime or None


def decode_data_url(data_url: str) -> bytes:
    """Return the raw bytes of a ``data:`` URL.

    Raises :class:`ValueError` when the value has no payload separator or the
    base64 payload is corrupt.
    """
    header, sep, payload = data_url.partition(",")
    if not sep:
        raise ValueError("data URL has no payload")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload)
        except binascii.Error as exc:
            raise ValueError("data URL payload is not valid base64") from exc
    return unquote_to_bytes(payload)


def encode_data_url(contents: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(contents).decode('ascii')}"


def sanitize_file_name(name: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", name)[:200]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class FileService:
    def __init__(self, session: AsyncSession):
        self._repo = StoredFileRepository(session)

    async def store_data_url(
        self,
        file_category: str | None,
        file_data: str | None,
        file_name: str | None = None,
        mime_type: str | None = None,
    ) -> StoredFile:
        if not file_category or not file_data:
            raise ValidationError("fileCategory and fileData are required")
        if file_category not in _CATEGORIES:
            raise ValidationError(
                "fileCategory must be verification_document or real_work_image"
            )
        if not file_data.startswith("data:"):
            raise ValidationError("fileData must be a base64 data URL")

        size = estimate_size(file_data)
        if size > settings.max_upload_size_bytes:
            raise PayloadTooLargeError(
                f"File too large. Maximum size is {settings.max_upload_size_mb}MB"
            )

        try:
            stored = await self._repo.create(
                file_category=file_category,
                original_name=file_name or None,
                mime_type=mime_type or data_url_mime_type(file_data),
                file_size=size,
                file_data=file_data,
            )
        except SQLAlchemyError as exc:
            logger.exception("File upload failed")
            raise PersistenceError("Failed to upload file") from exc

        logger.info(
            "Stored %s file %s (%d bytes)", file_category, stored.id, stored.file_size
        )
        return stored

    async def store_bytes(
        self,
        file_category: str | None,
        contents: bytes,
        file_name: str | None,
        mime_type: str,
    ) -> StoredFile:
        return await self.store_data_url(
            file_category,
            encode_data_url(contents, mime_type),
            file_name=file_name,
            mime_type=mime_type,
        )

    async def get_file(self, file_id: str) -> StoredFile:
        stored = await self._repo.get_by_id(file_id)
        if not stored:
            raise NotFoundError("File", file_id)
        return stored

    async def read_file(self, file_id: str) -> tuple[StoredFile, bytes]:
        """Return the row plus its decoded bytes."""
        stored = await self.get_file(file_id)
        try:
            contents = decode_data_url(stored.file_data)
        except ValueError as exc:
            logger.error("Stored file %s has corrupt data: %s", file_id, exc)
            raise PersistenceError("Invalid file data") from exc
        return stored, contents
