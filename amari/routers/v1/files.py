"""Document store endpoints — thin HTTP layer.

Business logic lives in :mod:`amari.services.files`. This router handles
multipart parsing, file-type sniffing, and the raw byte response.
"""


import uuid

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from amari.core.config import settings
from amari.core.exceptions import PayloadTooLargeError, UnsupportedMediaTypeError, ValidationError
from amari.core.response import DataResponse, error_responses
from amari.db.base import get_db
from amari.domain.stored_file import StoredFile
from amari.schemas.files import FileUploadRequest, StoredFileOut
from amari.services.files import FileService, file_url, sanitize_file_name

router = APIRouter(prefix="/files", tags=["Files"])

_ALLOWED_CONTENT_TYPES: set[str] = {
    "application/pdf",
    "image/jpeg",
    "image/png",
    "image/webp",
}
_ALLOWED_EXTENSIONS: dict[str, str] = {
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
}


# ---------------------------------------------------------------------------
# Multipart validation (HTTP concern — stays in the router)
# ---------------------------------------------------------------------------

def _detect_mime_type(file: UploadFile) -> str:
    """Return the MIME type to store, from the content type or the extension.

    Raises :class:`UnsupportedMediaTypeError` when neither is accepted.
    """
    if file.content_type in _ALLOWED_CONTENT_TYPES:
        return file.content_type

    filename = (file.filename or "").lower()
    for ext, mime in _ALLOWED_EXTENSIONS.items():
        if filename.endswith(ext):
            return mime

    accepted = ", ".join(sorted(_ALLOWED_EXTENSIONS))
    raise UnsupportedMediaTypeError(
        f"Unsupported file type '{file.content_type}'. Accepted formats: {accepted}"
    )


async def _validate_and_read_file(file: UploadFile) -> tuple[bytes, str]:
    mime_type = _detect_mime_type(file)
    contents = await file.read()

    if len(contents) == 0:
        raise ValidationError("Uploaded file is empty.")
    if len(contents) > settings.max_upload_size_bytes:
        raise PayloadTooLargeError(
            f"File too large. Maximum size is {settings.max_upload_size_mb}MB"
        )
    return contents, mime_type


def _to_out(stored: StoredFile) -> StoredFileOut:
    return StoredFileOut(
        id=stored.id,
        url=file_url(stored.id),
        file_name=stored.original_name,
        mime_type=stored.mime_type,
        size=stored.file_size,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=DataResponse[StoredFileOut],
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 413),
)
async def upload_file(
    body: FileUploadRequest,
    session: AsyncSession = Depends(get_db),
):
    """Store a base64 data URL and return the URL to reference it by."""
    stored = await FileService(session).store_data_url(
        body.file_category, body.file_data, file_name=body.file_name, mime_type=body.mime_type
    )
    return {"data": _to_out(stored)}


@router.post(
    "/upload",
    response_model=DataResponse[StoredFileOut],
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 413, 415),
)
async def upload_multipart(
    file: UploadFile = File(...),
    file_category: str = Form(..., alias="fileCategory"),
    session: AsyncSession = Depends(get_db),
):
    """Multipart variant of the upload: PDF, JPEG, PNG or WEBP."""
    contents, mime_type = await _validate_and_read_file(file)
    stored = await FileService(session).store_bytes(
        file_category, contents, file_name=file.filename, mime_type=mime_type
    )
    return {"data": _to_out(stored)}


@router.get("/{file_id}", responses=error_responses(400, 404))
async def get_file(
    file_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
):
    """Stream a stored file back with its original MIME type."""
    stored, contents = await FileService(session).read_file(str(file_id))
    filename = sanitize_file_name(stored.original_name or f"file-{stored.id}")
    return Response(
        content=contents,
        media_type=stored.mime_type or "application/octet-stream",
        headers={
            "Content-Disposition": f'inline; filename="{filename}"',
            "X-Content-Type-Options": "nosniff",
            # Stored files are immutable
            "Cache-Control": "public, max-age=3600, immutable",
        },
    )
