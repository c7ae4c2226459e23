"""Document store request/response schemas."""


from pydantic import Field

from amari.schemas.common import CamelModel

class FileUploadRequest(CamelModel):
    """JSON upload: the file travels as a ``data:<mime>;base64,...`` URL."""

    file_category: str | None = None
    file_name: str | None = Field(default=None, max_length=255)
    mime_type: str | None = Field(default=None, max_length=100)
    file_data: str | None = None

class StoredFileOut(CamelModel):
    id: str
    url: str
    file_name: str | None = None
    mime_type: str | None = None
    size: int
