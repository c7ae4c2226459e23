"""SQLAlchemy ORM model for uploaded files (verification documents, work photos).

Contents are immutable: created by an upload, read by the file endpoint. The only
later write links a file to the application that references it.
"""

from __future__ import annotations

import enum
import uuid
from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from amari.db.base import Base
from amari.domain.mixins import CreatedAtMixin


class FileCategory(str, enum.Enum):
    VERIFICATION_DOCUMENT = "verification_document"
    REAL_WORK_IMAGE = "real_work_image"


class StoredFile(Base, CreatedAtMixin):
    __tablename__ = "vendor_files"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    file_category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    # Set once the application referencing this file is submitted
    application_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    original_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    mime_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    # data:<mime>;base64,<payload>
    file_data: Mapped[str] = mapped_column(Text, nullable=False)
