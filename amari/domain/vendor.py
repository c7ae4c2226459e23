"""SQLAlchemy ORM model for published Vendors.

A vendor row is only ever written by the approval step, keyed by the id of
the application it was published from. It holds public fields only.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from amari.db.base import Base
from amari.domain.mixins import TimestampMixin

# Columns the approval step overwrites on re-publication (rating is kept)
PUBLIC_FIELDS: tuple[str, ...] = (
    "user_id",
    "name",
    "category",
    "description",
    "image_url",
    "price_range",
    "location",
    "contact_email",
    "contact_phone",
    "website",
    "social_links",
    "story",
    "other_services",
    "approved_at",
)


class Vendor(Base, TimestampMixin):
    __tablename__ = "vendors"

    # Same id as the source application (no default on purpose)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), index=True, nullable=True)
    rating: Mapped[Decimal] = mapped_column(Numeric(2, 1), default=Decimal("0.0"), nullable=False)
    price_range: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    social_links: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    story: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    other_services: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    approved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), index=True, nullable=True
    )
