"""SQLAlchemy ORM model for vendor listing applications.

One row per submission attempt. The row carries everything the vendor told
us, the admin-only verification metadata, and the authoritative lifecycle
status. Nothing here is public: the directory reads :class:`Vendor` rows only.
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from amari.db.base import Base
from amari.domain.mixins import TimestampMixin, utcnow


class ApplicationStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class VendorApplication(Base, TimestampMixin):
    __tablename__ = "vendor_applications"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)

    # Profile
    business_name: Mapped[str] = mapped_column(String(255), nullable=False)
    vendor_category: Mapped[Optional[str]] = mapped_column(String(100), index=True, nullable=True)
    vendor_subcategories: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    business_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    vendor_story: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    other_services: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    primary_location: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    areas_served: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    # {"instagram": "...", ...} or a freeform string
    social_links: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)

    # Commercial
    starting_price: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    pricing_model: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    starting_price_includes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    minimum_booking_requirement: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Logistics
    advance_booking_notice: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    setup_time_required: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    breakdown_time_required: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    outdoor_experience: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    destination_wedding_experience: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    special_requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    category_specific: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    # Media (URLs into the document store)
    real_work_images: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    verification_document_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    verification_document_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Consent
    terms_accepted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    terms_accepted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Verification metadata (admin only)
    verification_document_uploaded: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    verified_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    date_verified: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    admin_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    verification_complete: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Lifecycle
    status: Mapped[str] = mapped_column(
        String(20), default=ApplicationStatus.PENDING.value, nullable=False, index=True
    )
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Legacy onboarding form columns, still present on older rows
    vendor_type: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
