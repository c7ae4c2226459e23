"""Vendor application Pydantic schemas (request DTOs and admin response models)."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field, field_validator

from amari.schemas.categories import PricingModel, VendorCategory
from amari.schemas.common import CamelModel
from amari.schemas.vendor import VendorOut

SocialLinks = dict[str, str] | str


class ApplicationProfile(CamelModel):
    """Fields a vendor can set on submission and later amend."""

    business_name: str | None = None
    vendor_category: VendorCategory | None = None
    vendor_subcategories: list[str] | None = None
    business_description: str | None = None
    vendor_story: str | None = None
    other_services: str | None = None
    primary_location: str | None = None
    areas_served: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None
    website: str | None = None
    social_links: SocialLinks | None = None

    starting_price: str | None = None
    pricing_model: PricingModel | None = None
    starting_price_includes: str | None = None
    minimum_booking_requirement: str | None = None

    advance_booking_notice: str | None = None
    setup_time_required: str | None = None
    breakdown_time_required: str | None = None
    outdoor_experience: bool | None = None
    destination_wedding_experience: bool | None = None
    special_requirements: str | None = None

    # Validated against the category's variant by the service
    category_specific: dict[str, Any] | None = None

    real_work_images: list[str] | None = None
    verification_document_type: str | None = None
    verification_document_url: str | None = None

    @field_validator("business_name", mode="before")
    @classmethod
    def _strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("vendor_subcategories", mode="before")
    @classmethod
    def _normalize_subcategories(cls, v: Any) -> Any:
        if v is None:
            return None
        if not isinstance(v, (list, tuple)):
            return []
        return [str(s) for s in v if s]

    @field_validator("real_work_images", mode="before")
    @classmethod
    def _normalize_images(cls, v: Any) -> Any:
        if v is None:
            return None
        if not isinstance(v, (list, tuple)):
            return []
        return [p for p in v if isinstance(p, str) and p]

    @field_validator("verification_document_url", mode="before")
    @classmethod
    def _document_url_must_be_text(cls, v: Any) -> Any:
        return v if isinstance(v, str) and v.strip() else None


class ApplicationCreate(ApplicationProfile):
    id: str | None = Field(default=None, max_length=36)
    user_id: str | None = Field(default=None, max_length=36)
    terms_accepted: bool = False
    submitted_at: datetime | None = None

    # Legacy onboarding form fields
    vendor_type: str | None = None
    location: str | None = None


class ApplicationAmend(ApplicationProfile):
    """Partial update of profile fields. Status and verification are not amendable."""


class ApplicationSummary(CamelModel):
    id: str
    business_name: str
    status: str
    submitted_at: datetime


class ApplicationView(CamelModel):
    """What the submitting vendor sees: everything except verification metadata."""

    id: str
    user_id: str | None = None
    business_name: str
    vendor_category: str | None = None
    vendor_subcategories: list[str] = Field(default_factory=list)
    business_description: str | None = None
    vendor_story: str | None = None
    other_services: str | None = None
    primary_location: str | None = None
    areas_served: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None
    website: str | None = None
    social_links: SocialLinks | None = None

    starting_price: str | None = None
    pricing_model: str | None = None
    starting_price_includes: str | None = None
    minimum_booking_requirement: str | None = None

    advance_booking_notice: str | None = None
    setup_time_required: str | None = None
    breakdown_time_required: str | None = None
    outdoor_experience: bool | None = None
    destination_wedding_experience: bool | None = None
    special_requirements: str | None = None
    category_specific: dict[str, Any] | None = None

    real_work_images: list[str] = Field(default_factory=list)
    verification_document_type: str | None = None
    verification_document_url: str | None = None

    terms_accepted: bool
    terms_accepted_at: datetime | None = None

    status: str
    submitted_at: datetime
    approved_at: datetime | None = None
    vendor_type: str | None = None
    location: str | None = None
    created_at: datetime
    updated_at: datetime


class ApplicationOut(ApplicationView):
    """Admin view of an application, verification metadata included."""

    verification_document_uploaded: bool
    verified_by: str | None = None
    date_verified: datetime | None = None
    admin_notes: str | None = None
    verification_complete: bool


class VerificationUpdate(CamelModel):
    verification_document_uploaded: bool | None = None
    verified_by: str | None = None
    date_verified: datetime | None = None
    verification_complete: bool | None = None
    admin_notes: str | None = None


class DecisionRequest(CamelModel):
    status: Literal["Approved", "Rejected"]


class DecisionOut(CamelModel):
    application: ApplicationOut
    vendor: VendorOut | None = None


class AuditEntryOut(CamelModel):
    id: str
    user_id: str | None = None
    action: str
    entity_type: str
    entity_id: str | None = None
    old_value: Any = None
    new_value: Any = None
    description: str | None = None
    created_at: datetime
