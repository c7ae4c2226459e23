"""Vendor application service — submission, verification, and the publish gate.

Lifecycle::

    Pending --approve (verification document present)--> Approved
    Pending --reject--> Rejected

Approved and Rejected are terminal. Approving an Approved application again
republishes it (the vendor upsert converges); rejecting a Rejected one is a
no-op. Verification metadata is written independently and never moves status.

Rule: routers call this service, this service calls repositories.
"""


import logging
import uuid
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import to_jsonable_python
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from amari.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    VerificationDocumentRequiredError,
)
from amari.core.pagination import PaginationParams
from amari.core.security import Principal
from amari.domain.application import ApplicationStatus, VendorApplication
from amari.domain.audit import AuditTrail
from amari.domain.mixins import utcnow
from amari.domain.vendor import Vendor
from amari.repositories.application import ApplicationRepository
from amari.repositories.audit import AuditRepository
from amari.repositories.stored_file import StoredFileRepository
from amari.repositories.vendor import VendorRepository
from amari.schemas.application import ApplicationAmend, ApplicationCreate, VerificationUpdate
from amari.schemas.categories import parse_category_details
from amari.services.files import file_id_from_url

logger = logging.getLogger(__name__)

ENTITY_TYPE = "vendor_application"

# Nullable verification columns; the two booleans are skipped when sent as null
_NULLABLE_VERIFICATION_FIELDS = {"verified_by", "date_verified", "admin_notes"}
_LIST_FIELDS = {"vendor_subcategories", "real_work_images"}


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def derive_vendor_fields(application: VendorApplication) -> dict[str, Any]:
    """Public vendor fields published from an approved application."""
    images = application.real_work_images or []
    return {
        "user_id": application.user_id,
        "name": application.business_name,
        "category": application.vendor_category or application.vendor_type,
        "description": application.business_description,
        "image_url": images[0] if images else None,
        "price_range": f"From {application.starting_price}" if application.starting_price else None,
        "location": application.primary_location or application.location,
        "contact_email": application.contact_email,
        "contact_phone": application.contact_phone,
        "website": application.website,
        "social_links": application.social_links,
        "story": application.vendor_story,
        "other_services": application.other_services,
        "approved_at": application.approved_at,
    }


def check_transition(current: str, target: ApplicationStatus) -> None:
    """Raise :class:`ConflictError` unless *current* may move to *target*."""
    if current == ApplicationStatus.PENDING.value or current == target.value:
        return
    raise ConflictError(f"Application is already {current} and cannot be {target.value.lower()}")


def has_verification_document(application: VendorApplication) -> bool:
    return bool((application.verification_document_url or "").strip())


def _category_details(bag: dict[str, Any] | None, category: Any) -> dict[str, Any] | None:
    if bag is None:
        return None
    try:
        details = parse_category_details(bag, category)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(p) for p in first.get("loc", ()))
        raise ValidationError(f"Invalid category details ({loc}): {first['msg']}") from exc
    return details.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class ApplicationService:
    def __init__(self, session: AsyncSession):
        self._session = session
        self._repo = ApplicationRepository(session)
        self._vendors = VendorRepository(session)
        self._audit = AuditRepository(session)
        self._files = StoredFileRepository(session)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_applications(
        self,
        pagination: PaginationParams,
        status: str | None = None,
        user_id: str | None = None,
    ) -> tuple[list[VendorApplication], int]:
        return await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort_column("submitted_at"),
            order=pagination.order,
            filters={"status": status, "user_id": user_id},
        )

    async def get_application(self, application_id: str) -> VendorApplication:
        application = await self._repo.get_by_id(application_id)
        if not application:
            raise NotFoundError("Application", application_id)
        return application

    async def latest_for_user(self, user_id: str) -> VendorApplication:
        application = await self._repo.latest_for_user(user_id)
        if not application:
            raise NotFoundError("Application")
        return application

    async def audit_history(self, application_id: str) -> list[AuditTrail]:
        await self.get_application(application_id)
        return await self._audit.list_for_entity(ENTITY_TYPE, application_id)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(
        self, data: ApplicationCreate, principal: Principal | None = None
    ) -> VendorApplication:
        if not data.business_name:
            raise ValidationError("Business name is required")

        application_id = data.id or str(uuid.uuid4())
        details = _category_details(data.category_specific, data.vendor_category)
        now = utcnow()

        fields = data.model_dump(
            mode="json",
            exclude={"id", "user_id", "submitted_at", "category_specific", "terms_accepted"},
        )
        for key in _LIST_FIELDS:
            fields[key] = fields.get(key) or []

        try:
            if await self._repo.exists(application_id):
                raise ConflictError(f"Application '{application_id}' already exists")
            application = await self._repo.create(
                id=application_id,
                user_id=data.user_id or (principal.sub if principal else None),
                category_specific=details,
                terms_accepted=data.terms_accepted,
                terms_accepted_at=now if data.terms_accepted else None,
                submitted_at=data.submitted_at or now,
                status=ApplicationStatus.PENDING.value,
                **fields,
            )
            await self._audit.record(
                action="application.submitted",
                entity_type=ENTITY_TYPE,
                entity_id=application.id,
                user_id=application.user_id,
                new_value={"status": application.status},
                description=f"Application submitted for {application.business_name}",
            )
        except IntegrityError as exc:
            raise ConflictError(f"Application '{application_id}' already exists") from exc
        except SQLAlchemyError as exc:
            logger.exception("Vendor application submission failed")
            raise PersistenceError("Failed to submit vendor application") from exc

        await self._link_files(application)
        logger.info("Application %s submitted (%s)", application.id, application.business_name)
        return application

    async def _link_files(self, application: VendorApplication) -> None:
        urls = [*(application.real_work_images or []), application.verification_document_url]
        file_ids = list(dict.fromkeys(filter(None, map(file_id_from_url, urls))))
        if not file_ids:
            return
        try:
            async with self._session.begin_nested():
                linked = await self._files.link_to_application(file_ids, application.id)
        except SQLAlchemyError:
            logger.warning(
                "Failed to link files to application %s", application.id, exc_info=True
            )
            return
        logger.debug("Linked %d of %d files to application %s", linked, len(file_ids), application.id)

    # ------------------------------------------------------------------
    # Amend (owner or admin)
    # ------------------------------------------------------------------

    async def amend(
        self, application_id: str, data: ApplicationAmend, principal: Principal
    ) -> VendorApplication:
        application = await self.get_application(application_id)
        if not principal.is_admin and application.user_id != principal.sub:
            raise ForbiddenError()

        changes = data.model_dump(mode="json", exclude_unset=True)
        if "business_name" in changes and not changes["business_name"]:
            raise ValidationError("Business name is required")
        for key in _LIST_FIELDS & changes.keys():
            changes[key] = changes[key] or []

        category = changes.get("vendor_category", application.vendor_category)
        if "category_specific" in changes:
            changes["category_specific"] = _category_details(changes["category_specific"], category)
        elif "vendor_category" in changes and application.category_specific:
            changes["category_specific"] = _category_details(application.category_specific, category)

        old = {key: to_jsonable_python(getattr(application, key)) for key in changes}
        for key, value in changes.items():
            setattr(application, key, value)

        try:
            await self._audit.record(
                action="application.amended",
                entity_type=ENTITY_TYPE,
                entity_id=application.id,
                user_id=principal.sub,
                old_value=old,
                new_value=to_jsonable_python(changes),
            )
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.exception("Amending application %s failed", application_id)
            raise PersistenceError("Failed to update vendor application") from exc
        return application

    # ------------------------------------------------------------------
    # Verification metadata (admin)
    # ------------------------------------------------------------------

    async def update_verification(
        self, application_id: str, data: VerificationUpdate, principal: Principal
    ) -> VendorApplication:
        application = await self.get_application(application_id)

        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_VERIFICATION_FIELDS
        }
        old = {key: to_jsonable_python(getattr(application, key)) for key in changes}
        for key, value in changes.items():
            setattr(application, key, value)

        try:
            await self._audit.record(
                action="application.verification_updated",
                entity_type=ENTITY_TYPE,
                entity_id=application.id,
                user_id=principal.sub,
                old_value=old,
                new_value=to_jsonable_python(changes),
            )
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.exception("Saving verification metadata for %s failed", application_id)
            raise PersistenceError("Failed to save verification metadata") from exc
        return application

    # ------------------------------------------------------------------
    # Decision + publish gate (admin)
    # ------------------------------------------------------------------

    async def decide(
        self, application_id: str, target_status: str, principal: Principal
    ) -> tuple[VendorApplication, Vendor | None]:
        """Approve or reject an application.

        Runs inside the request's transaction: the gate is checked before
        anything is written, so a refused approval leaves the row untouched.
        On approval the vendor row is upserted from the application.
        """
        target = ApplicationStatus(target_status)
        if target is ApplicationStatus.PENDING:
            raise ValidationError("Status must be Approved or Rejected")

        try:
            application = await self._repo.get_for_update(application_id)
        except SQLAlchemyError as exc:
            logger.exception("Loading application %s failed", application_id)
            raise PersistenceError("Failed to update application status") from exc
        if not application:
            raise NotFoundError("Application", application_id)

        previous = application.status
        check_transition(previous, target)

        if target is ApplicationStatus.APPROVED and not has_verification_document(application):
            logger.warning(
                "Refusing to approve application %s: no verification document", application_id
            )
            raise VerificationDocumentRequiredError()

        vendor: Vendor | None = None
        try:
            application.status = target.value
            if target is ApplicationStatus.APPROVED:
                application.approved_at = utcnow()
                vendor = await self._vendors.upsert(application.id, derive_vendor_fields(application))
            else:
                application.approved_at = None

            await self._audit.record(
                action=f"application.{target.value.lower()}",
                entity_type=ENTITY_TYPE,
                entity_id=application.id,
                user_id=principal.sub,
                old_value={"status": previous},
                new_value={"status": target.value, "vendorPublished": vendor is not None},
            )
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.exception("Updating status of application %s failed", application_id)
            raise PersistenceError("Failed to update application status") from exc

        logger.info("Application %s: %s -> %s", application.id, previous, target.value)
        return application, vendor
