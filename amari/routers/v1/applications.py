"""Vendor application router — submission (public) and review (admin).

Pattern:
  1. Inject DB session + principal via Depends
  2. Role checks happen in dependencies, before the service touches the DB
  3. Call service methods and wrap result in the response envelope
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from amari.core.pagination import PaginationParams
from amari.core.response import DataResponse, ListResponse, error_responses, paginated
from amari.core.security import Principal
from amari.db.base import get_db
from amari.routers.deps import get_current_principal, require_admin, require_principal
from amari.schemas.application import (
    ApplicationAmend,
    ApplicationCreate,
    ApplicationOut,
    ApplicationSummary,
    ApplicationView,
    AuditEntryOut,
    DecisionOut,
    DecisionRequest,
    VerificationUpdate,
)
from amari.schemas.vendor import VendorOut
from amari.services.applications import ApplicationService

router = APIRouter(prefix="/applications", tags=["Applications"])


# ------------------------------------------------------------------
# Vendor-facing endpoints
# ------------------------------------------------------------------

@router.post(
    "",
    response_model=DataResponse[ApplicationSummary],
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 409),
)
async def submit_application(
    body: ApplicationCreate,
    session: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal),
):
    """Submit a listing application. Files must already be uploaded via /files."""
    application = await ApplicationService(session).submit(body, principal)
    return {"data": ApplicationSummary.model_validate(application)}


@router.get("/me", response_model=DataResponse[ApplicationView], responses=error_responses(401, 404))
async def get_my_latest_application(
    session: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_principal),
):
    """The caller's most recent application."""
    application = await ApplicationService(session).latest_for_user(principal.sub)
    return {"data": ApplicationView.model_validate(application)}


@router.patch(
    "/{application_id}",
    response_model=DataResponse[ApplicationView],
    responses=error_responses(400, 401, 403, 404),
)
async def amend_application(
    application_id: str,
    body: ApplicationAmend,
    session: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_principal),
):
    """Edit profile fields. Changes reach the directory on the next approval."""
    application = await ApplicationService(session).amend(application_id, body, principal)
    return {"data": ApplicationView.model_validate(application)}


# ------------------------------------------------------------------
# Admin endpoints
# ------------------------------------------------------------------

@router.get("", response_model=ListResponse[ApplicationOut], responses=error_responses(401, 403))
async def list_applications(
    filter_status: Optional[str] = Query(default=None, alias="status", description="Pending | Approved | Rejected"),
    user_id: Optional[str] = Query(default=None, alias="userId"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    """List applications, most recent submission first."""
    items, total = await ApplicationService(session).list_applications(
        pagination, status=filter_status, user_id=user_id
    )
    return paginated([ApplicationOut.model_validate(a) for a in items], total, pagination)


@router.get(
    "/{application_id}",
    response_model=DataResponse[ApplicationOut],
    responses=error_responses(401, 403, 404),
)
async def get_application(
    application_id: str,
    session: AsyncSession = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    application = await ApplicationService(session).get_application(application_id)
    return {"data": ApplicationOut.model_validate(application)}


@router.put(
    "/{application_id}/verification",
    response_model=DataResponse[ApplicationOut],
    responses=error_responses(401, 403, 404),
)
async def update_verification(
    application_id: str,
    body: VerificationUpdate,
    session: AsyncSession = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    """Record document review progress. Never changes status or the directory."""
    application = await ApplicationService(session).update_verification(application_id, body, admin)
    return {"data": ApplicationOut.model_validate(application)}


@router.post(
    "/{application_id}/decision",
    response_model=DataResponse[DecisionOut],
    responses=error_responses(401, 403, 404, 409, 422),
)
async def decide_application(
    application_id: str,
    body: DecisionRequest,
    session: AsyncSession = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    """Approve (publishes the vendor; needs a verification document) or reject."""
    application, vendor = await ApplicationService(session).decide(
        application_id, body.status, admin
    )
    return {
        "data": DecisionOut(
            application=ApplicationOut.model_validate(application),
            vendor=VendorOut.model_validate(vendor) if vendor else None,
        )
    }


@router.get(
    "/{application_id}/audit",
    response_model=DataResponse[list[AuditEntryOut]],
    responses=error_responses(401, 403, 404),
)
async def get_application_audit(
    application_id: str,
    session: AsyncSession = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    entries = await ApplicationService(session).audit_history(application_id)
    return {"data": [AuditEntryOut.model_validate(e) for e in entries]}
