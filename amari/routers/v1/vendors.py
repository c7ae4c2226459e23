"""Public vendor directory router (read-only, unauthenticated)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from amari.core.response import DataResponse, error_responses
from amari.db.base import get_db
from amari.schemas.vendor import VendorOut
from amari.services.vendor import VendorService

router = APIRouter(prefix="/vendors", tags=["Vendors"])


@router.get("", response_model=DataResponse[list[VendorOut]])
async def list_vendors(
    category: Optional[str] = Query(default=None, description="Filter by vendor category"),
    session: AsyncSession = Depends(get_db),
):
    """All published vendors, most recently approved first."""
    vendors = await VendorService(session).list_vendors(category=category)
    return {"data": [VendorOut.model_validate(v) for v in vendors]}


@router.get("/{vendor_id}", response_model=DataResponse[VendorOut], responses=error_responses(404))
async def get_vendor(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
):
    vendor = await VendorService(session).get_vendor(vendor_id)
    return {"data": VendorOut.model_validate(vendor)}
