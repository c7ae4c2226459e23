"""Vendor directory service — public, read-only.

Vendors are never created here; they are published by
:meth:`amari.services.applications.ApplicationService.decide`.
"""


from sqlalchemy.ext.asyncio import AsyncSession

from amari.core.exceptions import NotFoundError
from amari.domain.vendor import Vendor
from amari.repositories.vendor import VendorRepository

class VendorService:
    def __init__(self, session: AsyncSession):
        self._repo = VendorRepository(session)

    async def list_vendors(self, category: str | None = None) -> list[Vendor]:
        return await self._repo.list_published(category=category)

    async def get_vendor(self, vendor_id: str) -> Vendor:
        vendor = await self._repo.get_by_id(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)
        return vendor
