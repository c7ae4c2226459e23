from __future__ import annotations

from sqlalchemy import select

from amari.domain.application import VendorApplication
from amari.repositories.base import BaseRepository


class ApplicationRepository(BaseRepository[VendorApplication]):
    model = VendorApplication

    async def get_for_update(self, application_id: str) -> VendorApplication | None:
        """Load and row-lock an application for a status decision (no-op lock on SQLite)."""
        result = await self._session.execute(
            self._base_query()
            .where(VendorApplication.id == application_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def exists(self, application_id: str) -> bool:
        result = await self._session.execute(
            select(VendorApplication.id).where(VendorApplication.id == application_id)
        )
        return result.first() is not None

    async def latest_for_user(self, user_id: str) -> VendorApplication | None:
        result = await self._session.execute(
            self._base_query()
            .where(VendorApplication.user_id == user_id)
            .order_by(VendorApplication.submitted_at.desc())
            .limit(1)
        )
        return result.scalars().first()
