"""Vendor repository — public directory reads and the publish upsert."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite

from amari.domain.vendor import PUBLIC_FIELDS, Vendor
from amari.repositories.base import BaseRepository

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class VendorRepository(BaseRepository[Vendor]):
    model = Vendor

    def _base_query(self):
        # Only published rows are ever visible through this repository
        return super()._base_query().where(Vendor.approved_at.is_not(None))

    async def list_published(self, category: str | None = None) -> list[Vendor]:
        q = self._base_query()
        if category:
            q = q.where(Vendor.category == category)
        q = q.order_by(Vendor.approved_at.desc())
        return list((await self._session.execute(q)).scalars().all())

    async def upsert(self, vendor_id: str, fields: dict[str, Any]) -> Vendor:
        """Insert the vendor, or overwrite its public fields if it already exists.

        ``rating`` and ``created_at`` survive an overwrite. Needs a PostgreSQL
        or SQLite connection (``INSERT ... ON CONFLICT``).
        """
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"Vendor upsert is not supported on the {dialect!r} dialect")

        now = datetime.now(timezone.utc)
        stmt = insert(Vendor).values(
            id=vendor_id,
            rating=Decimal("0.0"),
            created_at=now,
            updated_at=now,
            **{key: fields.get(key) for key in PUBLIC_FIELDS},
        )
        overwrite = {key: getattr(stmt.excluded, key) for key in (*PUBLIC_FIELDS, "updated_at")}
        await self._session.execute(
            stmt.on_conflict_do_update(index_elements=["id"], set_=overwrite)
        )

        q = (
            select(Vendor)
            .where(Vendor.id == vendor_id)
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(q)).scalar_one()
