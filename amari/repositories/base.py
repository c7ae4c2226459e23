"""Generic async repository: lookups, filtered pages, inserts."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from amari.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Reads and inserts for one model.

    Updates are made on the loaded instances by the services and flushed with
    the request's session; nothing here deletes rows.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self._session = session

    def _base_query(self):
        return select(self.model)

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        result = await self._session.execute(
            self._base_query().where(self.model.id == entity_id)
        )
        return result.scalars().first()

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 20,
        order_by: str = "created_at",
        order: str = "desc",
        filters: dict[str, Any] | None = None,
    ) -> tuple[list[ModelT], int]:
        """Return (items, total_count). ``None`` filter values are ignored."""
        q = self._base_query()
        columns = self.model.__table__.columns

        for name, value in (filters or {}).items():
            if value is not None and name in columns:
                q = q.where(columns[name] == value)

        total = (
            await self._session.execute(select(func.count()).select_from(q.subquery()))
        ).scalar_one()

        # Unknown sort fields fall back to insertion order
        col = columns.get(order_by)
        if col is not None:
            q = q.order_by(col.desc() if order == "desc" else col.asc())

        items = (await self._session.execute(q.offset(offset).limit(limit))).scalars().all()
        return list(items), total

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()
        # Pick up server-side defaults before the instance is serialised
        await self._session.refresh(instance)
        return instance
