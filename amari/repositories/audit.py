from __future__ import annotations

from typing import Any

from amari.domain.audit import AuditTrail
from amari.repositories.base import BaseRepository


class AuditRepository(BaseRepository[AuditTrail]):
    model = AuditTrail

    async def record(
        self,
        *,
        action: str,
        entity_type: str,
        entity_id: str | None,
        user_id: str | None = None,
        old_value: Any = None,
        new_value: Any = None,
        description: str | None = None,
    ) -> AuditTrail:
        return await self.create(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=user_id,
            old_value=old_value,
            new_value=new_value,
            description=description,
        )

    async def list_for_entity(self, entity_type: str, entity_id: str) -> list[AuditTrail]:
        q = (
            self._base_query()
            .where(AuditTrail.entity_type == entity_type)
            .where(AuditTrail.entity_id == entity_id)
            .order_by(AuditTrail.created_at.desc())
        )
        return list((await self._session.execute(q)).scalars().all())
