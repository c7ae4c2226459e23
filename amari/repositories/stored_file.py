from sqlalchemy import update

from amari.domain.stored_file import StoredFile
from amari.repositories.base import BaseRepository


class StoredFileRepository(BaseRepository[StoredFile]):
    """File contents are written once by an upload and only read afterwards."""

    model = StoredFile

    async def link_to_application(self, file_ids: list[str], application_id: str) -> int:
        """Point each of *file_ids* at *application_id*; returns the rows touched."""
        if not file_ids:
            return 0
        result = await self._session.execute(
            update(StoredFile)
            .where(StoredFile.id.in_(file_ids))
            .values(application_id=application_id)
        )
        return result.rowcount
