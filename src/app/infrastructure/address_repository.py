from uuid import UUID
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.domain.models import Address
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database
from src.app.infrastructure.entities.address_entity import AddressEntity
from src.app.infrastructure.mappers.address_mapper import AddressMapper


class AddressRepository(BaseRepository[AddressEntity, Address]):
    """Repository for Address operations."""

    def __init__(self, db: Database, mapper: AddressMapper):
        super().__init__(db, mapper)

    async def find_by_zip_codes(self, zip_codes: list[str], session: AsyncSession | None = None) -> list[Address]:
        """Get every address whose zip code is in ``zip_codes``."""
        if not zip_codes:
            return []
        return await self.find_many(
            select(AddressEntity).where(AddressEntity.zip_code.in_(zip_codes)), session
        )

    async def find_by_client_id(self, client_id: UUID, session: AsyncSession | None = None) -> list[Address]:
        """Get all addresses for a specific client."""
        return await self.find_many(
            select(AddressEntity)
            .where(AddressEntity.client_id == client_id)
            .order_by(AddressEntity.created_at, AddressEntity.id),
            session,
        )

    async def delete_by_client_id(self, client_id: UUID, session: AsyncSession | None = None) -> None:
        """Delete every address owned by a client."""
        async with self._session_scope(session) as s:
            await s.execute(delete(AddressEntity).where(AddressEntity.client_id == client_id))
