from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.domain.models import Client
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database

from src.app.infrastructure.entities.client_entity import ClientEntity
from src.app.infrastructure.mappers.client_mapper import ClientMapper


class ClientRepository(BaseRepository[ClientEntity, Client]):
    """Repository for Client operations."""

    def __init__(self, db: Database, mapper: ClientMapper):
        super().__init__(db, mapper)

    async def find_by_email(self, email: str, session: AsyncSession | None = None) -> Optional[Client]:
        """Get a client by email."""
        return await self.find_one(
            select(ClientEntity).where(ClientEntity.email == email), session
        )

    async def find_by_phone(self, phone: str, session: AsyncSession | None = None) -> Optional[Client]:
        """Get a client by phone."""
        return await self.find_one(
            select(ClientEntity).where(ClientEntity.phone == phone), session
        )
