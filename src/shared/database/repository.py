from typing import Protocol, TypeVar, runtime_checkable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.database.pagination import FindPaginatedParams, PaginatedResult

TModel = TypeVar("TModel")


@runtime_checkable
class PaginatedRepository(Protocol[TModel]):
    """CRUD plus paginated query contract implemented by every table repository."""

    async def create(self, model: TModel, session: AsyncSession | None = None) -> TModel: ...

    async def create_many(self, models: list[TModel], session: AsyncSession | None = None) -> None: ...

    async def find_by_id(self, entity_id: UUID, session: AsyncSession | None = None) -> TModel | None: ...

    async def find_all(self, session: AsyncSession | None = None) -> list[TModel]: ...

    async def update(self, model: TModel, session: AsyncSession | None = None) -> TModel | None: ...

    async def delete(self, entity_id: UUID, session: AsyncSession | None = None) -> None: ...

    async def find_paginated(
        self, params: FindPaginatedParams | None = None, session: AsyncSession | None = None
    ) -> PaginatedResult[TModel]: ...
