import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Generic, TypeVar, Optional
from uuid import UUID

from sqlalchemy import Executable, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.database.base_mapper import BaseEntityMapper
from src.shared.database.database import Database
from src.shared.database.pagination import FindPaginatedParams, PaginatedResult
from src.shared.database.query_builder import build_paginated_queries

logger = logging.getLogger(__name__)

TEntity = TypeVar("TEntity")
TModel = TypeVar("TModel")

# Never written by update(): identity and creation stamp are immutable,
# updated_at is stamped by the database.
_UPDATE_EXCLUDED = frozenset({"id", "created_at", "updated_at"})


class BaseRepository(Generic[TEntity, TModel]):
    """
    CRUD and paginated query over the table described by ``mapper``.

    Every method takes an optional ``session``. When given, the call joins
    that session's transaction (see ``UnitOfWork``); otherwise it runs in its
    own short transaction.
    """

    def __init__(self, db: Database, mapper: BaseEntityMapper[TModel, TEntity]):
        self.db = db
        self.mapper = mapper
        self.entity_class = mapper.entity_class

    @asynccontextmanager
    async def _session_scope(self, session: AsyncSession | None) -> AsyncIterator[AsyncSession]:
        if session is not None:
            yield session
            return
        async with self.db.session_maker() as own_session:
            async with own_session.begin():
                yield own_session

    async def find_one(self, statement: Executable, session: AsyncSession | None = None) -> Optional[TModel]:
        async with self._session_scope(session) as s:
            result = await s.execute(statement)
            entity = result.scalar_one_or_none()
            if entity is None:
                return None
            return self.mapper.to_model(entity)

    async def find_many(self, statement: Executable, session: AsyncSession | None = None) -> list[TModel]:
        async with self._session_scope(session) as s:
            result = await s.execute(statement)
            entities = list(result.scalars().all())
            return [self.mapper.to_model(entity) for entity in entities]

    async def create(self, model: TModel, session: AsyncSession | None = None) -> TModel:
        """Insert one row and return the model rebuilt from the stored row."""
        statement = (
            insert(self.entity_class)
            .values(**self.mapper.to_values(model))
            .returning(self.entity_class)
        )
        async with self._session_scope(session) as s:
            result = await s.execute(statement)
            return self.mapper.to_model(result.scalar_one())

    async def create_many(self, models: list[TModel], session: AsyncSession | None = None) -> None:
        """Bulk insert. An empty list issues no statement."""
        if not models:
            return
        rows = [self.mapper.to_values(model) for model in models]
        async with self._session_scope(session) as s:
            await s.execute(insert(self.entity_class), rows)

    async def find_by_id(self, entity_id: UUID, session: AsyncSession | None = None) -> Optional[TModel]:
        return await self.find_one(
            select(self.entity_class).where(self.entity_class.id == entity_id), session
        )

    async def find_all(self, session: AsyncSession | None = None) -> list[TModel]:
        return await self.find_many(select(self.entity_class), session)

    async def update(self, model: TModel, session: AsyncSession | None = None) -> Optional[TModel]:
        """
        Update the row with the model's id.

        ``updated_at`` is set to the database's ``now()``, never earlier than
        the stored ``created_at``; the value carried by the model is ignored. Returns None when no row has that id.
        """
        values = {
            key: value
            for key, value in self.mapper.to_values(model).items()
            if key not in _UPDATE_EXCLUDED
        }
        statement = (
            update(self.entity_class)
            .where(self.entity_class.id == model.id)
            .values(**values, updated_at=func.greatest(func.now(), self.entity_class.created_at))
            .returning(self.entity_class)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        async with self._session_scope(session) as s:
            result = await s.execute(statement)
            entity = result.scalar_one_or_none()
            return self.mapper.to_model(entity) if entity is not None else None

    async def delete(self, entity_id: UUID, session: AsyncSession | None = None) -> None:
        """Delete by id. Deleting a missing id is a no-op."""
        async with self._session_scope(session) as s:
            await s.execute(delete(self.entity_class).where(self.entity_class.id == entity_id))

    async def find_paginated(
        self, params: FindPaginatedParams | None = None, session: AsyncSession | None = None
    ) -> PaginatedResult[TModel]:
        """
        Filter, sort and page the table.

        Issues two statements, a count over the filtered rows then the page
        itself. They are not read from a single snapshot.
        """
        params = params or FindPaginatedParams()
        count_statement, page_statement = build_paginated_queries(self.entity_class, params)
        logger.debug(
            "Paginating %s: page=%d limit=%d filters=%d sort=%s",
            self.entity_class.__tablename__,
            params.page,
            params.limit,
            len(params.filters),
            params.sort,
        )

        async with self._session_scope(session) as s:
            total = (await s.execute(count_statement)).scalar_one()
            result = await s.execute(page_statement)
            data = [self.mapper.to_model(entity) for entity in result.scalars().all()]

        return PaginatedResult(
            page=params.page,
            limit=params.limit,
            total=total,
            data=data,
        )
