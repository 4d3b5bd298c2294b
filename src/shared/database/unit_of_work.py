from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.database.database import Database


class UnitOfWork:
    """
    Transaction scope shared by several repository calls.

    Repositories given ``session=uow.session`` join this transaction; it is
    committed when the block exits cleanly and rolled back otherwise.
    """

    def __init__(self, db: Database) -> None:
        self.db = db
        self._session: AsyncSession | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work not started. Use async context manager.")
        return self._session

    async def __aenter__(self):
        if self._session is not None:
            raise RuntimeError("Unit of work already started. Create one per transaction.")
        self._session = self.db.session_maker()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            if self._session is not None:
                await self._session.close()
            self._session = None

    async def commit(self):
        try:
            await self.session.commit()
        except Exception as e:
            await self.rollback()
            raise e

    async def rollback(self):
        await self.session.rollback()
