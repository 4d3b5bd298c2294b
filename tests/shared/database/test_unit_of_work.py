"""Integration tests for UnitOfWork transaction handling."""
import pytest
from sqlalchemy.exc import IntegrityError

from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork
from tests.shared.database.mock_entities import UserModel
from tests.shared.database.mock_repository import UserRepository


@pytest.fixture
def user_repository(clean_database):
    """Create a user repository."""
    return UserRepository(clean_database)


@pytest.mark.asyncio
async def test_writes_commit_together(unit_of_work, user_repository):
    # Arrange
    first = UserModel(name="Alice", email="alice@example.com", age=30)
    second = UserModel(name="Bob", email="bob@example.com", age=31)

    # Act
    async with unit_of_work:
        await user_repository.create(first, session=unit_of_work.session)
        await user_repository.create_many([second], session=unit_of_work.session)

    # Assert
    assert await user_repository.find_by_id(first.id) is not None
    assert await user_repository.find_by_id(second.id) is not None


@pytest.mark.asyncio
async def test_rollback_on_error(unit_of_work, user_repository):
    """Test that changes are rolled back when an error occurs."""
    # Arrange
    user = UserModel(name="Dave", email="dave@example.com", age=44)

    # Act - Try to persist but raise an error
    with pytest.raises(ValueError):
        async with unit_of_work:
            await user_repository.create(user, session=unit_of_work.session)
            raise ValueError("Simulated error")

    # Assert - User should not be persisted
    assert await user_repository.find_by_id(user.id) is None


@pytest.mark.asyncio
async def test_constraint_violation_rolls_back_earlier_writes(unit_of_work, user_repository):
    await user_repository.create(UserModel(name="Erin", email="erin@example.com", age=20))
    newcomer = UserModel(name="Frank", email="frank@example.com", age=21)

    with pytest.raises(IntegrityError):
        async with unit_of_work:
            await user_repository.create(newcomer, session=unit_of_work.session)
            await user_repository.create(
                UserModel(name="Erin again", email="erin@example.com", age=22),
                session=unit_of_work.session,
            )

    assert await user_repository.find_by_id(newcomer.id) is None
    assert await user_repository.get_by_email("erin@example.com") is not None


def test_session_outside_block_raises():
    db = Database(DatabaseSettings(db_url="postgresql+asyncpg://localhost/unused"))
    with pytest.raises(RuntimeError):
        _ = UnitOfWork(db).session


@pytest.mark.asyncio
async def test_reentering_a_started_unit_of_work_raises():
    db = Database(DatabaseSettings(db_url="postgresql+asyncpg://localhost/unused"))
    unit_of_work = UnitOfWork(db)

    with pytest.raises(RuntimeError, match="already started"):
        async with unit_of_work:
            async with unit_of_work:
                pass

    with pytest.raises(RuntimeError):
        _ = unit_of_work.session
