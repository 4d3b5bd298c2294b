"""Dependency injection container using dependency-injector library."""
from dependency_injector import containers, providers

from src.app.config import Settings
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork

from src.app.infrastructure.mappers.client_mapper import ClientMapper
from src.app.infrastructure.mappers.address_mapper import AddressMapper

from src.app.infrastructure.client_repository import ClientRepository
from src.app.infrastructure.address_repository import AddressRepository

from src.app.core.services.client_service import ClientService
from src.app.core.services.address_service import AddressService


class Container(containers.DeclarativeContainer):
    """Main application dependency injection container."""

    # =========================================================================
    # CONFIGURATION - Singleton (loaded once, cached)
    # =========================================================================
    config = providers.Singleton(Settings)

    # =========================================================================
    # SINGLETONS - Stateless Mappers (reusable across all requests)
    # =========================================================================
    client_mapper = providers.Singleton(ClientMapper)
    address_mapper = providers.Singleton(AddressMapper)

    # =========================================================================
    # SINGLETON - Database (shared connection pool)
    # =========================================================================
    database_settings = providers.Singleton(
        DatabaseSettings,
        db_url=config.provided.database_url,
        pool_size=config.provided.database.pool_size,
        max_overflow=config.provided.database.max_overflow,
        echo=config.provided.database.echo,
    )

    database = providers.Singleton(
        Database,
        db_settings=database_settings,
    )

    # =========================================================================
    # FACTORIES - Repositories (per-use, share database singleton)
    # =========================================================================
    client_repository = providers.Factory(
        ClientRepository,
        db=database,
        mapper=client_mapper,
    )

    address_repository = providers.Factory(
        AddressRepository,
        db=database,
        mapper=address_mapper,
    )

    # =========================================================================
    # FACTORY - Unit of Work (per-use)
    # =========================================================================
    unit_of_work = providers.Factory(
        UnitOfWork,
        db=database,
    )

    # =========================================================================
    # FACTORIES - Services
    # =========================================================================
    client_service = providers.Factory(
        ClientService,
        client_repository=client_repository,
        address_repository=address_repository,
        unit_of_work_factory=unit_of_work.provider,
    )

    address_service = providers.Factory(
        AddressService,
        client_repository=client_repository,
        address_repository=address_repository,
    )
