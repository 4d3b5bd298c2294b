from src.shared.database.base_mapper import BaseEntityMapper
from src.app.core.domain.models import Client
from src.app.infrastructure.entities.client_entity import ClientEntity


class ClientMapper(BaseEntityMapper[Client, ClientEntity]):
    """Mapper for converting between Client domain model and ClientEntity."""

    entity_class = ClientEntity

    @staticmethod
    def to_entity(model_instance: Client) -> ClientEntity:
        """Convert a Client (domain model) to ClientEntity (database entity)."""
        return ClientEntity(
            id=model_instance.id,
            name=model_instance.name,
            email=str(model_instance.email),
            phone=model_instance.phone,
            created_at=model_instance.created_at,
            updated_at=model_instance.updated_at,
        )

    @staticmethod
    def to_model(entity: ClientEntity) -> Client:
        """
        Convert a ClientEntity (database entity) to Client (domain model).

        Addresses are loaded separately, so ``addresses`` is left unset.
        """
        return Client(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            phone=entity.phone,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
