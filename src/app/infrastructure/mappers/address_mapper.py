from src.shared.database.base_mapper import BaseEntityMapper
from src.app.core.domain.models import Address
from src.app.infrastructure.entities.address_entity import AddressEntity


class AddressMapper(BaseEntityMapper[Address, AddressEntity]):
    """Mapper for converting between Address domain model and AddressEntity."""

    entity_class = AddressEntity

    @staticmethod
    def to_entity(model_instance: Address) -> AddressEntity:
        return AddressEntity(
            id=model_instance.id,
            street=model_instance.street,
            city=model_instance.city,
            state=model_instance.state,
            zip_code=model_instance.zip_code,
            country=model_instance.country,
            complement=model_instance.complement,
            client_id=model_instance.client_id,
            created_at=model_instance.created_at,
            updated_at=model_instance.updated_at,
        )

    @staticmethod
    def to_model(entity: AddressEntity) -> Address:
        return Address(
            id=entity.id,
            street=entity.street,
            city=entity.city,
            state=entity.state,
            zip_code=entity.zip_code,
            country=entity.country,
            complement=entity.complement,
            client_id=entity.client_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
