"""Database entities for the infrastructure layer."""
from src.app.infrastructure.entities.client_entity import ClientEntity
from src.app.infrastructure.entities.address_entity import AddressEntity

__all__ = [
    "ClientEntity",
    "AddressEntity",
]
