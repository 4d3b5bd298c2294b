"""Infrastructure mappers for converting between domain models and database entities."""
from src.app.infrastructure.mappers.client_mapper import ClientMapper
from src.app.infrastructure.mappers.address_mapper import AddressMapper

__all__ = [
    "ClientMapper",
    "AddressMapper",
]
