"""Address service for working with a client's addresses directly."""
import logging
from uuid import UUID

from src.app.core.domain.error_codes import ClientErrorCode
from src.app.core.domain.inputs import AddressInput
from src.app.core.domain.models import Address
from src.app.core.services.client_service import ensure_distinct_zip_codes
from src.app.infrastructure.address_repository import AddressRepository
from src.app.infrastructure.client_repository import ClientRepository
from src.shared.database.pagination import FindPaginatedParams, PaginatedResult
from src.shared.exceptions import ConflictingEntityFound, EntityNotFound

logger = logging.getLogger(__name__)


class AddressService:
    """Service for handling Address business logic."""

    def __init__(self, client_repository: ClientRepository, address_repository: AddressRepository):
        self.client_repository = client_repository
        self.address_repository = address_repository

    async def create_addresses(self, client_id: UUID, requests: list[AddressInput]) -> list[Address]:
        """
        Add a batch of addresses to an existing client.

        Args:
            client_id: ID of the owning client
            requests: Addresses to create

        Returns:
            The created addresses

        Raises:
            EntityNotFound: If the client does not exist
            ConflictingEntityFound: If any zip code already exists
        """
        client = await self.client_repository.find_by_id(client_id)
        if not client:
            raise EntityNotFound("Client", client_id)
        if not requests:
            return []

        ensure_distinct_zip_codes(requests)
        existing = await self.address_repository.find_by_zip_codes([r.zip_code for r in requests])
        if existing:
            taken = ", ".join(sorted(address.zip_code for address in existing))
            raise ConflictingEntityFound("Address", "zip_code", taken, ClientErrorCode.ZIP_CODE_ALREADY_EXISTS)

        addresses = [request.for_client(client_id) for request in requests]
        await self.address_repository.create_many(addresses)
        logger.info("Created %d addresses for client %s", len(addresses), client_id)
        return addresses

    async def get_client_addresses(self, client_id: UUID) -> list[Address]:
        """
        Get all addresses for a specific client.

        Raises:
            EntityNotFound: If the client does not exist
        """
        client = await self.client_repository.find_by_id(client_id)
        if not client:
            raise EntityNotFound("Client", client_id)
        return await self.address_repository.find_by_client_id(client_id)

    async def find_by_zip_codes(self, zip_codes: list[str]) -> list[Address]:
        return await self.address_repository.find_by_zip_codes(zip_codes)

    async def delete_address(self, address_id: UUID) -> None:
        await self.address_repository.delete(address_id)
        logger.info("Deleted address %s", address_id)

    async def find_paginated_addresses(self, params: FindPaginatedParams | None = None) -> PaginatedResult[Address]:
        return await self.address_repository.find_paginated(params)
