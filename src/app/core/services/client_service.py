"""Client service orchestrating the client use-cases."""
import asyncio
import logging
from collections.abc import Callable
from uuid import UUID

from src.app.core.domain.error_codes import ClientErrorCode
from src.app.core.domain.inputs import AddressInput, CreateClientInput, UpdateClientInput
from src.app.core.domain.models import Address, Client
from src.app.infrastructure.address_repository import AddressRepository
from src.app.infrastructure.client_repository import ClientRepository
from src.shared.database.pagination import FindPaginatedParams, PaginatedResult
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.exceptions import ConflictingEntityFound, EntityNotFound

logger = logging.getLogger(__name__)


def ensure_distinct_zip_codes(addresses: list[AddressInput]) -> None:
    """Reject a batch that repeats a zip code before it reaches the unique index."""
    seen: set[str] = set()
    for address in addresses:
        if address.zip_code in seen:
            raise ConflictingEntityFound(
                "Address", "zip_code", address.zip_code, ClientErrorCode.ZIP_CODE_ALREADY_EXISTS
            )
        seen.add(address.zip_code)


class ClientService:
    """Service for handling Client business logic."""

    def __init__(
        self,
        client_repository: ClientRepository,
        address_repository: AddressRepository,
        unit_of_work_factory: Callable[[], UnitOfWork],
    ):
        """
        Args:
            unit_of_work_factory: Builds a fresh UnitOfWork for each write, so
                overlapping calls on one service never share a session
        """
        self.client_repository = client_repository
        self.address_repository = address_repository
        self.unit_of_work_factory = unit_of_work_factory

    async def create_client(self, request: CreateClientInput) -> Client:
        """
        Create a client together with its initial addresses.

        Email, phone and zip code uniqueness are checked concurrently before
        anything is written. The client row and its address rows are then
        written in one transaction.

        Raises:
            ConflictingEntityFound: email, phone or a zip code is already taken
        """
        ensure_distinct_zip_codes(request.addresses)
        zip_codes = [address.zip_code for address in request.addresses]

        same_email, same_phone, existing_addresses = await asyncio.gather(
            self.client_repository.find_by_email(str(request.email)),
            self.client_repository.find_by_phone(request.phone),
            self.address_repository.find_by_zip_codes(zip_codes),
        )

        if same_email is not None:
            logger.warning("Rejected client creation: email %s already exists", request.email)
            raise ConflictingEntityFound(
                "Client", "email", request.email, ClientErrorCode.EMAIL_ALREADY_EXISTS
            )
        if same_phone is not None:
            logger.warning("Rejected client creation: phone %s already exists", request.phone)
            raise ConflictingEntityFound(
                "Client", "phone", request.phone, ClientErrorCode.PHONE_ALREADY_EXISTS
            )
        if existing_addresses:
            taken = ", ".join(sorted(address.zip_code for address in existing_addresses))
            logger.warning("Rejected client creation: zip codes %s already exist", taken)
            raise ConflictingEntityFound(
                "Address", "zip_code", taken, ClientErrorCode.ZIP_CODE_ALREADY_EXISTS
            )

        client = Client(name=request.name, email=str(request.email), phone=request.phone)
        addresses = [address.for_client(client.id) for address in request.addresses]

        async with self.unit_of_work_factory() as uow:
            session = uow.session
            created = await self.client_repository.create(client, session=session)
            await self.address_repository.create_many(addresses, session=session)

        created.addresses = addresses
        logger.info("Created client %s with %d addresses", created.id, len(addresses))
        return created

    async def update_client(self, client_id: UUID, request: UpdateClientInput) -> Client:
        """
        Apply a partial update to a client.

        Supplied email and phone are checked against other clients. A non-empty
        address list replaces all of the client's addresses (delete then insert,
        in the same transaction as the client update). An empty list is treated
        as "no change".

        Raises:
            EntityNotFound: the client does not exist
            ConflictingEntityFound: email, phone or a zip code belongs to another client
        """
        client = await self.client_repository.find_by_id(client_id)
        if client is None:
            raise EntityNotFound("Client", client_id)

        if request.name is not None:
            client.name = request.name

        if request.email is not None:
            same_email = await self.client_repository.find_by_email(str(request.email))
            if same_email is not None and same_email.id != client.id:
                logger.warning("Rejected update of client %s: email already exists", client_id)
                raise ConflictingEntityFound(
                    "Client", "email", request.email, ClientErrorCode.EMAIL_ALREADY_EXISTS
                )
            client.email = str(request.email)

        if request.phone is not None:
            same_phone = await self.client_repository.find_by_phone(request.phone)
            if same_phone is not None and same_phone.id != client.id:
                logger.warning("Rejected update of client %s: phone already exists", client_id)
                raise ConflictingEntityFound(
                    "Client", "phone", request.phone, ClientErrorCode.PHONE_ALREADY_EXISTS
                )
            client.phone = request.phone

        replacement: list[Address] | None = None
        if request.addresses:
            ensure_distinct_zip_codes(request.addresses)
            existing = await self.address_repository.find_by_zip_codes(
                [address.zip_code for address in request.addresses]
            )
            foreign = sorted(a.zip_code for a in existing if a.client_id != client.id)
            if foreign:
                logger.warning("Rejected update of client %s: zip codes owned by another client", client_id)
                raise ConflictingEntityFound(
                    "Address", "zip_code", ", ".join(foreign), ClientErrorCode.ZIP_CODE_ALREADY_EXISTS
                )
            replacement = [address.for_client(client.id) for address in request.addresses]

        async with self.unit_of_work_factory() as uow:
            session = uow.session
            updated = await self.client_repository.update(client, session=session)
            if updated is None:
                # Deleted between the read above and this write
                raise EntityNotFound("Client", client_id)
            if replacement is not None:
                await self.address_repository.delete_by_client_id(client.id, session=session)
                await self.address_repository.create_many(replacement, session=session)

        if replacement is not None:
            updated.addresses = replacement
        logger.info("Updated client %s", client_id)
        return updated

    async def delete_client(self, client_id: UUID) -> None:
        """Delete a client. Its addresses go with it through the foreign key cascade."""
        await self.client_repository.delete(client_id)
        logger.info("Deleted client %s", client_id)

    async def get_client(self, client_id: UUID) -> Client:
        """Get a client by ID with its addresses attached."""
        client = await self.client_repository.find_by_id(client_id)
        if not client:
            raise EntityNotFound("Client", client_id)
        client.addresses = await self.address_repository.find_by_client_id(client.id)
        return client

    async def get_client_by_email(self, email: str) -> Client:
        """Get a client by email."""
        client = await self.client_repository.find_by_email(email)
        if not client:
            raise EntityNotFound("Client", email)
        return client

    async def find_paginated_clients(self, params: FindPaginatedParams | None = None) -> PaginatedResult[Client]:
        return await self.client_repository.find_paginated(params)
