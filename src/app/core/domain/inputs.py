"""Inputs accepted by the client and address services."""
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.app.core.domain.models import Address


def _not_blank(v: str | None) -> str | None:
    if v is None:
        return v
    if not v.strip():
        raise ValueError("Field cannot be blank or only whitespace")
    return v.strip()


class AddressInput(BaseModel):
    """Address fields supplied when creating or replacing a client's addresses."""
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1, description="Must not exist for any other address")
    country: str = Field(..., min_length=1)
    complement: str | None = None

    @field_validator("street", "city", "state", "zip_code", "country")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure fields are not just whitespace."""
        return _not_blank(v)

    def for_client(self, client_id: UUID) -> Address:
        """Build the Address owned by ``client_id``."""
        return Address(client_id=client_id, **self.model_dump())


class CreateClientInput(BaseModel):
    """Input for creating a new client with optional initial addresses."""
    name: str = Field(..., min_length=1, description="Name cannot be blank")
    email: EmailStr = Field(..., description="Email address is required")
    phone: str = Field(..., min_length=1, description="Phone cannot be blank")
    addresses: list[AddressInput] = Field(default_factory=list)

    @field_validator("name", "phone")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure fields are not just whitespace."""
        return _not_blank(v)


class UpdateClientInput(BaseModel):
    """
    Partial update of a client.

    A field left as None is not changed. A non-empty ``addresses`` list
    replaces every address of the client; an empty list leaves them alone.
    """
    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    addresses: list[AddressInput] | None = None

    @field_validator("name", "phone")
    @classmethod
    def validate_not_blank(cls, v: str | None) -> str | None:
        """Ensure supplied fields are not just whitespace."""
        return _not_blank(v)
