"""Domain models used in business logic."""
import uuid
from datetime import datetime, UTC
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Entity(BaseModel):
    """
    Base for persisted domain objects.

    ``id`` is generated when absent and cannot be reassigned. ``updated_at``
    defaults to the same instant as ``created_at``.
    """
    id: UUID = Field(default_factory=uuid.uuid4, frozen=True, description="Unique ID")
    created_at: datetime = Field(default_factory=_utcnow, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=_utcnow, description="Last update timestamp")

    model_config = {"from_attributes": True}

    @model_validator(mode="before")
    @classmethod
    def stamp_timestamps(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("updated_at") is None:
            data = dict(data)
            if data.get("created_at") is None:
                data["created_at"] = _utcnow()
            data["updated_at"] = data["created_at"]
        return data


class Address(Entity):
    """Domain model for an Address owned by a Client."""
    street: str
    city: str
    state: str
    zip_code: str = Field(..., description="Globally unique among addresses")
    country: str
    complement: str | None = None
    client_id: UUID = Field(..., description="ID of the client who owns this address")


class Client(Entity):
    """Domain model for Client used in business logic."""
    name: str
    email: str = Field(..., description="Globally unique among clients")
    phone: str = Field(..., description="Globally unique among clients")
    addresses: list[Address] | None = Field(
        default=None, description="Owned addresses; None when not loaded"
    )
