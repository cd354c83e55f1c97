"""Pydantic v2 schemas for guests."""

from pydantic import BaseModel, EmailStr, Field

from lodging.schemas.common import Instant

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class GuestCreate(BaseModel):
    """Schema for creating a new guest."""

    name: str = Field(..., min_length=1, max_length=255)
    tax_id: str = Field(..., min_length=1, max_length=50)
    phone: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)


class GuestUpdate(BaseModel):
    """Schema for partially updating a guest. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    tax_id: str | None = Field(None, min_length=1, max_length=50)
    phone: str | None = Field(None, min_length=1, max_length=50)
    email: EmailStr | None = None
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)


# ---------------------------------------------------------------------------
# Stored record
# ---------------------------------------------------------------------------


class Guest(BaseModel):
    """A guest record as persisted in the ``guests`` collection."""

    id: str
    name: str
    tax_id: str
    phone: str
    email: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    created_at: Instant
    updated_at: Instant
