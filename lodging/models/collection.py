"""Collection model — one row per entity collection of the store."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from lodging.database import Base, TimestampMixin


class Collection(TimestampMixin, Base):
    """A named, ordered sequence of JSON records (guests, rooms or bookings).

    The whole sequence is read and replaced at once; there is no per-record
    row and no transaction spanning two collections.
    """

    __tablename__ = "collections"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    records: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<Collection(name={self.name!r}, records={len(self.records or [])})>"
