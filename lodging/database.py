"""SQLAlchemy engine, session factory, and declarative base."""

from datetime import datetime

from sqlalchemy import Engine, create_engine, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from lodging.config import settings


def make_engine(database_url: str | None = None) -> Engine:
    """Create an engine for the given URL (defaults to the configured one)."""
    url = database_url or settings.database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


engine = make_engine()

session_factory = sessionmaker(engine, expire_on_commit=False)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """Mixin that adds an updated_at column."""

    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
    )


def init_db(bind: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register on Base.metadata.
    import lodging.models  # noqa: F401

    Base.metadata.create_all(bind or engine)
