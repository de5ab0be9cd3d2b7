"""SQLAlchemy declarative base and common utilities."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, Enum as SQLEnum, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Opaque primary key for every entity."""
    return str(uuid4())


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime normalised to UTC.

    SQLite keeps no offset, so values are converted to UTC on the way in and
    tagged as UTC on the way out. Naive values are taken to be UTC already.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def status_enum(enum_cls, name: str) -> SQLEnum:
    """Column type storing an enum by its lowercase value in a plain string column."""
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        validate_strings=True,
    )


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class IdMixin:
    """String UUID primary key generated on insert."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)


class CreatedAtMixin:
    """Creation timestamp for append-only rows."""

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )


class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at and updated_at timestamps."""

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )
