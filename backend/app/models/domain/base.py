"""
Declarative base and shared column mixins.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from app.core.constants import DatabaseConstants

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def generate_uuid() -> str:
    """Generate a new opaque record identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current UTC time with microsecond precision."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    def to_dict(self) -> Dict[str, Any]:
        """Column values keyed by attribute name."""
        return {
            attr.key: getattr(self, attr.key)
            for attr in self.__mapper__.column_attrs
        }


class UUIDMixin:
    """Primary key holding an opaque string id."""

    id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        primary_key=True,
        default=generate_uuid
    )


class TimestampMixin:
    """
    Creation and update timestamps.

    Timestamps are assigned in Python rather than by the server so that
    records created in quick succession keep a strict creation order.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )
