"""
Generated document (artifact) and suggestion domain models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import DatabaseConstants, DocumentKinds
from app.models.domain.base import Base, TimestampMixin, UUIDMixin


class DocumentKind(str, Enum):
    """Kind of generated artifact."""

    TEXT = DocumentKinds.TEXT
    IMAGE = DocumentKinds.IMAGE
    CODE = DocumentKinds.CODE
    SHEET = DocumentKinds.SHEET


class Document(Base, UUIDMixin, TimestampMixin):
    """
    One version of a generated document.

    Every save appends a new row; versions share `document_id` and are told
    apart by `created_at`. The latest version is the current one.
    """

    __tablename__ = "chat_documents"
    __table_args__ = (
        UniqueConstraint("document_id", "created_at", name="uq_chat_documents_version"),
    )

    # External id shared across versions
    document_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        nullable=False,
        index=True
    )

    chat_id: Mapped[Optional[str]] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("chats.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    kind: Mapped[str] = mapped_column(
        String(16),
        default=DocumentKind.TEXT.value,
        nullable=False
    )

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    user_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("users.id"),
        nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<Document(id={self.id}, document_id={self.document_id}, "
            f"kind={self.kind})>"
        )


class Suggestion(Base, UUIDMixin, TimestampMixin):
    """An edit suggestion attached to one document version."""

    __tablename__ = "chat_suggestions"
    __table_args__ = (
        ForeignKeyConstraint(
            ["document_id", "document_created_at"],
            ["chat_documents.document_id", "chat_documents.created_at"],
            name="fk_chat_suggestions_document_version",
        ),
    )

    document_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        nullable=False,
        index=True
    )

    document_created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False
    )

    original_text: Mapped[str] = mapped_column(Text, nullable=False)
    suggested_text: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_resolved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    user_id: Mapped[Optional[str]] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("users.id"),
        nullable=True
    )

    def __repr__(self) -> str:
        return f"<Suggestion(id={self.id}, document_id={self.document_id})>"
