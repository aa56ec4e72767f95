"""
Chat domain model.
"""

from enum import Enum
from typing import Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import ChatConstants, DatabaseConstants
from app.models.domain.base import Base, TimestampMixin, UUIDMixin


class ChatVisibility(str, Enum):
    """Who may read a chat."""

    PRIVATE = ChatConstants.VISIBILITY_PRIVATE
    PUBLIC = ChatConstants.VISIBILITY_PUBLIC


class Chat(Base, UUIDMixin, TimestampMixin):
    """
    Represents a chat conversation owned by a user.

    Messages, votes and streams reference the chat by id. They are removed
    explicitly (children first) when the chat is deleted.
    """

    __tablename__ = "chats"

    user_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    # Mutable after creation
    visibility: Mapped[str] = mapped_column(
        String(16),
        default=ChatVisibility.PRIVATE.value,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Chat(id={self.id}, title={self.title})>"


class Stream(Base, UUIDMixin, TimestampMixin):
    """A generation stream started for a chat, kept for resumption."""

    __tablename__ = "stream"

    chat_id: Mapped[Optional[str]] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("chats.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )

    def __repr__(self) -> str:
        return f"<Stream(id={self.id}, chat_id={self.chat_id})>"
