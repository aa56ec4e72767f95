"""
Message and vote domain models.
"""

from enum import Enum
from typing import Any, Optional

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import ChatConstants, DatabaseConstants
from app.models.domain.base import Base, JSONType, TimestampMixin, UUIDMixin


class MessageRole(str, Enum):
    """Message role in conversation."""

    USER = ChatConstants.ROLE_USER
    ASSISTANT = ChatConstants.ROLE_ASSISTANT
    SYSTEM = ChatConstants.ROLE_SYSTEM


class Message(Base, UUIDMixin, TimestampMixin):
    """
    Represents a message in a chat conversation.

    Messages are read back in ascending creation order.
    """

    __tablename__ = "chat_messages"

    chat_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("chats.id"),
        nullable=False,
        index=True
    )

    # Author, used for per-user rate counting
    user_id: Mapped[Optional[str]] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("users.id"),
        nullable=True,
        index=True
    )

    role: Mapped[str] = mapped_column(String(20), nullable=False)

    # Message parts as produced by the chat client
    content: Mapped[Any] = mapped_column(JSONType, nullable=False)

    attachments: Mapped[Optional[list]] = mapped_column(JSONType, nullable=True)

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, role={self.role}, chat_id={self.chat_id})>"


class Vote(Base, UUIDMixin, TimestampMixin):
    """An up or down vote on an assistant message."""

    __tablename__ = "chat_votes"

    chat_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("chats.id"),
        nullable=False,
        index=True
    )

    message_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("chat_messages.id"),
        nullable=False,
        index=True
    )

    is_upvoted: Mapped[bool] = mapped_column(Boolean, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Vote(id={self.id}, message_id={self.message_id}, "
            f"is_upvoted={self.is_upvoted})>"
        )
