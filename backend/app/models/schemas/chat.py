"""
Pydantic schemas for chat-related API endpoints.
"""

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.domain.chat import ChatVisibility
from app.models.domain.message import MessageRole


# =============================================================================
# Chat Schemas
# =============================================================================

class ChatResponse(BaseModel):
    """Response schema for a chat."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    visibility: ChatVisibility
    created_at: datetime
    updated_at: Optional[datetime] = None


class ChatHistoryResponse(BaseModel):
    """One page of chat history."""

    chats: List[ChatResponse]
    has_more: bool = False


class VisibilityUpdate(BaseModel):
    """Schema for changing chat visibility."""

    visibility: ChatVisibility


# =============================================================================
# Message Schemas
# =============================================================================

class MessageResponse(BaseModel):
    """Response schema for a message."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    chat_id: str
    user_id: Optional[str] = None
    role: MessageRole
    content: Any
    attachments: Optional[List[Any]] = None
    created_at: datetime


class MessageCountResponse(BaseModel):
    """User messages sent over a trailing window."""

    count: int
    hours: float


# =============================================================================
# Vote Schemas
# =============================================================================

class VoteRequest(BaseModel):
    """Schema for voting on a message."""

    chat_id: str
    message_id: str
    type: Literal["up", "down"]


class VoteResponse(BaseModel):
    """Response schema for a vote."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    chat_id: str
    message_id: str
    is_upvoted: bool
    created_at: datetime


# =============================================================================
# Stream Schemas
# =============================================================================

class StreamIdsResponse(BaseModel):
    """Generation streams of a chat, oldest first."""

    stream_ids: List[str] = Field(default_factory=list)
