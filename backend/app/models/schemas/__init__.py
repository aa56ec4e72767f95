"""
Pydantic schemas for the HTTP API.
"""

from app.models.schemas.chat import (
    ChatHistoryResponse,
    ChatResponse,
    MessageCountResponse,
    MessageResponse,
    StreamIdsResponse,
    VisibilityUpdate,
    VoteRequest,
    VoteResponse,
)
from app.models.schemas.document import (
    DocumentCreate,
    DocumentResponse,
    KnowledgeDocCreate,
    KnowledgeDocResponse,
    SuggestionResponse,
)

__all__ = [
    # Chat
    "ChatHistoryResponse",
    "ChatResponse",
    "MessageCountResponse",
    "MessageResponse",
    "StreamIdsResponse",
    "VisibilityUpdate",
    "VoteRequest",
    "VoteResponse",
    # Document
    "DocumentCreate",
    "DocumentResponse",
    "KnowledgeDocCreate",
    "KnowledgeDocResponse",
    "SuggestionResponse",
]
