"""
Domain models (SQLAlchemy ORM models).
"""

from app.models.domain.base import (
    Base,
    JSONType,
    TimestampMixin,
    UUIDMixin,
    generate_uuid,
    utcnow,
)
from app.models.domain.chat import Chat, ChatVisibility, Stream
from app.models.domain.document import Document, DocumentKind, Suggestion
from app.models.domain.knowledge import (
    KNOWLEDGE_DOC_HOOKS,
    KnowledgeDoc,
    KnowledgeDocStatus,
    KnowledgeDocType,
    KnowledgeDocUpload,
)
from app.models.domain.message import Message, MessageRole, Vote
from app.models.domain.user import User

__all__ = [
    # Base
    "Base",
    "JSONType",
    "TimestampMixin",
    "UUIDMixin",
    "generate_uuid",
    "utcnow",
    # User
    "User",
    # Chat
    "Chat",
    "ChatVisibility",
    "Stream",
    # Message
    "Message",
    "MessageRole",
    "Vote",
    # Document
    "Document",
    "DocumentKind",
    "Suggestion",
    # Knowledge
    "KNOWLEDGE_DOC_HOOKS",
    "KnowledgeDoc",
    "KnowledgeDocStatus",
    "KnowledgeDocType",
    "KnowledgeDocUpload",
]
