"""
Query layer.

One repository per aggregate, each method one domain operation over the
document store. Store failures surface as DatabaseError.
"""

from app.repositories.base import BaseRepository, translate_store_errors
from app.repositories.chat import ChatPage, ChatRepository, StreamRepository
from app.repositories.document import DocumentRepository, SuggestionRepository
from app.repositories.knowledge import KnowledgeDocRepository
from app.repositories.message import MessageRepository, VoteRepository
from app.repositories.user import UserRepository, hash_password

__all__ = [
    "BaseRepository",
    "translate_store_errors",
    "ChatPage",
    "ChatRepository",
    "StreamRepository",
    "DocumentRepository",
    "SuggestionRepository",
    "KnowledgeDocRepository",
    "MessageRepository",
    "VoteRepository",
    "UserRepository",
    "hash_password",
]
