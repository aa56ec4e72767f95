"""
FastAPI dependencies for request handling.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from app.core.config import Settings
from app.core.constants import APIConstants, HTTPStatus
from app.db.store import DocumentStore
from app.repositories import (
    ChatRepository,
    DocumentRepository,
    KnowledgeDocRepository,
    MessageRepository,
    StreamRepository,
    SuggestionRepository,
    VoteRepository,
)
from app.services.llm import ProviderSelector


async def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias=APIConstants.USER_ID_HEADER)
) -> str:
    """Caller identity, set by the authenticating proxy."""
    if not x_user_id:
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail="Missing user identity"
        )
    return x_user_id


def get_store(request: Request) -> DocumentStore:
    """Document store created at startup."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


def get_provider_selector(request: Request) -> ProviderSelector:
    return request.app.state.providers


# Repositories

def get_chat_repository(
    store: DocumentStore = Depends(get_store)
) -> ChatRepository:
    return ChatRepository(store)


def get_stream_repository(
    store: DocumentStore = Depends(get_store)
) -> StreamRepository:
    return StreamRepository(store)


def get_message_repository(
    store: DocumentStore = Depends(get_store)
) -> MessageRepository:
    return MessageRepository(store)


def get_vote_repository(
    store: DocumentStore = Depends(get_store)
) -> VoteRepository:
    return VoteRepository(store)


def get_document_repository(
    store: DocumentStore = Depends(get_store)
) -> DocumentRepository:
    return DocumentRepository(store)


def get_suggestion_repository(
    store: DocumentStore = Depends(get_store)
) -> SuggestionRepository:
    return SuggestionRepository(store)


def get_knowledge_repository(
    store: DocumentStore = Depends(get_store)
) -> KnowledgeDocRepository:
    return KnowledgeDocRepository(store)

