"""
Pytest configuration and shared fixtures for RAGChat tests

Provides:
- Settings pointing at a throwaway SQLite database file
- A document store with every collection registered and tables created
- Repositories bound to that store
- Seeded users and chats with fixed creation times
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from app.core.config import DatabaseSettings, LLMSettings, Settings
from app.core.constants import CollectionSlugs
from app.db import SQLAlchemyDocumentStore, build_store_config
from app.db.postgres import create_engine_from_settings, create_session_factory
from app.models.domain import Base
from app.plugins.rag import rag_plugin
from app.repositories import (
    ChatRepository,
    DocumentRepository,
    KnowledgeDocRepository,
    MessageRepository,
    StreamRepository,
    SuggestionRepository,
    UserRepository,
    VoteRepository,
)

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """A fixed point in time, `minutes` after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings for an isolated SQLite database and mock models."""
    return Settings(
        database=DatabaseSettings(
            url_override=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
        ),
        llm=LLMSettings(use_test_models=True),
    )


@pytest_asyncio.fixture
async def engine(settings):
    engine = create_engine_from_settings(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def store(session_factory) -> SQLAlchemyDocumentStore:
    """Store serving the first-party and knowledge collections."""
    return SQLAlchemyDocumentStore(
        session_factory,
        build_store_config([rag_plugin()]),
    )


# =============================================================================
# Repositories
# =============================================================================

@pytest.fixture
def users(store):
    return UserRepository(store)


@pytest.fixture
def chats(store):
    return ChatRepository(store)


@pytest.fixture
def streams(store):
    return StreamRepository(store)


@pytest.fixture
def messages(store):
    return MessageRepository(store)


@pytest.fixture
def votes(store):
    return VoteRepository(store)


@pytest.fixture
def documents(store):
    return DocumentRepository(store)


@pytest.fixture
def suggestions(store):
    return SuggestionRepository(store)


@pytest.fixture
def knowledge(store):
    return KnowledgeDocRepository(store)


# =============================================================================
# Seed data
# =============================================================================

@pytest_asyncio.fixture
async def user(store):
    return await store.create(
        CollectionSlugs.USERS,
        {"email": "ada@example.com", "password": "not-a-real-hash"},
    )


@pytest_asyncio.fixture
async def other_user(store):
    return await store.create(
        CollectionSlugs.USERS,
        {"email": "grace@example.com", "password": "not-a-real-hash"},
    )


@pytest_asyncio.fixture
async def chat(store, user):
    return await store.create(
        CollectionSlugs.CHATS,
        {
            "id": "chat-1",
            "user_id": user["id"],
            "title": "First chat",
            "created_at": at(0),
        },
    )


async def create_message(store, chat_id, user_id, minutes, role="user", text="hi"):
    """Insert a message at a fixed time."""
    return await store.create(
        CollectionSlugs.MESSAGES,
        {
            "chat_id": chat_id,
            "user_id": user_id,
            "role": role,
            "content": [{"type": "text", "text": text}],
            "attachments": [],
            "created_at": at(minutes),
        },
    )
