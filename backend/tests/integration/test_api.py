"""
Integration tests for the HTTP API

Tests:
- Health endpoints
- Caller identity
- Chat history pagination and cursor errors
- Chat access rules, visibility and deletion
- Messages, votes and streams
- Document versions and suggestions
- Knowledge documents and validation errors
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from app.core.constants import CollectionSlugs
from app.db import SQLAlchemyDocumentStore, build_store_config
from app.db.postgres import create_engine_from_settings, create_session_factory
from app.main import create_app
from app.models.domain import Base
from app.plugins.rag import rag_plugin

from conftest import at

OWNER = {"X-User-ID": "user-a"}
STRANGER = {"X-User-ID": "user-b"}


async def seed(settings):
    """Users, three chats of user-a (c3 public), one of user-b, two messages in c1."""
    engine = create_engine_from_settings(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    store = SQLAlchemyDocumentStore(
        create_session_factory(engine), build_store_config([rag_plugin()])
    )
    for user_id in ("user-a", "user-b"):
        await store.create(
            CollectionSlugs.USERS,
            {"id": user_id, "email": f"{user_id}@example.com", "password": "x"},
        )
    for n in (1, 2, 3):
        await store.create(
            CollectionSlugs.CHATS,
            {
                "id": f"c{n}",
                "user_id": "user-a",
                "title": f"Chat {n}",
                "visibility": "public" if n == 3 else "private",
                "created_at": at(n),
            },
        )
    await store.create(
        CollectionSlugs.CHATS,
        {"id": "cb", "user_id": "user-b", "title": "Chat B", "created_at": at(4)},
    )
    for n, role in ((1, "user"), (2, "assistant")):
        await store.create(
            CollectionSlugs.MESSAGES,
            {
                "id": f"m{n}",
                "chat_id": "c1",
                "user_id": "user-a" if role == "user" else None,
                "role": role,
                "content": [{"type": "text", "text": f"message {n}"}],
                "attachments": [],
                "created_at": at(10 + n),
            },
        )

    await engine.dispose()


@pytest.fixture
def client(settings):
    asyncio.run(seed(settings))

    with TestClient(create_app(settings)) as client:
        yield client


@pytest.mark.integration
class TestHealth:
    """Health endpoints"""

    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client):
        assert client.get("/api/v1/health/ready").json() == {"ready": True}

    def test_detailed_lists_mock_models(self, client):
        body = client.get("/api/v1/health/detailed").json()

        assert body["services"]["database"]["status"] == "healthy"
        assert body["services"]["llm"]["test_mode"] is True

    def test_version_from_app_settings(self, settings):
        custom = settings.model_copy(update={"app_version": "9.9.9"})

        with TestClient(create_app(custom)) as client:
            assert client.get("/api/v1/health").json()["version"] == "9.9.9"
            detailed = client.get("/api/v1/health/detailed").json()
            assert detailed["version"] == "9.9.9"

    def test_request_id_echoed(self, client):
        response = client.get("/api/v1/health", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"


@pytest.mark.integration
class TestChatHistory:
    """GET /history"""

    def test_requires_identity(self, client):
        response = client.get("/api/v1/history")

        assert response.status_code == 401
        body = response.json()
        assert body["code"] == "unauthorized:api"
        assert "request_id" in body

    def test_first_page(self, client):
        response = client.get("/api/v1/history", params={"limit": 2}, headers=OWNER)

        assert response.status_code == 200
        body = response.json()
        assert [c["id"] for c in body["chats"]] == ["c3", "c2"]
        assert body["has_more"] is True

    def test_next_page(self, client):
        response = client.get(
            "/api/v1/history",
            params={"limit": 2, "ending_before": "c2"},
            headers=OWNER,
        )

        body = response.json()
        assert [c["id"] for c in body["chats"]] == ["c1"]
        assert body["has_more"] is False

    def test_both_cursors_rejected(self, client):
        response = client.get(
            "/api/v1/history",
            params={"starting_after": "c1", "ending_before": "c3"},
            headers=OWNER,
        )

        assert response.status_code == 400

    def test_unknown_cursor(self, client):
        response = client.get(
            "/api/v1/history", params={"starting_after": "nope"}, headers=OWNER
        )

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "not_found:database"
        assert body["message"] == "Chat with id nope not found"


@pytest.mark.integration
class TestChats:
    """Chat access, visibility and deletion"""

    def test_get_own_chat(self, client):
        response = client.get("/api/v1/chats/c1", headers=OWNER)

        assert response.status_code == 200
        assert response.json()["title"] == "Chat 1"

    def test_unknown_chat(self, client):
        response = client.get("/api/v1/chats/missing", headers=OWNER)

        assert response.status_code == 404
        assert response.json()["code"] == "not_found:database"

    def test_private_chat_hidden_from_others(self, client):
        response = client.get("/api/v1/chats/c1", headers=STRANGER)

        assert response.status_code == 403
        assert response.json()["code"] == "forbidden:chat"

    def test_public_chat_readable_by_others(self, client):
        assert client.get("/api/v1/chats/c3", headers=STRANGER).status_code == 200

    def test_only_owner_deletes(self, client):
        assert client.delete("/api/v1/chats/c1", headers=STRANGER).status_code == 403

        response = client.delete("/api/v1/chats/c1", headers=OWNER)

        assert response.status_code == 200
        assert response.json()["id"] == "c1"
        assert client.get("/api/v1/chats/c1", headers=OWNER).status_code == 404
        assert client.get("/api/v1/chats/c1/messages", headers=OWNER).status_code == 404

    def test_change_visibility(self, client):
        response = client.patch(
            "/api/v1/chats/c1/visibility",
            json={"visibility": "public"},
            headers=OWNER,
        )

        assert response.status_code == 200
        assert response.json()["visibility"] == "public"
        assert client.get("/api/v1/chats/c1", headers=STRANGER).status_code == 200

    def test_invalid_visibility(self, client):
        response = client.patch(
            "/api/v1/chats/c1/visibility",
            json={"visibility": "secret"},
            headers=OWNER,
        )

        assert response.status_code == 422


@pytest.mark.integration
class TestMessagesAndVotes:
    """Messages, votes, streams"""

    def test_messages_in_order(self, client):
        response = client.get("/api/v1/chats/c1/messages", headers=OWNER)

        assert [m["id"] for m in response.json()] == ["m1", "m2"]

    def test_delete_trailing_messages(self, client):
        response = client.delete(
            "/api/v1/chats/c1/messages",
            params={"timestamp": at(11).isoformat()},
            headers=OWNER,
        )

        assert [m["id"] for m in response.json()] == ["m2"]
        remaining = client.get("/api/v1/chats/c1/messages", headers=OWNER).json()
        assert [m["id"] for m in remaining] == ["m1"]

    def test_vote(self, client):
        response = client.patch(
            "/api/v1/votes",
            json={"chat_id": "c1", "message_id": "m2", "type": "up"},
            headers=OWNER,
        )

        assert response.status_code == 200
        assert response.json()["is_upvoted"] is True

        listed = client.get("/api/v1/chats/c1/votes", headers=OWNER).json()
        assert [v["message_id"] for v in listed] == ["m2"]

    def test_vote_type_validated(self, client):
        response = client.patch(
            "/api/v1/votes",
            json={"chat_id": "c1", "message_id": "m2", "type": "sideways"},
            headers=OWNER,
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "RequestValidationError"
        assert body["code"] == "bad_request:api"
        assert "request_id" in body

    def test_vote_on_message_of_another_chat_rejected(self, client):
        response = client.patch(
            "/api/v1/votes",
            json={"chat_id": "cb", "message_id": "m1", "type": "down"},
            headers=STRANGER,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "bad_request:api"
        assert client.get("/api/v1/chats/cb/votes", headers=STRANGER).json() == []

    def test_vote_on_unknown_message(self, client):
        response = client.patch(
            "/api/v1/votes",
            json={"chat_id": "c1", "message_id": "nope", "type": "up"},
            headers=OWNER,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "not_found:database"

    def test_votes_owner_only(self, client):
        assert client.get("/api/v1/chats/c3/votes", headers=STRANGER).status_code == 403

    def test_streams_empty(self, client):
        response = client.get("/api/v1/chats/c1/streams", headers=OWNER)

        assert response.json() == {"stream_ids": []}

    def test_message_count(self, client):
        response = client.get("/api/v1/messages/count", headers=OWNER)

        # Seeded messages are far outside the 24 hour window
        assert response.json() == {"count": 0, "hours": 24.0}


@pytest.mark.integration
class TestDocuments:
    """Document versions"""

    def save(self, client, content, headers=OWNER):
        return client.post(
            "/api/v1/documents/d1",
            json={"title": "Essay", "kind": "text", "content": content, "chat_id": "c1"},
            headers=headers,
        )

    def test_versions(self, client):
        assert self.save(client, "first").status_code == 201
        assert self.save(client, "second").status_code == 201

        versions = client.get("/api/v1/documents/d1", headers=OWNER).json()

        assert [v["content"] for v in versions] == ["first", "second"]

    def test_unknown_document(self, client):
        response = client.get("/api/v1/documents/missing", headers=OWNER)

        assert response.status_code == 404

    def test_others_cannot_read_or_write(self, client):
        self.save(client, "first")

        response = client.get("/api/v1/documents/d1", headers=STRANGER)
        assert response.status_code == 403
        assert response.json()["code"] == "forbidden:document"
        assert self.save(client, "hijack", headers=STRANGER).status_code == 403

    def test_delete_after_timestamp(self, client):
        first = self.save(client, "first").json()
        self.save(client, "second")

        response = client.delete(
            "/api/v1/documents/d1",
            params={"timestamp": first["created_at"]},
            headers=OWNER,
        )

        assert [d["content"] for d in response.json()] == ["second"]
        versions = client.get("/api/v1/documents/d1", headers=OWNER).json()
        assert [v["content"] for v in versions] == ["first"]

    def test_suggestions_empty(self, client):
        self.save(client, "first")

        response = client.get("/api/v1/documents/d1/suggestions", headers=OWNER)

        assert response.json() == []


@pytest.mark.integration
class TestKnowledgeDocs:
    """Knowledge documents"""

    def test_raw_doc_fulfilled(self, client):
        response = client.post(
            "/api/v1/knowledge-docs",
            json={"title": "Returns", "content": "Within 30 days."},
            headers=OWNER,
        )

        assert response.status_code == 201
        doc = response.json()
        assert doc["type"] == "raw"
        assert doc["status"] == "fulfilled"

        fetched = client.get(f"/api/v1/knowledge-docs/{doc['id']}", headers=OWNER)
        assert fetched.json()["title"] == "Returns"

    def test_raw_doc_without_content_rejected(self, client):
        response = client.post(
            "/api/v1/knowledge-docs",
            json={"title": "Returns"},
            headers=OWNER,
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "SchemaValidationError"
        assert body["code"] == "bad_request:api"
        assert list(body["details"]["errors"]) == ["content"]

    def test_list_by_status(self, client):
        client.post(
            "/api/v1/knowledge-docs",
            json={"type": "webpage", "url": "https://example.com"},
            headers=OWNER,
        )

        pending = client.get(
            "/api/v1/knowledge-docs", params={"status": "pending"}, headers=OWNER
        ).json()

        assert [d["url"] for d in pending] == ["https://example.com"]

    def test_unknown_knowledge_doc(self, client):
        response = client.get("/api/v1/knowledge-docs/missing", headers=OWNER)

        assert response.status_code == 404
        assert response.json()["code"] == "not_found:database"
