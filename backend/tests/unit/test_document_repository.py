"""
Unit tests for DocumentRepository and SuggestionRepository

Tests:
- Version history of a document
- Latest version lookup
- Documents by chat
- Discarding versions after a timestamp with their suggestions
- Rollback when discarding fails part way
- Suggestions by document
"""

from unittest.mock import AsyncMock

import pytest

from app.core.constants import CollectionSlugs
from app.core.exceptions import DatabaseError, ErrorCode
from app.db import DocumentStore, SQLAlchemyDocumentStore
from app.repositories import DocumentRepository

from conftest import at


async def save_versions(documents, user_id, document_id="doc-1", count=3, chat_id=None):
    saved = []
    for n in range(1, count + 1):
        saved.append(
            await documents.save_document(
                id=document_id,
                title=f"Draft {n}",
                kind="text",
                content=f"v{n}",
                user_id=user_id,
                chat_id=chat_id,
            )
        )
    return saved


def suggestion_for(version, text, user_id):
    return {
        "document_id": version["document_id"],
        "document_created_at": version["created_at"],
        "original_text": text,
        "suggested_text": text.upper(),
        "description": "Shout it",
        "user_id": user_id,
    }


@pytest.mark.unit
class TestDocumentVersions:
    """Versioned document reads"""

    @pytest.mark.asyncio
    async def test_versions_oldest_first(self, documents, user):
        await save_versions(documents, user["id"])

        versions = await documents.get_documents_by_id("doc-1")

        assert [v["content"] for v in versions] == ["v1", "v2", "v3"]
        assert len({v["id"] for v in versions}) == 3

    @pytest.mark.asyncio
    async def test_latest_version(self, documents, user):
        await save_versions(documents, user["id"])

        latest = await documents.get_document_by_id("doc-1")

        assert latest["content"] == "v3"

    @pytest.mark.asyncio
    async def test_unknown_document_is_none(self, documents):
        assert await documents.get_document_by_id("missing") is None
        assert await documents.get_documents_by_id("missing") == []

    @pytest.mark.asyncio
    async def test_by_chat_newest_first(self, documents, user, chat):
        await save_versions(documents, user["id"], document_id="a", count=1, chat_id=chat["id"])
        await save_versions(documents, user["id"], document_id="b", count=1, chat_id=chat["id"])
        await save_versions(documents, user["id"], document_id="c", count=1)

        in_chat = await documents.get_documents_by_chat_id(chat["id"])

        assert [d["document_id"] for d in in_chat] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_save_failure(self):
        store = AsyncMock(spec=DocumentStore)
        store.create.side_effect = RuntimeError("unique violation")

        with pytest.raises(DatabaseError) as exc_info:
            await DocumentRepository(store).save_document(
                id="doc-1", title="t", kind="text", content="c", user_id="u"
            )

        assert exc_info.value.code == ErrorCode.BAD_REQUEST_DATABASE
        assert exc_info.value.message == "Failed to save document"


class FailingDocumentDeleteStore(SQLAlchemyDocumentStore):
    """Fails after the suggestions were already deleted in the transaction."""

    async def delete(self, collection, where=None, id=None, transaction_id=None):
        if collection == CollectionSlugs.DOCUMENTS:
            raise RuntimeError("document delete failed")
        return await super().delete(
            collection, where=where, id=id, transaction_id=transaction_id
        )


@pytest.mark.unit
class TestDeleteVersions:
    """delete_documents_by_id_after_timestamp"""

    @pytest.mark.asyncio
    async def test_discards_later_versions_and_suggestions(
        self, store, documents, suggestions, user
    ):
        v1, v2, v3 = await save_versions(documents, user["id"])
        await suggestions.save_suggestions([
            suggestion_for(v1, "keep me", user["id"]),
            suggestion_for(v2, "drop me", user["id"]),
        ])

        deleted = await documents.delete_documents_by_id_after_timestamp(
            "doc-1", v1["created_at"]
        )

        assert {d["id"] for d in deleted} == {v2["id"], v3["id"]}
        remaining = await documents.get_documents_by_id("doc-1")
        assert [v["id"] for v in remaining] == [v1["id"]]
        left = await suggestions.get_suggestions_by_document_id("doc-1")
        assert [s["original_text"] for s in left] == ["keep me"]
        assert store.open_transactions == []

    @pytest.mark.asyncio
    async def test_other_documents_untouched(self, documents, user):
        (first,) = await save_versions(documents, user["id"], document_id="a", count=1)
        await save_versions(documents, user["id"], document_id="b", count=2)

        await documents.delete_documents_by_id_after_timestamp("a", first["created_at"])

        assert len(await documents.get_documents_by_id("b")) == 2

    @pytest.mark.asyncio
    async def test_failure_restores_suggestions(
        self, store, session_factory, documents, suggestions, user
    ):
        v1, v2 = await save_versions(documents, user["id"], count=2)
        await suggestions.save_suggestions([suggestion_for(v2, "drop me", user["id"])])

        failing = FailingDocumentDeleteStore(session_factory, store.config)

        with pytest.raises(DatabaseError) as exc_info:
            await DocumentRepository(failing).delete_documents_by_id_after_timestamp(
                "doc-1", v1["created_at"]
            )

        assert exc_info.value.code == ErrorCode.BAD_REQUEST_DATABASE
        assert exc_info.value.message == "Failed to delete documents by id after timestamp"
        left = await suggestions.get_suggestions_by_document_id("doc-1")
        assert [s["original_text"] for s in left] == ["drop me"]
        assert len(await documents.get_documents_by_id("doc-1")) == 2
        assert failing.open_transactions == []

    @pytest.mark.asyncio
    async def test_no_transaction_support_fails_without_writes(self):
        store = AsyncMock(spec=DocumentStore)
        store.begin_transaction.return_value = None

        with pytest.raises(DatabaseError) as exc_info:
            await DocumentRepository(store).delete_documents_by_id_after_timestamp(
                "doc-1", at(0)
            )

        assert exc_info.value.message == "Failed to begin transaction"
        store.delete.assert_not_awaited()


@pytest.mark.unit
class TestSuggestions:
    """SuggestionRepository"""

    @pytest.mark.asyncio
    async def test_newest_first_across_versions(self, documents, suggestions, user):
        v1, v2 = await save_versions(documents, user["id"], count=2)
        saved = await suggestions.save_suggestions([
            suggestion_for(v1, "first", user["id"]),
            suggestion_for(v2, "second", user["id"]),
        ])

        listed = await suggestions.get_suggestions_by_document_id("doc-1")

        assert [s["id"] for s in listed] == [saved[1]["id"], saved[0]["id"]]
        assert all(s["is_resolved"] is False for s in listed)
