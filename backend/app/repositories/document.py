"""
Document (artifact) and suggestion repositories.
"""

from datetime import datetime
from typing import List, Literal, Optional, Sequence

from app.core.constants import CollectionSlugs
from app.db.store import Record
from app.db.transaction import store_transaction
from app.repositories.base import BaseRepository, translate_store_errors

Kind = Literal["text", "image", "code", "sheet"]


class DocumentRepository(BaseRepository):
    """
    Repository for generated documents.

    Saving appends a version; versions share the external `document_id`.
    """

    collection = CollectionSlugs.DOCUMENTS

    async def save_document(
        self,
        id: str,
        title: str,
        kind: Kind,
        content: str,
        user_id: str,
        chat_id: Optional[str] = None,
    ) -> Record:
        with translate_store_errors("Failed to save document"):
            return await self.store.create(
                self.collection,
                {
                    "document_id": id,
                    "title": title,
                    "kind": kind,
                    "content": content,
                    "user_id": user_id,
                    "chat_id": chat_id,
                },
            )

    async def get_documents_by_id(self, id: str) -> List[Record]:
        """All versions of a document, oldest first."""
        with translate_store_errors("Failed to get documents by id"):
            return await self._find(
                where={"document_id": {"equals": id}},
                sort="created_at",
            )

    async def get_document_by_id(self, id: str) -> Optional[Record]:
        """Latest version of a document, or None."""
        with translate_store_errors("Failed to get document by id"):
            documents = await self._find(
                where={"document_id": {"equals": id}},
                sort="-created_at",
                limit=1,
            )
        return documents[0] if documents else None

    async def get_documents_by_chat_id(self, id: str) -> List[Record]:
        """Documents produced in a chat, most recent first."""
        with translate_store_errors("Failed to get documents by chat id"):
            return await self._find(
                where={"chat_id": {"equals": id}},
                sort="-created_at",
            )

    async def delete_documents_by_id_after_timestamp(
        self,
        id: str,
        timestamp: datetime,
    ) -> List[Record]:
        """
        Discard document versions newer than `timestamp`, atomically.

        Suggestions on those versions are deleted first.

        Returns:
            The deleted document versions
        """
        with translate_store_errors("Failed to delete documents by id after timestamp"):
            async with store_transaction(self.store) as tx:
                await self.store.delete(
                    CollectionSlugs.SUGGESTIONS,
                    where={
                        "document_id": {"equals": id},
                        "document_created_at": {"greater_than": timestamp},
                    },
                    transaction_id=tx,
                )
                deleted = await self.store.delete(
                    self.collection,
                    where={
                        "document_id": {"equals": id},
                        "created_at": {"greater_than": timestamp},
                    },
                    transaction_id=tx,
                )
        return deleted


class SuggestionRepository(BaseRepository):
    """Repository for document suggestions."""

    collection = CollectionSlugs.SUGGESTIONS

    async def save_suggestions(self, suggestions: Sequence[Record]) -> List[Record]:
        """Create suggestions in order; same failure semantics as saving messages."""
        with translate_store_errors("Failed to save suggestions"):
            return await self._create_many(suggestions)

    async def get_suggestions_by_document_id(self, document_id: str) -> List[Record]:
        """Suggestions on any version of a document, most recent first."""
        with translate_store_errors("Failed to get suggestions by document id"):
            return await self._find(
                where={"document_id": {"equals": document_id}},
                sort="-created_at",
            )
