"""
Knowledge document repository.

Validation and the raw status promotion live in the collection's pre-persist
hooks, not here, so they also apply to writes that bypass this repository.
"""

from typing import List

from app.core.constants import CollectionSlugs
from app.core.exceptions import (
    DatabaseError,
    ErrorCode,
    RecordNotFoundError,
    SchemaValidationError,
)
from app.db.store import Record
from app.repositories.base import BaseRepository, translate_store_errors


class KnowledgeDocRepository(BaseRepository):
    """Repository for knowledge documents."""

    collection = CollectionSlugs.KNOWLEDGE_DOCS

    async def save_knowledge_doc(self, data: Record) -> Record:
        """
        Create a knowledge document.

        SchemaValidationError from the hooks is left to propagate so callers
        can report field errors.
        """
        with translate_store_errors(
            "Failed to save knowledge doc", passthrough=(SchemaValidationError,)
        ):
            return await self.store.create(self.collection, data)

    async def get_knowledge_doc_by_id(self, id: str) -> Record:
        with translate_store_errors("Failed to get knowledge doc by id"):
            try:
                return await self.store.find_by_id(self.collection, id)
            except RecordNotFoundError as e:
                raise DatabaseError(
                    ErrorCode.NOT_FOUND_DATABASE,
                    f"Knowledge doc with id {id} not found",
                ) from e

    async def get_knowledge_docs_by_status(self, status: str) -> List[Record]:
        """Documents in a given status, oldest first (ingestion work queue)."""
        with translate_store_errors("Failed to get knowledge docs by status"):
            return await self._find(
                where={"status": {"equals": status}},
                sort="created_at",
            )

    async def update_knowledge_doc_status(self, id: str, status: str) -> Record:
        with translate_store_errors(
            "Failed to update knowledge doc status", passthrough=(SchemaValidationError,)
        ):
            return await self.store.update(self.collection, id, {"status": status})
