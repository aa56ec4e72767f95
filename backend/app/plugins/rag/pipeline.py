"""
Ingestion and retrieval interfaces for knowledge documents.

No implementation ships with the application. An ingestor takes a knowledge
document through chunking and embedding and reports the resulting status; a
retriever answers a query with chunks ranked by similarity, honouring the
threshold and result limit of the plugin configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from app.db.store import Record
from app.models.domain import KnowledgeDocStatus
from app.plugins.rag.config import RAGPluginConfig


@dataclass
class RetrievedChunk:
    """One retrieval hit."""

    knowledge_doc_id: str
    content: str
    score: float
    metadata: Dict[str, Any] = field(default_factory=dict)


class KnowledgeIngestor(ABC):
    """Turns a knowledge document into indexed chunks."""

    @abstractmethod
    async def ingest(self, doc: Record) -> KnowledgeDocStatus:
        """
        Ingest one knowledge document.

        Args:
            doc: Knowledge document record, normally with status `fulfilled`

        Returns:
            `indexed` on success, `error` otherwise
        """


class KnowledgeRetriever(ABC):
    """Answers queries from the knowledge index."""

    @abstractmethod
    async def retrieve(self, query: str, config: RAGPluginConfig) -> List[RetrievedChunk]:
        """
        Retrieve chunks relevant to a query.

        Args:
            query: User query, rewritten first if `config.query_rewrite.enabled`
            config: Plugin configuration

        Returns:
            At most `config.retrieval.max_results` chunks with
            `score >= config.retrieval.threshold`, best first
        """


def rank_results(chunks: List[RetrievedChunk], config: RAGPluginConfig) -> List[RetrievedChunk]:
    """Apply the threshold and result limit shared by all retrievers."""
    kept = [c for c in chunks if c.score >= config.retrieval.threshold]
    kept.sort(key=lambda c: c.score, reverse=True)
    return kept[: config.retrieval.max_results]
