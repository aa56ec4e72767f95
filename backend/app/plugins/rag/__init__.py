"""
Retrieval-augmented generation plugin.

Registers the knowledge document collections and defines the configuration
and interfaces of the ingestion and retrieval pipeline.
"""

from app.plugins.rag.config import (
    EmbeddingConfig,
    QueryRewriteConfig,
    RAGPluginConfig,
    RetrievalConfig,
)
from app.plugins.rag.pipeline import (
    KnowledgeIngestor,
    KnowledgeRetriever,
    RetrievedChunk,
    rank_results,
)
from app.plugins.rag.plugin import PLUGIN_NAME, knowledge_collections, rag_plugin

__all__ = [
    "EmbeddingConfig",
    "QueryRewriteConfig",
    "RAGPluginConfig",
    "RetrievalConfig",
    "KnowledgeIngestor",
    "KnowledgeRetriever",
    "RetrievedChunk",
    "rank_results",
    "PLUGIN_NAME",
    "knowledge_collections",
    "rag_plugin",
]
