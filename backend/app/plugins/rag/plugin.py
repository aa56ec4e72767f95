"""
RAG plugin registration.
"""

from typing import Optional

from app.core.constants import CollectionSlugs
from app.core.logging import get_logger
from app.db.collections import CollectionConfig, Plugin, StoreConfig
from app.models.domain import KNOWLEDGE_DOC_HOOKS, KnowledgeDoc, KnowledgeDocUpload
from app.plugins.rag.config import RAGPluginConfig

logger = get_logger(__name__)

PLUGIN_NAME = "rag"


def knowledge_collections() -> list[CollectionConfig]:
    """The knowledge document collection and its upload collection."""
    return [
        CollectionConfig(
            slug=CollectionSlugs.KNOWLEDGE_DOCS,
            model=KnowledgeDoc,
            hooks=KNOWLEDGE_DOC_HOOKS,
        ),
        CollectionConfig(
            slug=CollectionSlugs.KNOWLEDGE_DOCS_UPLOAD,
            model=KnowledgeDocUpload,
            upload=True,
            hidden=True,
        ),
    ]


def rag_plugin(config: Optional[RAGPluginConfig] = None) -> Plugin:
    """
    Build the RAG plugin.

    The returned plugin appends the knowledge collections to the store
    configuration (once, even if applied twice) and records its configuration
    under `plugins["rag"]`.
    """
    plugin_config = config or RAGPluginConfig()

    def apply(store_config: StoreConfig) -> StoreConfig:
        collections = list(store_config.collections)
        for collection in knowledge_collections():
            if not any(c.slug == collection.slug for c in collections):
                collections.append(collection)

        logger.debug(
            "RAG plugin registered",
            threshold=plugin_config.retrieval.threshold,
            max_results=plugin_config.retrieval.max_results
        )
        return StoreConfig(
            collections=collections,
            plugins={**store_config.plugins, PLUGIN_NAME: plugin_config},
        )

    return apply
