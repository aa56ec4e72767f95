"""
RAG plugin configuration.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.core.constants import RAGConstants


class RetrievalConfig(BaseModel):
    """How many results to return and how similar they must be."""

    model_config = ConfigDict(frozen=True)

    threshold: float = Field(default=RAGConstants.DEFAULT_THRESHOLD, ge=0.0, le=1.0)
    max_results: int = Field(default=RAGConstants.DEFAULT_MAX_RESULTS, ge=1)


class EmbeddingConfig(BaseModel):
    """Chunking and embedding parameters for ingestion."""

    model_config = ConfigDict(frozen=True)

    chunk_size: int = Field(default=RAGConstants.DEFAULT_CHUNK_SIZE, ge=1)
    chunk_overlap: int = Field(default=RAGConstants.DEFAULT_CHUNK_OVERLAP, ge=0)
    model: Optional[str] = None

    @model_validator(mode="after")
    def check_overlap(self) -> "EmbeddingConfig":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self


class QueryRewriteConfig(BaseModel):
    """Optional rewriting of the user query before retrieval."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    model: Optional[str] = None


class RAGPluginConfig(BaseModel):
    """Everything the ingestion and retrieval pipeline is configured with."""

    model_config = ConfigDict(frozen=True)

    retrieval: RetrievalConfig = Field(default_factory=RetrievalConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    query_rewrite: QueryRewriteConfig = Field(default_factory=QueryRewriteConfig)
