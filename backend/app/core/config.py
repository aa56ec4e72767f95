"""
Application configuration using Pydantic Settings.
All configuration is loaded from environment variables.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.constants import DatabaseConstants, RAGConstants

if TYPE_CHECKING:
    from app.plugins.rag.config import RAGPluginConfig


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(env_prefix="POSTGRES_", populate_by_name=True)

    host: str = "localhost"
    port: int = 5432
    user: str = "ragchat"
    password: str = "ragchat_secret"
    db: str = "ragchat"

    # Full URL override (e.g. sqlite+aiosqlite for local runs and tests)
    url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")

    pool_size: int = DatabaseConstants.POOL_SIZE
    max_overflow: int = DatabaseConstants.MAX_OVERFLOW
    pool_timeout: int = DatabaseConstants.POOL_TIMEOUT_SECONDS
    pool_recycle: int = DatabaseConstants.POOL_RECYCLE_SECONDS

    @property
    def async_url(self) -> str:
        """Async database URL for asyncpg."""
        if self.url_override:
            return self.url_override
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.async_url.startswith("sqlite")


class LLMSettings(BaseSettings):
    """Language model provider configuration."""

    model_config = SettingsConfigDict(env_prefix="LLM_", populate_by_name=True)

    # Switches the provider selector to the mock model set
    use_test_models: bool = False

    openrouter_api_key: Optional[str] = Field(default=None, alias="OPENROUTER_API_KEY")
    xai_api_key: Optional[str] = Field(default=None, alias="XAI_API_KEY")


class RAGSettings(BaseSettings):
    """RAG plugin configuration."""

    model_config = SettingsConfigDict(env_prefix="RAG_", extra="ignore")

    retrieval_threshold: float = RAGConstants.DEFAULT_THRESHOLD
    max_results: int = RAGConstants.DEFAULT_MAX_RESULTS
    chunk_size: int = RAGConstants.DEFAULT_CHUNK_SIZE
    chunk_overlap: int = RAGConstants.DEFAULT_CHUNK_OVERLAP
    embedding_model: Optional[str] = None
    query_rewrite_enabled: bool = False
    query_rewrite_model: Optional[str] = None

    def to_plugin_config(self) -> "RAGPluginConfig":
        """Build the plugin configuration from environment settings."""
        from app.plugins.rag.config import (
            EmbeddingConfig,
            QueryRewriteConfig,
            RAGPluginConfig,
            RetrievalConfig,
        )

        return RAGPluginConfig(
            retrieval=RetrievalConfig(
                threshold=self.retrieval_threshold,
                max_results=self.max_results,
            ),
            embedding=EmbeddingConfig(
                chunk_size=self.chunk_size,
                chunk_overlap=self.chunk_overlap,
                model=self.embedding_model,
            ),
            query_rewrite=QueryRewriteConfig(
                enabled=self.query_rewrite_enabled,
                model=self.query_rewrite_model,
            ),
        )


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from JSON string or list."""
        if isinstance(v, str):
            import json
            return json.loads(v)
        return v


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    rag: RAGSettings = Field(default_factory=RAGSettings)
    api: APISettings = Field(default_factory=APISettings)

    # Application info
    app_name: str = "RAGChat"
    app_version: str = "0.1.0"
    debug: bool = False
    # Overrides the level implied by `debug`, e.g. "WARNING"
    log_level: Optional[str] = None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.
    Uses LRU cache to ensure settings are only loaded once.
    """
    return Settings()
