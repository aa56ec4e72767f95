"""
Centralized constants for the RAGChat application.
All magic strings and numbers are defined here.
"""

# =============================================================================
# Database Constants
# =============================================================================

class DatabaseConstants:
    """Database-related constants."""

    # Connection pool settings
    POOL_SIZE = 5
    MAX_OVERFLOW = 10
    POOL_TIMEOUT_SECONDS = 30
    POOL_RECYCLE_SECONDS = 1800

    # Identifier column width (UUID4 string form)
    ID_LENGTH = 36


class CollectionSlugs:
    """Names of the persisted collections."""

    USERS = "users"
    CHATS = "chats"
    MESSAGES = "chat-messages"
    VOTES = "chat-votes"
    DOCUMENTS = "chat-documents"
    SUGGESTIONS = "chat-suggestions"
    STREAMS = "stream"
    KNOWLEDGE_DOCS = "knowledge-docs"
    KNOWLEDGE_DOCS_UPLOAD = "knowledge-docs-upload"


class WhereOperators:
    """Operators understood by the document store `where` clauses."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    GREATER_THAN_EQUAL = "greater_than_equal"
    LESS_THAN = "less_than"
    LESS_THAN_EQUAL = "less_than_equal"
    IN = "in"
    NOT_IN = "not_in"


# =============================================================================
# Chat Constants
# =============================================================================

class ChatConstants:
    """Chat-related constants."""

    # Message roles
    ROLE_USER = "user"
    ROLE_ASSISTANT = "assistant"
    ROLE_SYSTEM = "system"

    # Chat visibility
    VISIBILITY_PRIVATE = "private"
    VISIBILITY_PUBLIC = "public"

    # Vote types
    VOTE_UP = "up"
    VOTE_DOWN = "down"

    # Guest accounts
    GUEST_EMAIL_TEMPLATE = "guest-{timestamp}@guest.local"
    PASSWORD_HASH_ROUNDS = 10


class DocumentKinds:
    """Kinds of generated documents (artifacts)."""

    TEXT = "text"
    IMAGE = "image"
    CODE = "code"
    SHEET = "sheet"


# =============================================================================
# Knowledge Document Constants
# =============================================================================

class KnowledgeConstants:
    """Knowledge document types and statuses."""

    TYPE_RAW = "raw"
    TYPE_WEBPAGE = "webpage"
    TYPE_DOCUMENT = "document"

    STATUS_PENDING = "pending"
    STATUS_FULFILLED = "fulfilled"
    STATUS_INDEXED = "indexed"
    STATUS_ERROR = "error"

    RAW_TITLE_REQUIRED = "This is raw, so it must have a title"
    RAW_CONTENT_REQUIRED = "This is raw, so it must have content"


class RAGConstants:
    """RAG plugin defaults."""

    DEFAULT_THRESHOLD = 0.3
    DEFAULT_MAX_RESULTS = 5
    DEFAULT_CHUNK_SIZE = 1000
    DEFAULT_CHUNK_OVERLAP = 200


# =============================================================================
# LLM Constants
# =============================================================================

class LLMConstants:
    """Logical model names and their production backends."""

    CHAT_MODEL = "chat-model"
    CHAT_MODEL_REASONING = "chat-model-reasoning"
    TITLE_MODEL = "title-model"
    ARTIFACT_MODEL = "artifact-model"
    SMALL_IMAGE_MODEL = "small-model"

    PROVIDER_OPENROUTER = "openrouter"
    PROVIDER_XAI = "xai"
    PROVIDER_MOCK = "mock"

    OPENROUTER_CHAT_MODEL = "google/gemini-2.0-flash-lite-preview-02-05:free"
    XAI_REASONING_MODEL = "grok-3-mini-beta"
    XAI_ARTIFACT_MODEL = "grok-2-1212"
    XAI_IMAGE_MODEL = "grok-2-image"

    REASONING_TAG = "think"


# =============================================================================
# API Constants
# =============================================================================

class APIConstants:
    """API-related constants."""

    # Pagination defaults
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 100

    # Headers
    USER_ID_HEADER = "X-User-ID"
    REQUEST_ID_HEADER = "X-Request-ID"


class HTTPStatus:
    """HTTP status codes."""

    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503
