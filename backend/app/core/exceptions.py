"""
Custom exception hierarchy for RAGChat.
All application-specific exceptions inherit from RAGChatError.
"""

from typing import Any, Dict, Optional

from app.core.constants import HTTPStatus


class RAGChatError(Exception):
    """Base exception for all RAGChat errors."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"
    # `<type>:<surface>`, shown to clients next to the message
    code: str = "internal:api"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        result = {
            "error": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Database Errors
# =============================================================================

class ErrorCode:
    """Surface codes of the form `<type>:<surface>`."""

    BAD_REQUEST_DATABASE = "bad_request:database"
    NOT_FOUND_DATABASE = "not_found:database"
    BAD_REQUEST_API = "bad_request:api"
    FORBIDDEN_CHAT = "forbidden:chat"
    FORBIDDEN_DOCUMENT = "forbidden:document"
    NOT_FOUND_API = "not_found:api"
    OFFLINE_CHAT = "offline:chat"


_STATUS_BY_TYPE = {
    "bad_request": HTTPStatus.BAD_REQUEST,
    "not_found": HTTPStatus.NOT_FOUND,
}


class DatabaseError(RAGChatError):
    """
    Uniform error raised by the query layer.

    Every failure of the document store is re-signalled as one of two codes:
    `bad_request:database` (default) or `not_found:database`.
    """

    default_message = "Database error"

    def __init__(
        self,
        code: str = ErrorCode.BAD_REQUEST_DATABASE,
        message: Optional[str] = None,
    ):
        self.code = code
        self.type, _, self.surface = code.partition(":")
        self.status_code = _STATUS_BY_TYPE.get(
            self.type, HTTPStatus.INTERNAL_SERVER_ERROR
        )
        super().__init__(message=message)


class RecordNotFoundError(RAGChatError):
    """Raised by the document store when an id does not resolve."""

    status_code = HTTPStatus.NOT_FOUND
    code = ErrorCode.NOT_FOUND_DATABASE
    default_message = "Record not found"

    def __init__(self, collection: str, record_id: str):
        super().__init__(
            message=f"Record '{record_id}' not found in '{collection}'",
            details={"collection": collection, "id": record_id}
        )


class UnknownCollectionError(RAGChatError):
    """Raised when a collection slug is not registered with the store."""

    status_code = HTTPStatus.BAD_REQUEST
    code = ErrorCode.BAD_REQUEST_DATABASE
    default_message = "Unknown collection"

    def __init__(self, collection: str):
        super().__init__(
            message=f"Collection '{collection}' is not registered",
            details={"collection": collection}
        )


class InvalidQueryError(RAGChatError):
    """Raised when a `where` clause cannot be compiled."""

    status_code = HTTPStatus.BAD_REQUEST
    code = ErrorCode.BAD_REQUEST_DATABASE
    default_message = "Invalid query"


class TransactionError(RAGChatError):
    """Raised for unknown or already finalized transaction ids."""

    code = ErrorCode.BAD_REQUEST_DATABASE
    default_message = "Transaction error"

    def __init__(self, transaction_id: str, reason: str):
        super().__init__(
            message=f"Transaction '{transaction_id}': {reason}",
            details={"transaction_id": transaction_id, "reason": reason}
        )


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(RAGChatError):
    """Base exception for validation errors."""

    status_code = HTTPStatus.UNPROCESSABLE_ENTITY
    code = ErrorCode.BAD_REQUEST_API
    default_message = "Validation error"


class SchemaValidationError(ValidationError):
    """Raised by pre-persist hooks when a candidate record is rejected."""

    default_message = "Record failed validation"

    def __init__(self, collection: str, errors: Dict[str, str]):
        self.collection = collection
        self.errors = dict(errors)
        super().__init__(
            message=f"Invalid '{collection}' record: "
            + ", ".join(sorted(self.errors)),
            details={"collection": collection, "errors": self.errors}
        )


# =============================================================================
# LLM Errors
# =============================================================================

class LLMError(RAGChatError):
    """Base exception for LLM-related errors."""

    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    code = ErrorCode.OFFLINE_CHAT
    default_message = "LLM service error"


class ModelNotFoundError(LLMError):
    """Raised when a logical model name is not configured."""

    status_code = HTTPStatus.NOT_FOUND
    code = ErrorCode.NOT_FOUND_API
    default_message = "Model not found"

    def __init__(self, model_name: str, available: list[str]):
        super().__init__(
            message=f"Model '{model_name}' is not configured",
            details={"model_name": model_name, "available_models": available}
        )


# =============================================================================
# Chat Errors
# =============================================================================

class ChatError(RAGChatError):
    """Base exception for chat-related errors."""

    default_message = "Chat error"


class ChatForbiddenError(ChatError):
    """Raised when a user acts on a chat they do not own."""

    status_code = HTTPStatus.FORBIDDEN
    code = ErrorCode.FORBIDDEN_CHAT
    default_message = "Forbidden"

    def __init__(self, chat_id: str):
        super().__init__(
            message=f"Chat '{chat_id}' belongs to another user",
            details={"chat_id": chat_id}
        )


# =============================================================================
# Document Errors
# =============================================================================

class DocumentForbiddenError(RAGChatError):
    """Raised when a user touches a document someone else owns."""

    status_code = HTTPStatus.FORBIDDEN
    code = ErrorCode.FORBIDDEN_DOCUMENT
    default_message = "Forbidden"

    def __init__(self, document_id: str):
        super().__init__(
            message=f"Document '{document_id}' belongs to another user",
            details={"document_id": document_id}
        )
