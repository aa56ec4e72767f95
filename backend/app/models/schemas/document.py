"""
Pydantic schemas for document and knowledge document endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.domain.document import DocumentKind
from app.models.domain.knowledge import KnowledgeDocStatus, KnowledgeDocType


# =============================================================================
# Generated Document Schemas
# =============================================================================

class DocumentCreate(BaseModel):
    """Schema for saving a new document version."""

    title: str = Field(min_length=1)
    kind: DocumentKind = DocumentKind.TEXT
    content: str = ""
    chat_id: Optional[str] = None


class DocumentResponse(BaseModel):
    """Response schema for one document version."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    document_id: str
    chat_id: Optional[str] = None
    title: str
    kind: DocumentKind
    content: Optional[str] = None
    user_id: str
    created_at: datetime


class SuggestionResponse(BaseModel):
    """Response schema for a suggestion."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    document_id: str
    document_created_at: datetime
    original_text: str
    suggested_text: str
    description: Optional[str] = None
    is_resolved: bool = False
    user_id: Optional[str] = None
    created_at: datetime


# =============================================================================
# Knowledge Document Schemas
# =============================================================================

class KnowledgeDocCreate(BaseModel):
    """
    Schema for submitting a knowledge document.

    Field rules (raw documents need title and content) are enforced when
    the record is written, not here.
    """

    type: KnowledgeDocType = KnowledgeDocType.RAW
    url: Optional[str] = None
    file_id: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    status: KnowledgeDocStatus = KnowledgeDocStatus.PENDING


class KnowledgeDocResponse(BaseModel):
    """Response schema for a knowledge document."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    type: KnowledgeDocType
    url: Optional[str] = None
    file_id: Optional[str] = None
    title: Optional[str] = None
    status: KnowledgeDocStatus
    content: Optional[str] = None
    created_at: datetime
