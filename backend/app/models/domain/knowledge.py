"""
Knowledge document models registered by the RAG plugin.

A knowledge document is either raw text entered directly, a webpage to be
fetched, or an uploaded file. Raw documents carry their own title and content
and therefore skip the fetch stage: they are promoted from `pending` to
`fulfilled` as they are written.
"""

from enum import Enum
from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text, event
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import (
    CollectionSlugs,
    DatabaseConstants,
    KnowledgeConstants,
)
from app.models.domain.base import Base, TimestampMixin, UUIDMixin
from app.models.hooks import (
    CollectionHooks,
    HookOperation,
    Record,
    ValidationResult,
)


class KnowledgeDocType(str, Enum):
    """Where the knowledge document content comes from."""

    RAW = KnowledgeConstants.TYPE_RAW
    WEBPAGE = KnowledgeConstants.TYPE_WEBPAGE
    DOCUMENT = KnowledgeConstants.TYPE_DOCUMENT


class KnowledgeDocStatus(str, Enum):
    """Ingestion status."""

    PENDING = KnowledgeConstants.STATUS_PENDING
    FULFILLED = KnowledgeConstants.STATUS_FULFILLED
    INDEXED = KnowledgeConstants.STATUS_INDEXED
    ERROR = KnowledgeConstants.STATUS_ERROR


class KnowledgeDocUpload(Base, UUIDMixin, TimestampMixin):
    """Binary upload backing a `document` type knowledge doc."""

    __tablename__ = "knowledge_docs_upload"

    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    filesize: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<KnowledgeDocUpload(id={self.id}, filename={self.filename})>"


class KnowledgeDoc(Base, UUIDMixin, TimestampMixin):
    """A document to be ingested into the retrieval index."""

    __tablename__ = "knowledge_docs"

    type: Mapped[str] = mapped_column(
        String(16),
        default=KnowledgeDocType.RAW.value,
        nullable=False
    )

    # Only meaningful for `webpage`
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Only meaningful for `document`
    file_id: Mapped[Optional[str]] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("knowledge_docs_upload.id", ondelete="SET NULL"),
        nullable=True
    )

    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(16),
        default=KnowledgeDocStatus.PENDING.value,
        nullable=False,
        index=True
    )

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<KnowledgeDoc(id={self.id}, type={self.type}, "
            f"status={self.status})>"
        )


# =============================================================================
# Pre-persist hooks
# =============================================================================

def _is_raw(record: Record) -> bool:
    # Column default applies when type is not given
    return (record.get("type") or KnowledgeConstants.TYPE_RAW) == KnowledgeConstants.TYPE_RAW


def validate_raw_fields(record: Record) -> ValidationResult:
    """Raw documents need both a title and content, each checked on its own."""
    result = ValidationResult()
    if not _is_raw(record):
        return result

    if not record.get("title"):
        result.add("title", KnowledgeConstants.RAW_TITLE_REQUIRED)
    if not record.get("content"):
        result.add("content", KnowledgeConstants.RAW_CONTENT_REQUIRED)
    return result


def promote_raw_status(record: Record, operation: str) -> None:
    """Raw documents have nothing to fetch, so `pending` becomes `fulfilled`."""
    status = record.get("status") or KnowledgeConstants.STATUS_PENDING
    if _is_raw(record) and status == KnowledgeConstants.STATUS_PENDING:
        record["status"] = KnowledgeConstants.STATUS_FULFILLED


KNOWLEDGE_DOC_HOOKS = CollectionHooks(
    validators=[validate_raw_fields],
    before_change=[promote_raw_status],
)


def _apply_hooks_to_instance(target: KnowledgeDoc, operation: str) -> None:
    record = target.to_dict()
    KNOWLEDGE_DOC_HOOKS.apply(CollectionSlugs.KNOWLEDGE_DOCS, record, operation)
    if record.get("status") is not None:
        target.status = record["status"]


@event.listens_for(KnowledgeDoc, "before_insert")
def _knowledge_doc_before_insert(mapper, connection, target: KnowledgeDoc) -> None:
    # Covers ORM writes that do not go through the document store
    _apply_hooks_to_instance(target, HookOperation.CREATE)


@event.listens_for(KnowledgeDoc, "before_update")
def _knowledge_doc_before_update(mapper, connection, target: KnowledgeDoc) -> None:
    _apply_hooks_to_instance(target, HookOperation.UPDATE)
