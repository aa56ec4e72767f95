"""
Document (artifact) and suggestion API routes.
"""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import (
    get_current_user_id,
    get_document_repository,
    get_suggestion_repository,
)
from app.core.constants import HTTPStatus
from app.core.exceptions import DatabaseError, DocumentForbiddenError, ErrorCode
from app.core.logging import get_logger
from app.models.schemas import DocumentCreate, DocumentResponse, SuggestionResponse
from app.repositories import DocumentRepository, SuggestionRepository

logger = get_logger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


async def _check_owner(
    documents: DocumentRepository,
    document_id: str,
    user_id: str,
    must_exist: bool = True,
) -> None:
    latest = await documents.get_document_by_id(document_id)

    if latest is None:
        if must_exist:
            raise DatabaseError(
                ErrorCode.NOT_FOUND_DATABASE,
                f"Document with id {document_id} not found"
            )
        return

    if latest["user_id"] != user_id:
        raise DocumentForbiddenError(document_id)


@router.get("/{document_id}", response_model=List[DocumentResponse])
async def get_document_versions(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    documents: DocumentRepository = Depends(get_document_repository),
):
    """All versions of a document, oldest first."""
    await _check_owner(documents, document_id, user_id)

    versions = await documents.get_documents_by_id(document_id)
    return [DocumentResponse.model_validate(d) for d in versions]


@router.post(
    "/{document_id}",
    response_model=DocumentResponse,
    status_code=HTTPStatus.CREATED
)
async def save_document(
    document_id: str,
    data: DocumentCreate,
    user_id: str = Depends(get_current_user_id),
    documents: DocumentRepository = Depends(get_document_repository),
):
    """Append a new version. A new document id starts a new document."""
    await _check_owner(documents, document_id, user_id, must_exist=False)

    document = await documents.save_document(
        id=document_id,
        title=data.title,
        kind=data.kind.value,
        content=data.content,
        user_id=user_id,
        chat_id=data.chat_id,
    )

    logger.info("Document version saved", document_id=document_id)
    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}", response_model=List[DocumentResponse])
async def delete_document_versions(
    document_id: str,
    timestamp: datetime = Query(...),
    user_id: str = Depends(get_current_user_id),
    documents: DocumentRepository = Depends(get_document_repository),
):
    """Discard versions created after `timestamp`, with their suggestions."""
    await _check_owner(documents, document_id, user_id)

    deleted = await documents.delete_documents_by_id_after_timestamp(
        document_id, timestamp
    )

    logger.info(
        "Document versions deleted",
        document_id=document_id,
        count=len(deleted)
    )
    return [DocumentResponse.model_validate(d) for d in deleted]


@router.get("/{document_id}/suggestions", response_model=List[SuggestionResponse])
async def get_suggestions(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    documents: DocumentRepository = Depends(get_document_repository),
    suggestions: SuggestionRepository = Depends(get_suggestion_repository),
):
    await _check_owner(documents, document_id, user_id)

    records = await suggestions.get_suggestions_by_document_id(document_id)
    return [SuggestionResponse.model_validate(s) for s in records]
