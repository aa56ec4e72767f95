"""
Knowledge document API routes.

Documents submitted here are picked up by the ingestion pipeline; raw
documents with both title and content are ready to index immediately.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_current_user_id, get_knowledge_repository
from app.core.constants import HTTPStatus
from app.core.logging import get_logger
from app.models.domain import KnowledgeDocStatus
from app.models.schemas import KnowledgeDocCreate, KnowledgeDocResponse
from app.repositories import KnowledgeDocRepository

logger = get_logger(__name__)

router = APIRouter(
    prefix="/knowledge-docs",
    tags=["knowledge"],
    dependencies=[Depends(get_current_user_id)]
)


@router.post("", response_model=KnowledgeDocResponse, status_code=HTTPStatus.CREATED)
async def create_knowledge_doc(
    data: KnowledgeDocCreate,
    knowledge: KnowledgeDocRepository = Depends(get_knowledge_repository),
):
    doc = await knowledge.save_knowledge_doc(data.model_dump(mode="json"))

    logger.info(
        "Knowledge document created",
        knowledge_doc_id=doc["id"],
        status=doc["status"]
    )
    return KnowledgeDocResponse.model_validate(doc)


@router.get("", response_model=List[KnowledgeDocResponse])
async def list_knowledge_docs(
    status: KnowledgeDocStatus = Query(KnowledgeDocStatus.PENDING),
    knowledge: KnowledgeDocRepository = Depends(get_knowledge_repository),
):
    """Knowledge documents in one lifecycle state, oldest first."""
    docs = await knowledge.get_knowledge_docs_by_status(status.value)
    return [KnowledgeDocResponse.model_validate(d) for d in docs]


@router.get("/{doc_id}", response_model=KnowledgeDocResponse)
async def get_knowledge_doc(
    doc_id: str,
    knowledge: KnowledgeDocRepository = Depends(get_knowledge_repository),
):
    doc = await knowledge.get_knowledge_doc_by_id(doc_id)
    return KnowledgeDocResponse.model_validate(doc)
