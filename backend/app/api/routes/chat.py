"""
Chat, message, stream and vote API routes.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.dependencies import (
    get_chat_repository,
    get_current_user_id,
    get_message_repository,
    get_stream_repository,
    get_vote_repository,
)
from app.core.constants import APIConstants, ChatConstants, HTTPStatus
from app.core.exceptions import ChatForbiddenError
from app.core.logging import get_logger
from app.db.store import Record
from app.models.schemas import (
    ChatHistoryResponse,
    ChatResponse,
    MessageCountResponse,
    MessageResponse,
    StreamIdsResponse,
    VisibilityUpdate,
    VoteRequest,
    VoteResponse,
)
from app.repositories import (
    ChatRepository,
    MessageRepository,
    StreamRepository,
    VoteRepository,
)

logger = get_logger(__name__)

router = APIRouter(tags=["chats"])


async def _load_chat(
    chats: ChatRepository,
    chat_id: str,
    user_id: str,
    owner_only: bool = True,
) -> Record:
    """Fetch a chat the caller may see; public chats are readable by anyone."""
    chat = await chats.get_chat_by_id(chat_id)

    if chat["user_id"] != user_id:
        if owner_only or chat["visibility"] != ChatConstants.VISIBILITY_PUBLIC:
            raise ChatForbiddenError(chat_id)
    return chat


@router.get("/history", response_model=ChatHistoryResponse)
async def get_history(
    limit: int = Query(
        APIConstants.DEFAULT_PAGE_SIZE, ge=1, le=APIConstants.MAX_PAGE_SIZE
    ),
    starting_after: Optional[str] = Query(None),
    ending_before: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    chats: ChatRepository = Depends(get_chat_repository),
):
    """Page through the caller's chats, newest first."""
    if starting_after and ending_before:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="Only one of starting_after or ending_before can be provided"
        )

    page = await chats.get_chats_by_user_id(
        id=user_id,
        limit=limit,
        starting_after=starting_after,
        ending_before=ending_before,
    )
    return ChatHistoryResponse(
        chats=[ChatResponse.model_validate(c) for c in page.chats],
        has_more=page.has_more,
    )


@router.get("/chats/{chat_id}", response_model=ChatResponse)
async def get_chat(
    chat_id: str,
    user_id: str = Depends(get_current_user_id),
    chats: ChatRepository = Depends(get_chat_repository),
):
    chat = await _load_chat(chats, chat_id, user_id, owner_only=False)
    return ChatResponse.model_validate(chat)


@router.delete("/chats/{chat_id}", response_model=ChatResponse)
async def delete_chat(
    chat_id: str,
    user_id: str = Depends(get_current_user_id),
    chats: ChatRepository = Depends(get_chat_repository),
):
    """Delete a chat with its messages, votes and streams."""
    await _load_chat(chats, chat_id, user_id)

    deleted = await chats.delete_chat_by_id(chat_id)

    logger.info("Chat deleted", chat_id=chat_id)
    return ChatResponse.model_validate(deleted)


@router.patch("/chats/{chat_id}/visibility", response_model=ChatResponse)
async def update_visibility(
    chat_id: str,
    data: VisibilityUpdate,
    user_id: str = Depends(get_current_user_id),
    chats: ChatRepository = Depends(get_chat_repository),
):
    await _load_chat(chats, chat_id, user_id)

    chat = await chats.update_chat_visibility_by_id(chat_id, data.visibility.value)
    return ChatResponse.model_validate(chat)


# =============================================================================
# Messages
# =============================================================================

@router.get("/chats/{chat_id}/messages", response_model=List[MessageResponse])
async def get_messages(
    chat_id: str,
    user_id: str = Depends(get_current_user_id),
    chats: ChatRepository = Depends(get_chat_repository),
    messages: MessageRepository = Depends(get_message_repository),
):
    """Messages of a chat in conversation order."""
    await _load_chat(chats, chat_id, user_id, owner_only=False)

    records = await messages.get_messages_by_chat_id(chat_id)
    return [MessageResponse.model_validate(m) for m in records]


@router.delete("/chats/{chat_id}/messages", response_model=List[MessageResponse])
async def delete_trailing_messages(
    chat_id: str,
    timestamp: datetime = Query(...),
    user_id: str = Depends(get_current_user_id),
    chats: ChatRepository = Depends(get_chat_repository),
    messages: MessageRepository = Depends(get_message_repository),
):
    """Drop every message after `timestamp`, e.g. before regenerating a reply."""
    await _load_chat(chats, chat_id, user_id)

    deleted = await messages.delete_messages_by_chat_id_after_timestamp(
        chat_id, timestamp
    )
    return [MessageResponse.model_validate(m) for m in deleted]


@router.get("/messages/count", response_model=MessageCountResponse)
async def get_message_count(
    hours: float = Query(24, gt=0),
    user_id: str = Depends(get_current_user_id),
    messages: MessageRepository = Depends(get_message_repository),
):
    """How many messages the caller sent over the last `hours`."""
    count = await messages.get_message_count_by_user_id(user_id, hours)
    return MessageCountResponse(count=count, hours=hours)


# =============================================================================
# Streams
# =============================================================================

@router.get("/chats/{chat_id}/streams", response_model=StreamIdsResponse)
async def get_streams(
    chat_id: str,
    user_id: str = Depends(get_current_user_id),
    chats: ChatRepository = Depends(get_chat_repository),
    streams: StreamRepository = Depends(get_stream_repository),
):
    await _load_chat(chats, chat_id, user_id, owner_only=False)

    stream_ids = await streams.get_stream_ids_by_chat_id(chat_id)
    return StreamIdsResponse(stream_ids=stream_ids)


# =============================================================================
# Votes
# =============================================================================

@router.get("/chats/{chat_id}/votes", response_model=List[VoteResponse])
async def get_votes(
    chat_id: str,
    user_id: str = Depends(get_current_user_id),
    chats: ChatRepository = Depends(get_chat_repository),
    votes: VoteRepository = Depends(get_vote_repository),
):
    await _load_chat(chats, chat_id, user_id)

    records = await votes.get_votes_by_chat_id(chat_id)
    return [VoteResponse.model_validate(v) for v in records]


@router.patch("/votes", response_model=VoteResponse)
async def vote_message(
    data: VoteRequest,
    user_id: str = Depends(get_current_user_id),
    chats: ChatRepository = Depends(get_chat_repository),
    messages: MessageRepository = Depends(get_message_repository),
    votes: VoteRepository = Depends(get_vote_repository),
):
    """Record an up or down vote on a message of one of the caller's chats."""
    await _load_chat(chats, data.chat_id, user_id)

    message = await messages.get_message_by_id(data.message_id)
    if message["chat_id"] != data.chat_id:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail=f"Message {data.message_id} is not part of chat {data.chat_id}"
        )

    vote = await votes.vote_message(
        chat_id=data.chat_id,
        message_id=data.message_id,
        type=data.type,
    )
    return VoteResponse.model_validate(vote)
