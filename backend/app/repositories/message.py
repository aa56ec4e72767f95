"""
Message and vote repositories.
"""

from datetime import datetime, timedelta
from typing import List, Literal, Sequence

from app.core.constants import ChatConstants, CollectionSlugs
from app.core.exceptions import DatabaseError, ErrorCode, RecordNotFoundError
from app.db.store import Record
from app.db.transaction import store_transaction
from app.models.domain import utcnow
from app.repositories.base import BaseRepository, translate_store_errors

VoteType = Literal["up", "down"]


class MessageRepository(BaseRepository):
    """Repository for chat messages."""

    collection = CollectionSlugs.MESSAGES

    async def save_messages(self, messages: Sequence[Record]) -> List[Record]:
        """
        Create messages in order.

        A failure aborts the remaining creates; messages already created are
        kept, and a single DatabaseError is raised.
        """
        with translate_store_errors("Failed to save messages"):
            return await self._create_many(messages)

    async def get_messages_by_chat_id(self, id: str) -> List[Record]:
        """Messages of a chat in conversation order."""
        with translate_store_errors("Failed to get messages by chat id"):
            return await self._find(
                where={"chat_id": {"equals": id}},
                sort="created_at",
            )

    async def get_message_by_id(self, id: str) -> Record:
        with translate_store_errors("Failed to get message by id"):
            try:
                return await self.store.find_by_id(self.collection, id)
            except RecordNotFoundError as e:
                raise DatabaseError(
                    ErrorCode.NOT_FOUND_DATABASE, f"Message with id {id} not found"
                ) from e

    async def get_message_count_by_user_id(
        self,
        id: str,
        difference_in_hours: float,
    ) -> int:
        """
        Count a user's own messages over a trailing window.

        Only `user` role messages created strictly after now minus
        `difference_in_hours` are counted. A missing count reads as 0.
        """
        window_start = utcnow() - timedelta(hours=difference_in_hours)

        with translate_store_errors("Failed to get message count by user id"):
            result = await self.store.count(
                self.collection,
                where={
                    "user_id": {"equals": id},
                    "role": {"equals": ChatConstants.ROLE_USER},
                    "created_at": {"greater_than": window_start},
                },
            )
        return result.total_docs or 0

    async def delete_messages_by_chat_id_after_timestamp(
        self,
        chat_id: str,
        timestamp: datetime,
    ) -> List[Record]:
        """
        Delete messages created after `timestamp`, and their votes, atomically.

        The transaction is committed even when nothing matches.

        Returns:
            The deleted messages, newest first (empty if none matched)
        """
        with translate_store_errors("Failed to delete messages by chat id after timestamp"):
            async with store_transaction(self.store) as tx:
                messages = await self._find(
                    where={
                        "chat_id": {"equals": chat_id},
                        "created_at": {"greater_than": timestamp},
                    },
                    sort="-created_at",
                    transaction_id=tx,
                )
                message_ids = [message["id"] for message in messages]

                if message_ids:
                    await self.store.delete(
                        CollectionSlugs.VOTES,
                        where={"message_id": {"in": message_ids}},
                        transaction_id=tx,
                    )
                    await self.store.delete(
                        self.collection,
                        where={"id": {"in": message_ids}},
                        transaction_id=tx,
                    )
        return messages


class VoteRepository(BaseRepository):
    """Repository for message votes."""

    collection = CollectionSlugs.VOTES

    async def vote_message(
        self,
        chat_id: str,
        message_id: str,
        type: VoteType,
    ) -> Record:
        """Record one vote. Repeated calls create repeated records."""
        with translate_store_errors("Failed to vote message"):
            return await self.store.create(
                self.collection,
                {
                    "chat_id": chat_id,
                    "message_id": message_id,
                    "is_upvoted": type == ChatConstants.VOTE_UP,
                },
            )

    async def get_votes_by_chat_id(self, id: str) -> List[Record]:
        """Votes of a chat, most recent first."""
        with translate_store_errors("Failed to get votes by chat id"):
            return await self._find(
                where={"chat_id": {"equals": id}},
                sort="-created_at",
            )
