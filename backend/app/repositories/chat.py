"""
Chat and stream repositories.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional

from app.core.constants import ChatConstants, CollectionSlugs
from app.core.exceptions import DatabaseError, ErrorCode, RecordNotFoundError
from app.db.store import Record
from app.db.transaction import store_transaction
from app.repositories.base import BaseRepository, translate_store_errors

Visibility = Literal["private", "public"]


@dataclass
class ChatPage:
    """One page of a user's chat history, newest first."""

    chats: List[Record] = field(default_factory=list)
    has_more: bool = False


class ChatRepository(BaseRepository):
    """Repository for chats."""

    collection = CollectionSlugs.CHATS

    async def save_chat(
        self,
        id: str,
        user_id: str,
        title: str,
        visibility: Visibility = ChatConstants.VISIBILITY_PRIVATE,
    ) -> Record:
        """Create a chat with a caller-chosen id."""
        with translate_store_errors("Failed to save chat"):
            return await self.store.create(
                self.collection,
                {
                    "id": id,
                    "user_id": user_id,
                    "title": title,
                    "visibility": visibility,
                },
            )

    async def get_chat_by_id(self, id: str) -> Record:
        """
        Get a chat by id.

        Raises:
            DatabaseError: `not_found:database` if the chat does not exist
        """
        with translate_store_errors("Failed to get chat by id"):
            try:
                return await self.store.find_by_id(self.collection, id)
            except RecordNotFoundError as e:
                raise DatabaseError(
                    ErrorCode.NOT_FOUND_DATABASE, f"Chat with id {id} not found"
                ) from e

    async def _cursor_timestamp(self, chat_id: str) -> datetime:
        # Any failure to resolve a cursor reads as "not found"
        try:
            chat = await self.store.find_by_id(self.collection, chat_id)
        except Exception as e:
            raise DatabaseError(
                ErrorCode.NOT_FOUND_DATABASE, f"Chat with id {chat_id} not found"
            ) from e
        return chat["created_at"]

    async def get_chats_by_user_id(
        self,
        id: str,
        limit: int,
        starting_after: Optional[str] = None,
        ending_before: Optional[str] = None,
    ) -> ChatPage:
        """
        Page through a user's chats, newest first.

        Cursors are ids of existing chats. `starting_after` bounds the page to
        chats created strictly after that chat, `ending_before` to chats created
        strictly before it. One extra record is fetched to tell whether
        another page exists.

        Args:
            id: Owner user id
            limit: Page size
            starting_after: Optional cursor chat id
            ending_before: Optional cursor chat id

        Returns:
            At most `limit` chats and the `has_more` flag

        Raises:
            DatabaseError: `not_found:database` if a cursor chat does not exist,
                raised before the range query is issued
        """
        starting_after_date = None
        ending_before_date = None

        if starting_after:
            starting_after_date = await self._cursor_timestamp(starting_after)
        if ending_before:
            ending_before_date = await self._cursor_timestamp(ending_before)

        with translate_store_errors("Failed to get chats by user id"):
            chats = await self._find(
                where={
                    "user_id": {"equals": id},
                    "created_at": {
                        "greater_than": starting_after_date,
                        "less_than": ending_before_date,
                    },
                },
                sort="-created_at",
                limit=limit + 1,
            )

        has_more = len(chats) > limit
        return ChatPage(chats=chats[:limit] if has_more else chats, has_more=has_more)

    async def delete_chat_by_id(self, id: str) -> Record:
        """
        Delete a chat and everything hanging off it, atomically.

        Children go first: votes, messages, streams, then the chat itself.
        Votes on the chat's messages are removed even when they were filed
        under another chat id.
        """
        with translate_store_errors("Failed to delete chat"):
            async with store_transaction(self.store) as tx:
                where_chat = {"chat_id": {"equals": id}}
                messages = await self.store.find(
                    CollectionSlugs.MESSAGES, where=where_chat, transaction_id=tx
                )
                where_votes = {"or": [where_chat]}
                if messages:
                    where_votes["or"].append(
                        {"message_id": {"in": [m["id"] for m in messages]}}
                    )
                await self.store.delete(
                    CollectionSlugs.VOTES, where=where_votes, transaction_id=tx
                )
                await self.store.delete(
                    CollectionSlugs.MESSAGES, where=where_chat, transaction_id=tx
                )
                await self.store.delete(
                    CollectionSlugs.STREAMS, where=where_chat, transaction_id=tx
                )
                deleted = await self.store.delete(
                    self.collection, id=id, transaction_id=tx
                )
        return deleted[0]

    async def update_chat_visibility_by_id(
        self,
        chat_id: str,
        visibility: Visibility,
    ) -> Record:
        with translate_store_errors("Failed to update chat visibility by id"):
            return await self.store.update(
                self.collection, chat_id, {"visibility": visibility}
            )


class StreamRepository(BaseRepository):
    """Generation streams, kept so an interrupted response can be resumed."""

    collection = CollectionSlugs.STREAMS

    async def create_stream_id(self, stream_id: str, chat_id: str) -> Record:
        with translate_store_errors("Failed to create stream id"):
            return await self.store.create(
                self.collection, {"id": stream_id, "chat_id": chat_id}
            )

    async def get_stream_ids_by_chat_id(self, chat_id: str) -> List[str]:
        """Stream ids of a chat, oldest first."""
        with translate_store_errors("Failed to get stream ids by chat id"):
            streams = await self._find(
                where={"chat_id": {"equals": chat_id}},
                sort="created_at",
            )
        return [stream["id"] for stream in streams]
