"""
Unit tests for MessageRepository and VoteRepository

Tests:
- Ordered, non-transactional bulk saves
- Message lookup
- Trailing-window message counts
- Deleting messages after a timestamp together with their votes
- Voting
"""

from unittest.mock import AsyncMock

import pytest

from app.core.constants import CollectionSlugs
from app.core.exceptions import DatabaseError, ErrorCode
from app.db import CountResult, DocumentStore
from app.repositories import MessageRepository

from conftest import at, create_message


def message_data(chat_id, user_id, text, role="user"):
    return {
        "chat_id": chat_id,
        "user_id": user_id,
        "role": role,
        "content": [{"type": "text", "text": text}],
        "attachments": [],
    }


@pytest.mark.unit
class TestSaveMessages:
    """save_messages"""

    @pytest.mark.asyncio
    async def test_saves_in_order(self, messages, user, chat):
        saved = await messages.save_messages([
            message_data(chat["id"], user["id"], "one"),
            message_data(chat["id"], None, "two", role="assistant"),
        ])

        assert len(saved) == 2
        listed = await messages.get_messages_by_chat_id(chat["id"])
        assert [m["content"][0]["text"] for m in listed] == ["one", "two"]

    @pytest.mark.asyncio
    async def test_failure_stops_and_keeps_earlier_messages(self):
        store = AsyncMock(spec=DocumentStore)
        store.create.side_effect = [
            {"id": "m1"},
            RuntimeError("insert failed"),
            {"id": "m3"},
        ]

        with pytest.raises(DatabaseError) as exc_info:
            await MessageRepository(store).save_messages([{"n": 1}, {"n": 2}, {"n": 3}])

        assert exc_info.value.code == ErrorCode.BAD_REQUEST_DATABASE
        assert exc_info.value.message == "Failed to save messages"
        # m3 was never attempted
        assert store.create.await_count == 2
        store.begin_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_partial_failure_against_database(self, store, messages, user, chat):
        with pytest.raises(DatabaseError):
            await messages.save_messages([
                message_data(chat["id"], user["id"], "kept"),
                {**message_data(chat["id"], user["id"], "bad"), "mood": "grumpy"},
                message_data(chat["id"], user["id"], "never"),
            ])

        listed = await messages.get_messages_by_chat_id(chat["id"])
        assert [m["content"][0]["text"] for m in listed] == ["kept"]


@pytest.mark.unit
class TestGetMessage:
    """get_message_by_id"""

    @pytest.mark.asyncio
    async def test_found(self, store, messages, user, chat):
        created = await create_message(store, chat["id"], user["id"], 1)

        assert (await messages.get_message_by_id(created["id"]))["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_missing(self, messages):
        with pytest.raises(DatabaseError) as exc_info:
            await messages.get_message_by_id("missing")

        assert exc_info.value.code == ErrorCode.NOT_FOUND_DATABASE


@pytest.mark.unit
class TestMessageCount:
    """get_message_count_by_user_id"""

    @pytest.mark.asyncio
    async def test_counts_recent_user_messages_only(
        self, store, messages, user, other_user, chat
    ):
        # Recent: created now
        await messages.save_messages([
            message_data(chat["id"], user["id"], "a"),
            message_data(chat["id"], user["id"], "b"),
            message_data(chat["id"], user["id"], "reply", role="assistant"),
            message_data(chat["id"], other_user["id"], "someone else"),
        ])
        # Old: well outside the window
        await create_message(store, chat["id"], user["id"], 0)

        assert await messages.get_message_count_by_user_id(user["id"], 24) == 2

    @pytest.mark.asyncio
    async def test_no_messages(self, messages, user):
        assert await messages.get_message_count_by_user_id(user["id"], 24) == 0

    @pytest.mark.asyncio
    async def test_missing_total_reads_as_zero(self):
        store = AsyncMock(spec=DocumentStore)
        store.count.return_value = CountResult(total_docs=None)

        assert await MessageRepository(store).get_message_count_by_user_id("u", 1) == 0

    @pytest.mark.asyncio
    async def test_count_failure(self):
        store = AsyncMock(spec=DocumentStore)
        store.count.side_effect = RuntimeError("timeout")

        with pytest.raises(DatabaseError) as exc_info:
            await MessageRepository(store).get_message_count_by_user_id("u", 1)

        assert exc_info.value.code == ErrorCode.BAD_REQUEST_DATABASE


@pytest.mark.unit
class TestDeleteAfterTimestamp:
    """delete_messages_by_chat_id_after_timestamp"""

    @pytest.mark.asyncio
    async def test_deletes_later_messages_and_their_votes(
        self, store, messages, votes, user, chat
    ):
        m1 = await create_message(store, chat["id"], user["id"], 1)
        m2 = await create_message(store, chat["id"], user["id"], 2)
        m3 = await create_message(store, chat["id"], user["id"], 3)
        await votes.vote_message(chat["id"], m1["id"], "up")
        await votes.vote_message(chat["id"], m3["id"], "down")

        deleted = await messages.delete_messages_by_chat_id_after_timestamp(
            chat["id"], at(1)
        )

        assert [m["id"] for m in deleted] == [m3["id"], m2["id"]]
        remaining = await messages.get_messages_by_chat_id(chat["id"])
        assert [m["id"] for m in remaining] == [m1["id"]]
        remaining_votes = await votes.get_votes_by_chat_id(chat["id"])
        assert [v["message_id"] for v in remaining_votes] == [m1["id"]]
        assert store.open_transactions == []

    @pytest.mark.asyncio
    async def test_nothing_to_delete_still_commits(self):
        store = AsyncMock(spec=DocumentStore)
        store.begin_transaction.return_value = "tx-1"
        store.find.return_value = []

        deleted = await MessageRepository(store).delete_messages_by_chat_id_after_timestamp(
            "c1", at(0)
        )

        assert deleted == []
        store.delete.assert_not_awaited()
        store.commit_transaction.assert_awaited_once_with("tx-1")
        store.rollback_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_nothing_to_delete_against_database(self, store, messages, user, chat):
        await create_message(store, chat["id"], user["id"], 1)

        deleted = await messages.delete_messages_by_chat_id_after_timestamp(
            chat["id"], at(10)
        )

        assert deleted == []
        assert len(await messages.get_messages_by_chat_id(chat["id"])) == 1
        assert store.open_transactions == []

    @pytest.mark.asyncio
    async def test_vote_delete_failure_rolls_back(self):
        store = AsyncMock(spec=DocumentStore)
        store.begin_transaction.return_value = "tx-1"
        store.find.return_value = [{"id": "m2"}]
        store.delete.side_effect = RuntimeError("lock timeout")

        with pytest.raises(DatabaseError):
            await MessageRepository(store).delete_messages_by_chat_id_after_timestamp(
                "c1", at(0)
            )

        store.rollback_transaction.assert_awaited_once_with("tx-1")
        store.commit_transaction.assert_not_awaited()
        assert store.delete.await_args.args[0] == CollectionSlugs.VOTES


@pytest.mark.unit
class TestVotes:
    """VoteRepository"""

    @pytest.mark.asyncio
    async def test_vote_up_and_down(self, store, votes, user, chat):
        message = await create_message(store, chat["id"], user["id"], 1)

        up = await votes.vote_message(chat["id"], message["id"], "up")
        down = await votes.vote_message(chat["id"], message["id"], "down")

        assert up["is_upvoted"] is True
        assert down["is_upvoted"] is False

    @pytest.mark.asyncio
    async def test_repeated_votes_are_separate_records_newest_first(
        self, store, votes, user, chat
    ):
        message = await create_message(store, chat["id"], user["id"], 1)
        first = await votes.vote_message(chat["id"], message["id"], "up")
        second = await votes.vote_message(chat["id"], message["id"], "up")

        listed = await votes.get_votes_by_chat_id(chat["id"])

        assert [v["id"] for v in listed] == [second["id"], first["id"]]
