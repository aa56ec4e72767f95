"""
Scoped document store transactions.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from app.core.exceptions import DatabaseError, ErrorCode
from app.core.logging import get_logger, log_context
from app.db.store import DocumentStore

logger = get_logger(__name__)


@asynccontextmanager
async def store_transaction(store: DocumentStore) -> AsyncIterator[str]:
    """
    Open a transaction and finalize it exactly once.

    Commits when the block exits normally, including blocks that issued no
    writes. Rolls back and re-raises when the block raises. If the store cannot
    open a transaction the operation fails; it is never run non-atomically.

    Example:
        async with store_transaction(store) as tx:
            await store.delete("chat-votes", where=..., transaction_id=tx)

    Yields:
        Transaction id to pass to store calls

    Raises:
        DatabaseError: If no transaction could be opened
    """
    transaction_id = await store.begin_transaction()
    if not transaction_id:
        raise DatabaseError(ErrorCode.BAD_REQUEST_DATABASE, "Failed to begin transaction")

    with log_context(transaction_id=transaction_id):
        try:
            yield transaction_id
        except BaseException:
            try:
                await store.rollback_transaction(transaction_id)
            except Exception as rollback_error:
                logger.error(
                    "Rollback failed",
                    error=str(rollback_error),
                    error_type=type(rollback_error).__name__
                )
            raise

        # The store releases the handle even when the commit itself fails
        await store.commit_transaction(transaction_id)
