"""
Base repository with error translation shared by all query operations.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple, Type

from app.core.exceptions import DatabaseError, ErrorCode
from app.core.logging import get_logger
from app.db.store import DocumentStore, Record, Sort, Where

logger = get_logger(__name__)


@contextmanager
def translate_store_errors(
    message: str,
    code: str = ErrorCode.BAD_REQUEST_DATABASE,
    passthrough: Tuple[Type[Exception], ...] = (),
) -> Iterator[None]:
    """
    Re-signal any store failure as a DatabaseError.

    DatabaseErrors and the `passthrough` types raised inside the block pass
    through unchanged. Anything else is logged with its original detail and
    replaced by a DatabaseError carrying only `code` and `message`.
    """
    try:
        yield
    except (DatabaseError, *passthrough):
        raise
    except Exception as e:
        logger.error(
            message,
            code=code,
            error=str(e),
            error_type=type(e).__name__
        )
        raise DatabaseError(code, message) from e


class BaseRepository:
    """
    Base repository bound to one collection of a document store.

    Subclasses set `collection` and add one method per domain operation.
    """

    collection: str

    def __init__(self, store: DocumentStore):
        self.store = store

    async def _find(
        self,
        where: Optional[Where] = None,
        sort: Optional[Sort] = None,
        limit: Optional[int] = None,
        transaction_id: Optional[str] = None,
    ) -> List[Record]:
        return await self.store.find(
            self.collection,
            where=where,
            sort=sort,
            limit=limit,
            transaction_id=transaction_id,
        )

    async def _create_many(self, items: Sequence[Record]) -> List[Record]:
        """
        Create records one at a time, in input order.

        Not transactional: a failure stops the loop and records created before
        it are kept.
        """
        created: List[Record] = []
        for item in items:
            created.append(await self.store.create(self.collection, item))
        return created
