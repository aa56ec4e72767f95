"""
Document store client interface.

The query layer talks to persistence exclusively through this interface:
collection-oriented CRUD plus explicit transaction lifecycle. Records cross
the boundary as plain dictionaries keyed by field name.

`where` clauses are mappings of field name to an operator mapping, e.g.::

    {
        "chat_id": {"equals": chat_id},
        "created_at": {"greater_than": cutoff},
    }

Top-level `and` / `or` keys take a list of such mappings. Range operators
whose value is None are ignored, so an absent bound simply means "unbounded".
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

Record = Dict[str, Any]
Where = Dict[str, Any]
Sort = Union[str, Sequence[str]]


@dataclass(frozen=True)
class CountResult:
    """Result of a count query. `total_docs` may be None if the backend reports nothing."""

    total_docs: Optional[int]


class DocumentStore(ABC):
    """Abstract document store client."""

    @abstractmethod
    async def find(
        self,
        collection: str,
        where: Optional[Where] = None,
        sort: Optional[Sort] = None,
        limit: Optional[int] = None,
        transaction_id: Optional[str] = None,
    ) -> List[Record]:
        """
        Find records matching a where clause.

        Args:
            collection: Collection slug
            where: Filter clause
            sort: Field name or list of field names, `-` prefix for descending
            limit: Maximum number of records, None for all
            transaction_id: Run inside this open transaction

        Returns:
            Matching records
        """

    @abstractmethod
    async def find_by_id(
        self,
        collection: str,
        id: str,
        transaction_id: Optional[str] = None,
    ) -> Record:
        """
        Get one record by id.

        Raises:
            RecordNotFoundError: If no record has this id
        """

    @abstractmethod
    async def create(
        self,
        collection: str,
        data: Record,
        transaction_id: Optional[str] = None,
    ) -> Record:
        """
        Create a record, running the collection's pre-persist hooks.

        Raises:
            SchemaValidationError: If a hook rejects the record
        """

    @abstractmethod
    async def update(
        self,
        collection: str,
        id: str,
        data: Record,
        transaction_id: Optional[str] = None,
    ) -> Record:
        """
        Update fields of one record, running the pre-persist hooks on the merged record.

        Raises:
            RecordNotFoundError: If no record has this id
            SchemaValidationError: If a hook rejects the record
        """

    @abstractmethod
    async def delete(
        self,
        collection: str,
        where: Optional[Where] = None,
        id: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> List[Record]:
        """
        Delete by id or by where clause.

        Returns:
            The deleted records

        Raises:
            RecordNotFoundError: If deleting by id and no record has this id
        """

    @abstractmethod
    async def count(
        self,
        collection: str,
        where: Optional[Where] = None,
        transaction_id: Optional[str] = None,
    ) -> CountResult:
        """Count records matching a where clause."""

    @abstractmethod
    async def begin_transaction(self) -> Optional[str]:
        """
        Open a transaction.

        Returns:
            Transaction id, or None if the store cannot open one
        """

    @abstractmethod
    async def commit_transaction(self, transaction_id: str) -> None:
        """
        Commit and release a transaction.

        The handle is released even if the commit fails.
        """

    @abstractmethod
    async def rollback_transaction(self, transaction_id: str) -> None:
        """Roll back and release a transaction."""
