"""
Document store backed by async SQLAlchemy.

Each collection slug maps to an ORM model. Non-transactional calls run in a
short-lived session that commits on success. Calls that pass a
`transaction_id` run in the session opened by `begin_transaction` and are only
made durable by `commit_transaction`.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Type

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.elements import ColumnElement

from app.core.constants import WhereOperators
from app.core.exceptions import (
    InvalidQueryError,
    RecordNotFoundError,
    SchemaValidationError,
    TransactionError,
)
from app.core.logging import get_logger
from app.db.collections import CollectionConfig, StoreConfig
from app.db.store import CountResult, DocumentStore, Record, Sort, Where
from app.models.domain import Base, generate_uuid
from app.models.hooks import HookOperation

logger = get_logger(__name__)

_RANGE_OPERATORS = {
    WhereOperators.GREATER_THAN: lambda col, v: col > v,
    WhereOperators.GREATER_THAN_EQUAL: lambda col, v: col >= v,
    WhereOperators.LESS_THAN: lambda col, v: col < v,
    WhereOperators.LESS_THAN_EQUAL: lambda col, v: col <= v,
}


class SQLAlchemyDocumentStore(DocumentStore):
    """DocumentStore over an async SQLAlchemy session factory."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        config: StoreConfig,
        supports_transactions: bool = True,
    ):
        self._session_factory = session_factory
        self.config = config
        self.supports_transactions = supports_transactions
        self._transactions: Dict[str, AsyncSession] = {}

    # =========================================================================
    # Sessions and transactions
    # =========================================================================

    @asynccontextmanager
    async def _session(self, transaction_id: Optional[str]) -> AsyncIterator[AsyncSession]:
        if transaction_id is not None:
            session = self._transactions.get(transaction_id)
            if session is None:
                raise TransactionError(transaction_id, "unknown or already finalized")
            yield session
            return

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def begin_transaction(self) -> Optional[str]:
        if not self.supports_transactions:
            return None

        transaction_id = generate_uuid()
        self._transactions[transaction_id] = self._session_factory()
        logger.debug("Transaction opened", transaction_id=transaction_id)
        return transaction_id

    def _release(self, transaction_id: str) -> AsyncSession:
        session = self._transactions.pop(transaction_id, None)
        if session is None:
            raise TransactionError(transaction_id, "unknown or already finalized")
        return session

    async def commit_transaction(self, transaction_id: str) -> None:
        session = self._release(transaction_id)
        try:
            await session.commit()
            logger.debug("Transaction committed", transaction_id=transaction_id)
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def rollback_transaction(self, transaction_id: str) -> None:
        session = self._release(transaction_id)
        try:
            await session.rollback()
            logger.debug("Transaction rolled back", transaction_id=transaction_id)
        finally:
            await session.close()

    @property
    def open_transactions(self) -> List[str]:
        """Ids of transactions not yet committed or rolled back."""
        return list(self._transactions)

    # =========================================================================
    # Query compilation
    # =========================================================================

    def _collection(self, collection: str) -> CollectionConfig:
        return self.config.get(collection)

    @staticmethod
    def _column(model: Type[Base], field: str):
        if field not in model.__mapper__.column_attrs:
            raise InvalidQueryError(
                message=f"Unknown field '{field}' on '{model.__tablename__}'",
                details={"field": field}
            )
        return getattr(model, field)

    def _compile_condition(
        self,
        model: Type[Base],
        field: str,
        condition: Any,
    ) -> List[ColumnElement]:
        column = self._column(model, field)

        # Bare values mean equality
        if not isinstance(condition, dict):
            condition = {WhereOperators.EQUALS: condition}

        clauses: List[ColumnElement] = []
        for operator, value in condition.items():
            if operator == WhereOperators.EQUALS:
                clauses.append(column.is_(None) if value is None else column == value)
            elif operator == WhereOperators.NOT_EQUALS:
                clauses.append(column.is_not(None) if value is None else column != value)
            elif operator in _RANGE_OPERATORS:
                if value is not None:
                    clauses.append(_RANGE_OPERATORS[operator](column, value))
            elif operator == WhereOperators.IN:
                clauses.append(column.in_(list(value or [])))
            elif operator == WhereOperators.NOT_IN:
                clauses.append(column.not_in(list(value or [])))
            else:
                raise InvalidQueryError(
                    message=f"Unsupported operator '{operator}'",
                    details={"field": field, "operator": operator}
                )
        return clauses

    def _compile_where(
        self,
        model: Type[Base],
        where: Optional[Where],
    ) -> Optional[ColumnElement]:
        if not where:
            return None

        clauses: List[ColumnElement] = []
        for key, condition in where.items():
            if key in ("and", "or"):
                parts = [
                    part
                    for sub in condition
                    if (part := self._compile_where(model, sub)) is not None
                ]
                if parts:
                    clauses.append(and_(*parts) if key == "and" else or_(*parts))
            else:
                clauses.extend(self._compile_condition(model, key, condition))

        if not clauses:
            return None
        return and_(*clauses)

    def _compile_sort(self, model: Type[Base], sort: Optional[Sort]) -> list:
        if not sort:
            return []
        fields = [sort] if isinstance(sort, str) else list(sort)
        order_by = []
        for field in fields:
            descending = field.startswith("-")
            column = self._column(model, field.lstrip("-"))
            order_by.append(column.desc() if descending else column.asc())
        return order_by

    @staticmethod
    def _check_fields(collection: str, model: Type[Base], data: Record) -> None:
        unknown = [k for k in data if k not in model.__mapper__.column_attrs]
        if unknown:
            raise SchemaValidationError(
                collection, {name: "Unknown field" for name in unknown}
            )

    # =========================================================================
    # CRUD
    # =========================================================================

    async def find(
        self,
        collection: str,
        where: Optional[Where] = None,
        sort: Optional[Sort] = None,
        limit: Optional[int] = None,
        transaction_id: Optional[str] = None,
    ) -> List[Record]:
        model = self._collection(collection).model
        query = select(model)

        clause = self._compile_where(model, where)
        if clause is not None:
            query = query.where(clause)

        order_by = self._compile_sort(model, sort)
        if order_by:
            query = query.order_by(*order_by)

        if limit is not None:
            query = query.limit(limit)

        async with self._session(transaction_id) as session:
            result = await session.execute(query)
            return [row.to_dict() for row in result.scalars().all()]

    async def find_by_id(
        self,
        collection: str,
        id: str,
        transaction_id: Optional[str] = None,
    ) -> Record:
        model = self._collection(collection).model
        async with self._session(transaction_id) as session:
            instance = await session.get(model, id)
            if instance is None:
                raise RecordNotFoundError(collection, id)
            return instance.to_dict()

    async def create(
        self,
        collection: str,
        data: Record,
        transaction_id: Optional[str] = None,
    ) -> Record:
        config = self._collection(collection)
        self._check_fields(collection, config.model, data)

        record = config.hooks.apply(collection, dict(data), HookOperation.CREATE)
        instance = config.model(**record)

        async with self._session(transaction_id) as session:
            session.add(instance)
            await session.flush()
            return instance.to_dict()

    async def update(
        self,
        collection: str,
        id: str,
        data: Record,
        transaction_id: Optional[str] = None,
    ) -> Record:
        config = self._collection(collection)
        self._check_fields(collection, config.model, data)

        async with self._session(transaction_id) as session:
            instance = await session.get(config.model, id)
            if instance is None:
                raise RecordNotFoundError(collection, id)

            current = instance.to_dict()
            merged = config.hooks.apply(
                collection, {**current, **data}, HookOperation.UPDATE
            )
            for key, value in merged.items():
                if key in data or current.get(key) != value:
                    setattr(instance, key, value)

            await session.flush()
            return instance.to_dict()

    async def delete(
        self,
        collection: str,
        where: Optional[Where] = None,
        id: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> List[Record]:
        model = self._collection(collection).model

        if id is not None:
            async with self._session(transaction_id) as session:
                instance = await session.get(model, id)
                if instance is None:
                    raise RecordNotFoundError(collection, id)
                deleted = instance.to_dict()
                await session.delete(instance)
                await session.flush()
                return [deleted]

        clause = self._compile_where(model, where)
        if clause is None:
            raise InvalidQueryError(
                message=f"Refusing to delete from '{collection}' without a filter",
                details={"collection": collection}
            )

        async with self._session(transaction_id) as session:
            result = await session.execute(select(model).where(clause))
            deleted = [row.to_dict() for row in result.scalars().all()]
            if deleted:
                await session.execute(
                    delete(model)
                    .where(clause)
                    .execution_options(synchronize_session="fetch")
                )
            return deleted

    async def count(
        self,
        collection: str,
        where: Optional[Where] = None,
        transaction_id: Optional[str] = None,
    ) -> CountResult:
        model = self._collection(collection).model
        query = select(func.count()).select_from(model)

        clause = self._compile_where(model, where)
        if clause is not None:
            query = query.where(clause)

        async with self._session(transaction_id) as session:
            result = await session.execute(query)
            return CountResult(total_docs=result.scalar())
