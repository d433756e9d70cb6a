"""Storage engine: durable, atomic persistence over an async SQLAlchemy session.

Every write happens inside ``transaction()``; it either commits before the
caller continues or rolls back completely, so readers never see a partial
record. A rejection raised before anything was written ends the transaction
without a rollback, so entities already handed to the caller stay loaded.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Type, TypeVar
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from .base import Base
from .errors import NotFoundError, StorageError, StoreError

log = logging.getLogger(__name__)

M = TypeVar("M", bound=Base)

def collection_of(model: Type[Base]) -> str:
    return model.__tablename__

class StorageEngine:
    def __init__(self, session: AsyncSession):
        self.session = session
        self._written = False

    def _has_writes(self) -> bool:
        s = self.session
        return self._written or bool(s.new or s.dirty or s.deleted)

    @asynccontextmanager
    async def transaction(self):
        self._written = False
        try:
            yield self.session
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            log.exception("Storage failure; transaction rolled back")
            raise StorageError(f"storage failure: {e.__class__.__name__}") from e
        except StoreError as e:
            if isinstance(e, StorageError) or self._has_writes():
                await self.session.rollback()
            else:
                # rejected before any write: end the read without expiring
                # entities the caller already holds
                await self.session.commit()
            raise
        except BaseException:
            await self.session.rollback()
            raise

    async def put(self, obj: M) -> M:
        """Insert or replace by id."""
        try:
            self._written = True
            merged = await self.session.merge(obj)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise StorageError(f"put failed for {collection_of(type(obj))}: {e.__class__.__name__}") from e
        return merged

    async def find(self, model: Type[M], id: str) -> M | None:
        try:
            # always reload: another session may have committed since we last looked
            return await self.session.get(model, id, populate_existing=True)
        except SQLAlchemyError as e:
            raise StorageError(f"read failed for {collection_of(model)}: {e.__class__.__name__}") from e

    async def get(self, model: Type[M], id: str) -> M:
        obj = await self.find(model, id)
        if obj is None:
            raise NotFoundError(collection_of(model), id)
        return obj

    async def scan(self, model: Type[M], *criteria, order_by=None) -> AsyncIterator[M]:
        q = select(model).where(*criteria).execution_options(populate_existing=True)
        if order_by is None:
            order_by = (model.created_at.asc(), model.id.asc())
        q = q.order_by(*order_by)
        try:
            res = await self.session.execute(q)
        except SQLAlchemyError as e:
            raise StorageError(f"scan failed for {collection_of(model)}: {e.__class__.__name__}") from e
        for obj in res.scalars():
            yield obj

    async def all(self, model: Type[M], *criteria, order_by=None) -> list[M]:
        return [obj async for obj in self.scan(model, *criteria, order_by=order_by)]

    async def append_log(self, entry: M) -> M:
        """Insert an immutable log entry; never replaces an existing one."""
        if entry.id is not None and await self.find(type(entry), entry.id) is not None:
            raise StorageError(f"{collection_of(type(entry))} '{entry.id}' already written")
        self._written = True
        self.session.add(entry)
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            raise StorageError(f"append failed for {collection_of(type(entry))}: {e.__class__.__name__}") from e
        return entry

    async def delete(self, obj: Base) -> None:
        try:
            self._written = True
            await self.session.delete(obj)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise StorageError(f"delete failed for {collection_of(type(obj))}: {e.__class__.__name__}") from e

    async def execute_write(self, stmt):
        """Run a bulk DML statement inside the current transaction."""
        self._written = True
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageError(f"write failed: {e.__class__.__name__}") from e
