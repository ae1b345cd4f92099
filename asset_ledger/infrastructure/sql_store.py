"""SQL State Store: StateStore over the world_state table via an AsyncSession.

Invariants:
    - Writes are flushed, never committed: the host transaction decides
    - range_scan pages with keyset pagination (key > last ORDER BY key LIMIT n),
      so at most one page is held in memory between yields
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)

Design Decisions:
    - ORM get/add/delete over bulk statements: keeps the session identity map
      consistent for reads inside the same transaction
    - Key order comes from the database collation; the migration pins "C"
      collation on PostgreSQL so order matches bytewise key order
"""

import logging
from collections.abc import AsyncIterator
from contextlib import contextmanager

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from asset_ledger.core.errors import DatabaseError
from asset_ledger.models.world_state import WorldState

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


@contextmanager
def _mapped_db_errors(operation: str):
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"World state {operation} failed: {e}")
        raise DatabaseError("World state access failed", operation) from e


class SqlStateStore:
    """StateStore bound to one session (one host transaction)."""

    def __init__(self, db: AsyncSession, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self._db = db
        self._page_size = page_size

    async def get(self, key: str) -> bytes | None:
        with _mapped_db_errors("get"):
            row = await self._db.get(WorldState, key)
        return bytes(row.value) if row is not None else None

    async def put(self, key: str, value: bytes) -> None:
        with _mapped_db_errors("put"):
            row = await self._db.get(WorldState, key)
            if row is None:
                self._db.add(WorldState(key=key, value=bytes(value)))
            else:
                row.value = bytes(value)
            await self._db.flush()

    async def delete(self, key: str) -> None:
        with _mapped_db_errors("delete"):
            row = await self._db.get(WorldState, key)
            if row is not None:
                await self._db.delete(row)
                await self._db.flush()

    async def range_scan(
        self, start_key: str, end_key: str,
    ) -> AsyncIterator[tuple[str, bytes]]:
        last_key: str | None = None
        while True:
            query = (
                select(WorldState.key, WorldState.value)
                .order_by(WorldState.key)
                .limit(self._page_size)
            )
            if start_key:
                query = query.where(WorldState.key >= start_key)
            if end_key:
                query = query.where(WorldState.key < end_key)
            if last_key is not None:
                query = query.where(WorldState.key > last_key)

            with _mapped_db_errors("range_scan"):
                rows = (await self._db.execute(query)).all()
            for key, value in rows:
                yield key, bytes(value)
            if len(rows) < self._page_size:
                return
            last_key = rows[-1][0]
