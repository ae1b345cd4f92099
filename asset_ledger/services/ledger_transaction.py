"""Ledger Transaction: runs one ledger operation inside one database transaction.

Invariants:
    - One AssetLedger per transaction, bound to a SqlStateStore on the given session
    - Ok result -> commit; Err result -> rollback; the Result is returned unchanged
    - Exceptions (commit failures, programming errors) propagate to the session
      manager, which rolls back and maps SQLAlchemy errors to DatabaseError

Design Decisions:
    - Operation passed as a callable taking the ledger: callers pick the
      operation, this module owns commit/rollback
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from asset_ledger.core.result import Result
from asset_ledger.infrastructure.sql_store import DEFAULT_PAGE_SIZE, SqlStateStore
from asset_ledger.services.asset_ledger import AssetLedger

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_in_transaction(
    db: AsyncSession,
    operation: Callable[[AssetLedger], Awaitable[Result[T]]],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Result[T]:
    """Execute operation against the world state and settle the transaction."""
    ledger = AssetLedger(SqlStateStore(db, page_size=page_size))
    result = await operation(ledger)
    if result.is_ok:
        await db.commit()
    else:
        await db.rollback()
        logger.info(
            "Ledger transaction rolled back",
            extra={
                "error_code": result.error.code,
                "operation": result.error.context.operation,
            },
        )
    return result
