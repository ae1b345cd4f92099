"""Ledger Invoke: chaincode-style transaction endpoint.

Invariants:
    - POST /api/v1/ledger/invoke runs one named transaction in one DB transaction
    - Payload is always text (canonical JSON, "true"/"false", or "")
    - Unknown function -> 404 UNKNOWN_FUNCTION; bad arguments -> 400 INVALID_ARGUMENT

Design Decisions:
    - Same transaction host as the REST routes: both surfaces settle identically
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from asset_ledger.config import get_settings
from asset_ledger.infrastructure.database import get_db
from asset_ledger.schemas.ledger import InvokeRequest, InvokeResponse
from asset_ledger.services.ledger_dispatch import LedgerDispatch
from asset_ledger.services.ledger_transaction import run_in_transaction

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/ledger", tags=["ledger"])


@router.post("/invoke", response_model=InvokeResponse)
async def invoke(body: InvokeRequest, db: AsyncSession = Depends(get_db)):
    """Run a transaction by name with positional string arguments."""
    result = await run_in_transaction(
        db,
        lambda ledger: LedgerDispatch(ledger).execute(body.function, body.args),
        page_size=get_settings().range_scan_page_size,
    )
    if not result.is_ok:
        logger.warning(
            f"Ledger function {body.function} rejected: {result.error.code}",
            extra={"function": body.function, "error_code": result.error.code},
        )
    payload = result.unwrap()
    logger.info(
        f"Ledger function {body.function} invoked",
        extra={"function": body.function},
    )
    return InvokeResponse(function=body.function, payload=payload)
