"""Asset Routes: REST surface over the asset ledger operations.

Invariants:
    - Every request runs exactly one ledger operation in one transaction
    - Err results are raised as their AssetLedgerError; the global handler maps
      them to the REST envelope (404 not found, 409 already exists, 503 store)
    - Records are returned with their stored field names (ID, Color, ...)
    - Listing returns [{"Record": <record | raw text>}, ...] in store key order

Design Decisions:
    - Routes hold no ledger logic: they translate bodies to operation calls
      and delegate settlement to run_in_transaction
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from asset_ledger.config import get_settings
from asset_ledger.infrastructure.database import get_db
from asset_ledger.schemas.asset import AssetCreate, AssetUpdate, OwnerTransfer
from asset_ledger.services.ledger_transaction import run_in_transaction

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/assets", tags=["assets"])


async def _settle(db: AsyncSession, operation):
    """Run operation in a transaction and unwrap (raises on Err)."""
    result = await run_in_transaction(
        db, operation, page_size=get_settings().range_scan_page_size,
    )
    return result.unwrap()


@router.post("/init")
async def init_ledger(db: AsyncSession = Depends(get_db)):
    """Seed the ledger with the sample assets (overwrites)."""
    assets = await _settle(db, lambda ledger: ledger.init_ledger())
    return [asset.to_record() for asset in assets]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_asset(body: AssetCreate, db: AsyncSession = Depends(get_db)):
    asset = await _settle(db, lambda ledger: ledger.create(
        body.id, body.color, body.size, body.owner, body.appraised_value,
    ))
    return asset.to_record()


@router.get("")
async def list_assets(db: AsyncSession = Depends(get_db)):
    entries = await _settle(db, lambda ledger: ledger.list_all())
    return [entry.to_wire() for entry in entries]


@router.get("/{asset_id}")
async def read_asset(asset_id: str, db: AsyncSession = Depends(get_db)):
    """Stored record, or the raw stored text if it is not a conforming asset."""
    entry = await _settle(db, lambda ledger: ledger.read(asset_id))
    return entry.to_wire()["Record"]


@router.get("/{asset_id}/exists")
async def asset_exists(asset_id: str, db: AsyncSession = Depends(get_db)):
    found = await _settle(db, lambda ledger: ledger.exists(asset_id))
    return {"ID": asset_id, "exists": found}


@router.put("/{asset_id}")
async def update_asset(
    asset_id: str, body: AssetUpdate, db: AsyncSession = Depends(get_db),
):
    """Replace all fields of an existing asset."""
    asset = await _settle(db, lambda ledger: ledger.update(
        asset_id, body.color, body.size, body.owner, body.appraised_value,
    ))
    return asset.to_record()


@router.patch("/{asset_id}/owner")
async def transfer_asset(
    asset_id: str, body: OwnerTransfer, db: AsyncSession = Depends(get_db),
):
    asset = await _settle(
        db, lambda ledger: ledger.transfer(asset_id, body.new_owner),
    )
    logger.info(
        "Asset transferred",
        extra={"asset_id": asset_id, "operation": "transfer"},
    )
    return asset.to_record()


@router.delete("/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_asset(asset_id: str, db: AsyncSession = Depends(get_db)):
    await _settle(db, lambda ledger: ledger.delete(asset_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
