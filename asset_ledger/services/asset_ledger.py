"""Asset Ledger: CRUD, transfer, enumeration and seeding over an injected StateStore.

Invariants:
    - Every public operation returns Ok | Err; LedgerErrors never escape
      (iter_all is the exception: it raises StoreFailureError mid-iteration)
    - All writes go through Asset.encode(), so stored bytes are canonical
    - No state is kept between calls; every read goes to the store
    - Store exceptions become StoreFailureError immediately, no cleanup, no retry
    - Enumeration degrades undecodable values to Raw text and never aborts on them

Design Decisions:
    - Private _helpers raise, public methods convert to Result in one place (_fail)
    - Store wrapped per call (_get/_put/_delete) so the failing primitive is named
      in StoreFailureError.operation
    - Empty stored values count as absent, both for exists() and for enumeration
"""

import logging
from collections.abc import AsyncIterator

from asset_ledger.core.asset import Asset, LedgerEntry, Raw, decode_entry
from asset_ledger.core.canonical_encoding import compute_state_digest
from asset_ledger.core.domain_types import OPEN_RANGE_END, OPEN_RANGE_START
from asset_ledger.core.errors import (
    ArgumentError,
    AssetAlreadyExistsError,
    AssetLedgerError,
    AssetNotFoundError,
    StoreFailureError,
)
from asset_ledger.core.repository_protocols import StateStore
from asset_ledger.core.result import Err, Ok, Result
from asset_ledger.core.seed_assets import SEED_ASSETS

logger = logging.getLogger(__name__)


class AssetLedger:
    """Ledger operations for one store handle. Cheap to construct per transaction."""

    def __init__(self, store: StateStore):
        self._store = store

    # ─── Public operations ──────────────────────────────────────

    async def init_ledger(self) -> Result[list[Asset]]:
        """Write the seed assets, overwriting whatever is stored under their IDs."""
        try:
            for asset in SEED_ASSETS:
                await self._write(asset, "init_ledger")
        except AssetLedgerError as e:
            return self._fail("init_ledger", None, e)
        logger.info(f"Ledger seeded with {len(SEED_ASSETS)} assets")
        return Ok(list(SEED_ASSETS))

    async def exists(self, asset_id: str) -> Result[bool]:
        try:
            return Ok(await self._exists(asset_id))
        except AssetLedgerError as e:
            return self._fail("exists", asset_id, e)

    async def create(
        self, asset_id: str, color: str, size: int, owner: str, appraised_value: int,
    ) -> Result[Asset]:
        try:
            asset = _build_asset(asset_id, color, size, owner, appraised_value)
            if await self._exists(asset_id):
                raise AssetAlreadyExistsError(asset_id)
            await self._write(asset, "create")
        except AssetLedgerError as e:
            return self._fail("create", asset_id, e)
        return Ok(asset)

    async def read(self, asset_id: str) -> Result[LedgerEntry]:
        try:
            raw = await self._get_existing(asset_id)
        except AssetLedgerError as e:
            return self._fail("read", asset_id, e)
        return Ok(decode_entry(raw))

    async def update(
        self, asset_id: str, color: str, size: int, owner: str, appraised_value: int,
    ) -> Result[Asset]:
        """Replace every field of an existing asset. docType is not carried over."""
        try:
            asset = _build_asset(asset_id, color, size, owner, appraised_value)
            if not await self._exists(asset_id):
                raise AssetNotFoundError(asset_id)
            await self._write(asset, "update")
        except AssetLedgerError as e:
            return self._fail("update", asset_id, e)
        return Ok(asset)

    async def delete(self, asset_id: str) -> Result[None]:
        try:
            if not await self._exists(asset_id):
                raise AssetNotFoundError(asset_id)
            await self._delete(asset_id)
        except AssetLedgerError as e:
            return self._fail("delete", asset_id, e)
        logger.info(
            "Asset deleted",
            extra={"asset_id": asset_id, "operation": "delete"},
        )
        return Ok(None)

    async def transfer(self, asset_id: str, new_owner: str) -> Result[Asset]:
        """Change Owner only; every other stored field is preserved."""
        try:
            if not isinstance(new_owner, str):
                raise ArgumentError("new owner must be a string")
            raw = await self._get_existing(asset_id)
            asset = Asset.decode(raw).with_owner(new_owner)
            await self._write(asset, "transfer")
        except AssetLedgerError as e:
            return self._fail("transfer", asset_id, e)
        return Ok(asset)

    async def iter_all(self) -> AsyncIterator[LedgerEntry]:
        """Yield every stored value over an open range, in store order.

        Raises StoreFailureError if the store fails mid-scan. The store scan
        is closed when the consumer stops early.
        """
        scan = self._store.range_scan(OPEN_RANGE_START, OPEN_RANGE_END)
        try:
            while True:
                try:
                    key, value = await anext(scan)
                except StopAsyncIteration:
                    return
                except Exception as e:
                    raise StoreFailureError("range_scan", e) from e
                if not value:
                    continue
                entry = decode_entry(value)
                if isinstance(entry, Raw):
                    logger.warning(
                        f"Non-conforming value listed as raw text: {entry.reason}",
                        extra={"asset_id": key, "operation": "list_all"},
                    )
                yield entry
        finally:
            await scan.aclose()

    async def list_all(self) -> Result[list[LedgerEntry]]:
        try:
            return Ok([entry async for entry in self.iter_all()])
        except AssetLedgerError as e:
            return self._fail("list_all", None, e)

    # ─── Store access ───────────────────────────────────────────

    async def _exists(self, asset_id: str) -> bool:
        return bool(await self._get(asset_id))

    async def _get_existing(self, asset_id: str) -> bytes:
        raw = await self._get(asset_id)
        if not raw:
            raise AssetNotFoundError(asset_id)
        return raw

    async def _write(self, asset: Asset, operation: str) -> None:
        encoded = asset.encode()
        await self._put(asset.id, encoded)
        logger.info(
            f"Asset written by {operation}",
            extra={
                "asset_id": asset.id,
                "operation": operation,
                "state_digest": compute_state_digest(encoded),
            },
        )

    async def _get(self, key: str) -> bytes | None:
        try:
            return await self._store.get(key)
        except Exception as e:
            raise StoreFailureError("get", e) from e

    async def _put(self, key: str, value: bytes) -> None:
        try:
            await self._store.put(key, value)
        except Exception as e:
            raise StoreFailureError("put", e) from e

    async def _delete(self, key: str) -> None:
        try:
            await self._store.delete(key)
        except Exception as e:
            raise StoreFailureError("delete", e) from e

    @staticmethod
    def _fail(operation: str, asset_id: str | None, error: AssetLedgerError) -> Err:
        error.context.operation = operation
        if asset_id is not None and error.context.asset_id is None:
            error.context.asset_id = asset_id
        logger.warning(
            f"Ledger {operation} failed: {error.message}",
            extra={
                "asset_id": asset_id,
                "operation": operation,
                "error_code": error.code,
            },
        )
        return Err(error)


def _build_asset(
    asset_id: str, color: str, size: int, owner: str, appraised_value: int,
) -> Asset:
    """Check argument types only. Numeric ranges are the caller's concern."""
    for name, value in (("id", asset_id), ("color", color), ("owner", owner)):
        if not isinstance(value, str):
            raise ArgumentError(f"asset {name} must be a string")
    for name, value in (("size", size), ("appraised value", appraised_value)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ArgumentError(f"asset {name} must be an integer")
    return Asset(asset_id, color, size, owner, appraised_value)
