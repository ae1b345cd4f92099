"""Ledger Dispatch: chaincode-style routing from transaction name to ledger operation.

Invariants:
    - Every function->handler mapping is visible; no getattr magic, no auto-discovery
    - Arguments arrive as strings; Size and AppraisedValue parsed as base-10 integers
    - Unknown functions return UNKNOWN_FUNCTION, wrong arity returns INVALID_ARGUMENT
    - Payloads are text: canonical JSON for records and listings, "true"/"false"
      for existence, "" for operations with no value
    - execute() never raises an AssetLedgerError; it returns Ok(payload) | Err

Design Decisions:
    - Explicit dict over getattr: adding a transaction requires editing _handlers
    - Canonical JSON for payloads so two nodes answering the same query
      return byte-identical text
"""

import logging
import re
from collections.abc import Awaitable, Callable

from asset_ledger.core.asset import Asset, LedgerEntry
from asset_ledger.core.canonical_encoding import encode_canonical
from asset_ledger.core.domain_types import LedgerFunction
from asset_ledger.core.errors import ArgumentError, UnknownFunctionError
from asset_ledger.core.result import Err, Result
from asset_ledger.services.asset_ledger import AssetLedger

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"-?[0-9]+")

Handler = Callable[..., Awaitable[Result[str]]]


class LedgerDispatch:
    """Routes transaction name -> AssetLedger operation."""

    def __init__(self, ledger: AssetLedger):
        self._ledger = ledger
        # name -> (argument count, handler)
        self._handlers: dict[LedgerFunction, tuple[int, Handler]] = {
            LedgerFunction.INIT_LEDGER: (0, self._init_ledger),
            LedgerFunction.CREATE_ASSET: (5, self._create_asset),
            LedgerFunction.READ_ASSET: (1, self._read_asset),
            LedgerFunction.UPDATE_ASSET: (5, self._update_asset),
            LedgerFunction.DELETE_ASSET: (1, self._delete_asset),
            LedgerFunction.ASSET_EXISTS: (1, self._asset_exists),
            LedgerFunction.TRANSFER_ASSET: (2, self._transfer_asset),
            LedgerFunction.GET_ALL_ASSETS: (0, self._get_all_assets),
        }

    @property
    def functions(self) -> list[str]:
        return [f.value for f in self._handlers]

    async def execute(self, function: str, args: list[str]) -> Result[str]:
        """Run one transaction. Returns Ok(payload text) or Err(AssetLedgerError)."""
        try:
            name = LedgerFunction(function)
        except ValueError:
            logger.warning(
                f"Unknown ledger function: {function}",
                extra={"function": function, "error_code": "UNKNOWN_FUNCTION"},
            )
            return Err(UnknownFunctionError(function))

        arity, handler = self._handlers[name]
        if len(args) != arity:
            return Err(ArgumentError(
                f"{name.value} expects {arity} argument(s), got {len(args)}",
            ))
        try:
            return await handler(*args)
        except ArgumentError as e:
            return Err(e)

    # ─── Handlers ───────────────────────────────────────────────

    async def _init_ledger(self) -> Result[str]:
        return (await self._ledger.init_ledger()).map(lambda _: "")

    async def _create_asset(
        self, asset_id: str, color: str, size: str, owner: str, appraised_value: str,
    ) -> Result[str]:
        result = await self._ledger.create(
            asset_id, color, _parse_int("Size", size),
            owner, _parse_int("AppraisedValue", appraised_value),
        )
        return result.map(_asset_text)

    async def _read_asset(self, asset_id: str) -> Result[str]:
        return (await self._ledger.read(asset_id)).map(_entry_text)

    async def _update_asset(
        self, asset_id: str, color: str, size: str, owner: str, appraised_value: str,
    ) -> Result[str]:
        result = await self._ledger.update(
            asset_id, color, _parse_int("Size", size),
            owner, _parse_int("AppraisedValue", appraised_value),
        )
        return result.map(_asset_text)

    async def _delete_asset(self, asset_id: str) -> Result[str]:
        return (await self._ledger.delete(asset_id)).map(lambda _: "")

    async def _asset_exists(self, asset_id: str) -> Result[str]:
        return (await self._ledger.exists(asset_id)).map(
            lambda found: "true" if found else "false",
        )

    async def _transfer_asset(self, asset_id: str, new_owner: str) -> Result[str]:
        return (await self._ledger.transfer(asset_id, new_owner)).map(_asset_text)

    async def _get_all_assets(self) -> Result[str]:
        return (await self._ledger.list_all()).map(
            lambda entries: encode_canonical(
                [entry.to_wire() for entry in entries],
            ).decode("utf-8"),
        )


# ─── Payload helpers ────────────────────────────────────────────

def _parse_int(field: str, text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ArgumentError(f"{field} must be an integer, got {text!r}")
    try:
        return int(text)
    except ValueError as e:
        # past the interpreter's integer string conversion limit
        raise ArgumentError(f"{field} has too many digits ({len(text)})") from e


def _asset_text(asset: Asset) -> str:
    return asset.encode().decode("utf-8")


def _entry_text(entry: LedgerEntry) -> str:
    """Record JSON for decoded assets, the stored text itself for raw values."""
    record = entry.to_wire()["Record"]
    if isinstance(record, str):
        return record
    return encode_canonical(record).decode("utf-8")
