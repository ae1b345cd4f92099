"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - StateKey is the caller-assigned store key; never reinterpreted by the ledger
    - Transaction names are encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

StateKey = NewType("StateKey", str)


# ─── Constants ───────────────────────────────────────────────────

ASSET_DOC_TYPE = "asset"

# Empty range bounds select the whole key space.
OPEN_RANGE_START = StateKey("")
OPEN_RANGE_END = StateKey("")


# ─── Enums ───────────────────────────────────────────────────────

class AssetField(str, Enum):
    """Stored field names. Order here is not the encoded order."""
    ID = "ID"
    COLOR = "Color"
    SIZE = "Size"
    OWNER = "Owner"
    APPRAISED_VALUE = "AppraisedValue"
    DOC_TYPE = "docType"


class LedgerFunction(str, Enum):
    """Transaction names accepted by the chaincode-style dispatcher."""
    INIT_LEDGER = "InitLedger"
    CREATE_ASSET = "CreateAsset"
    READ_ASSET = "ReadAsset"
    UPDATE_ASSET = "UpdateAsset"
    DELETE_ASSET = "DeleteAsset"
    ASSET_EXISTS = "AssetExists"
    TRANSFER_ASSET = "TransferAsset"
    GET_ALL_ASSETS = "GetAllAssets"
