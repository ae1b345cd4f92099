"""Asset Records: the ledger's single entity and the entries it enumerates.

Invariants:
    - Asset fields are validated at decode time: str fields are str, int fields
      are int (bool rejected), no unknown fields
    - docType is optional and never interpreted by the ledger
    - A stored value is either Decoded(asset) or Raw(text), never both
    - to_wire() of any entry is {"Record": <record dict | raw text>}

Design Decisions:
    - Frozen dataclass over dict: mutation goes through replace(), so transfer
      cannot touch more than Owner by accident
    - Unknown fields make a record non-conforming (Raw): a Decoded asset always
      re-encodes to the bytes it came from
"""

from dataclasses import dataclass, replace
from typing import Any, Union

from asset_ledger.core.canonical_encoding import decode_record, encode_canonical
from asset_ledger.core.domain_types import AssetField
from asset_ledger.core.errors import DecodeFailureError

_STR_FIELDS = (AssetField.ID, AssetField.COLOR, AssetField.OWNER)
_INT_FIELDS = (AssetField.SIZE, AssetField.APPRAISED_VALUE)
_KNOWN_FIELDS = frozenset(f.value for f in AssetField)


@dataclass(frozen=True)
class Asset:
    id: str
    color: str
    size: int
    owner: str
    appraised_value: int
    doc_type: str | None = None

    def to_record(self) -> dict[str, Any]:
        """Field-name keyed mapping, as stored and returned to callers."""
        record: dict[str, Any] = {
            AssetField.ID.value: self.id,
            AssetField.COLOR.value: self.color,
            AssetField.SIZE.value: self.size,
            AssetField.OWNER.value: self.owner,
            AssetField.APPRAISED_VALUE.value: self.appraised_value,
        }
        if self.doc_type is not None:
            record[AssetField.DOC_TYPE.value] = self.doc_type
        return record

    def encode(self) -> bytes:
        return encode_canonical(self.to_record())

    def with_owner(self, new_owner: str) -> "Asset":
        return replace(self, owner=new_owner)

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Asset":
        """Validate a decoded JSON object and build an Asset.

        Raises DecodeFailureError when a field is missing, mistyped, or unknown.
        """
        unknown = sorted(set(data) - _KNOWN_FIELDS)
        if unknown:
            raise DecodeFailureError(f"unknown fields {unknown}")
        for f in _STR_FIELDS:
            if not isinstance(data.get(f.value), str):
                raise DecodeFailureError(f"field '{f.value}' must be a string")
        for f in _INT_FIELDS:
            value = data.get(f.value)
            if isinstance(value, bool) or not isinstance(value, int):
                raise DecodeFailureError(f"field '{f.value}' must be an integer")
        doc_type = data.get(AssetField.DOC_TYPE.value)
        if doc_type is not None and not isinstance(doc_type, str):
            raise DecodeFailureError("field 'docType' must be a string")
        return cls(
            id=data[AssetField.ID.value],
            color=data[AssetField.COLOR.value],
            size=data[AssetField.SIZE.value],
            owner=data[AssetField.OWNER.value],
            appraised_value=data[AssetField.APPRAISED_VALUE.value],
            doc_type=doc_type,
        )

    @classmethod
    def decode(cls, raw: bytes) -> "Asset":
        return cls.from_record(decode_record(raw))


# ─── Ledger Entries ─────────────────────────────────────────────

@dataclass(frozen=True)
class Decoded:
    """A stored value that decoded into a conforming Asset."""
    asset: Asset

    def to_wire(self) -> dict[str, Any]:
        return {"Record": self.asset.to_record()}


@dataclass(frozen=True)
class Raw:
    """A stored value kept as text because it is not a conforming Asset."""
    text: str
    reason: str = ""

    def to_wire(self) -> dict[str, Any]:
        return {"Record": self.text}


LedgerEntry = Union[Decoded, Raw]


def decode_entry(raw: bytes) -> LedgerEntry:
    """Decode stored bytes, degrading to Raw text instead of failing."""
    try:
        return Decoded(Asset.decode(raw))
    except DecodeFailureError as e:
        return Raw(raw.decode("utf-8", errors="replace"), reason=e.message)
