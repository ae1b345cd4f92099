"""Canonical Encoding: deterministic bytes for ledger records.

Invariants:
    - Keys sorted by code point at every nesting level (same as UTF-8 bytewise order)
    - Compact separators, no insignificant whitespace
    - Non-ASCII text emitted verbatim as UTF-8; control characters JSON-escaped
    - Only str, int, bool, None, mappings and sequences are encodable
    - Same logical record ALWAYS produces the same bytes

Design Decisions:
    - Floats rejected instead of formatted: their textual form differs across runtimes
    - canonicalize() sorts explicitly before json.dumps(sort_keys=True) so the
      normalized structure is also available without serializing
    - ensure_ascii=False: matches the byte output of deterministic JSON writers
      on other nodes, which emit raw UTF-8
"""

import hashlib
import json
from collections.abc import Mapping
from typing import Any

from asset_ledger.core.errors import CanonicalEncodingError, DecodeFailureError


def canonicalize(value: Any) -> Any:
    """Return value with every mapping rebuilt in sorted key order.

    Raises CanonicalEncodingError for values with no canonical form.
    """
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        raise CanonicalEncodingError(f"float {value!r} is not allowed")
    if isinstance(value, Mapping):
        for key in value:
            if not isinstance(key, str):
                raise CanonicalEncodingError(
                    f"mapping key {key!r} is {type(key).__name__}, expected str",
                )
        return {key: canonicalize(value[key]) for key in sorted(value)}
    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]
    raise CanonicalEncodingError(f"unsupported type {type(value).__name__}")


def encode_canonical(record: Any) -> bytes:
    """Serialize record to its canonical UTF-8 JSON bytes."""
    try:
        text = json.dumps(
            canonicalize(record),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (ValueError, RecursionError) as e:
        # oversized integers and runaway nesting
        raise CanonicalEncodingError(f"record has no JSON form: {e}") from e
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CanonicalEncodingError(f"text is not valid unicode: {e.reason}") from e


def decode_record(raw: bytes | str) -> dict[str, Any]:
    """Parse stored bytes into a JSON object.

    Raises DecodeFailureError for invalid UTF-8, invalid or unparseable JSON
    (oversized integers, nesting past the recursion limit), or any JSON value
    other than an object.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeFailureError(f"invalid utf-8 at byte {e.start}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeFailureError(f"invalid JSON ({e.msg})") from e
    except (ValueError, RecursionError) as e:
        raise DecodeFailureError(f"unparseable JSON ({e})") from e
    if not isinstance(data, dict):
        raise DecodeFailureError(
            f"expected a JSON object, got {type(data).__name__}",
        )
    return data


def compute_state_digest(encoded: bytes) -> str:
    """SHA-256 hex digest of canonical bytes, comparable across nodes."""
    return hashlib.sha256(encoded).hexdigest()
