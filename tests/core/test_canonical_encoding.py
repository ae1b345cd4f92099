"""Canonical Encoding: verifies deterministic bytes for ledger records.

Tests cover:
    - Field insertion order never changes the encoded bytes
    - Nested mappings sorted at every level, sequences keep their order
    - Compact separators, raw UTF-8, JSON escaping of control characters
    - Floats, bytes, sets and non-str keys rejected
    - decode_record accepts only JSON objects
"""

import itertools

import pytest

from asset_ledger.core.canonical_encoding import (
    canonicalize,
    compute_state_digest,
    decode_record,
    encode_canonical,
)
from asset_ledger.core.errors import CanonicalEncodingError, DecodeFailureError


_FIELDS = [
    ("ID", "asset1"),
    ("Color", "blue"),
    ("Size", 5),
    ("Owner", "Tomoko"),
    ("AppraisedValue", 300),
]


# ─── Determinism ─────────────────────────────────────────────────

def test_every_field_order_encodes_identically():
    encodings = {
        encode_canonical(dict(order))
        for order in itertools.permutations(_FIELDS)
    }
    assert len(encodings) == 1


def test_encoding_is_sorted_and_compact():
    encoded = encode_canonical(dict(_FIELDS))
    assert encoded == (
        b'{"AppraisedValue":300,"Color":"blue","ID":"asset1",'
        b'"Owner":"Tomoko","Size":5}'
    )


def test_uppercase_keys_sort_before_lowercase():
    encoded = encode_canonical({"docType": "asset", "Size": 1, "ID": "a"})
    assert encoded == b'{"ID":"a","Size":1,"docType":"asset"}'


def test_repeated_calls_are_stable():
    record = dict(_FIELDS)
    assert encode_canonical(record) == encode_canonical(record)
    assert record == dict(_FIELDS)  # input untouched


def test_nested_mappings_sorted_at_every_level():
    a = {"b": {"z": 1, "a": [{"y": 2, "x": 1}]}, "a": None}
    b = {"a": None, "b": {"a": [{"x": 1, "y": 2}], "z": 1}}
    assert encode_canonical(a) == encode_canonical(b)
    assert encode_canonical(a) == b'{"a":null,"b":{"a":[{"x":1,"y":2}],"z":1}}'


def test_sequences_keep_their_order():
    assert encode_canonical([3, 1, 2]) == b"[3,1,2]"
    assert encode_canonical((1, "a")) == b'[1,"a"]'


def test_non_ascii_emitted_as_utf8():
    encoded = encode_canonical({"Owner": "Jürgen 李"})
    assert encoded == '{"Owner":"Jürgen 李"}'.encode("utf-8")


def test_control_characters_escaped():
    encoded = encode_canonical({"k": 'a"b\\c\n\x01'})
    assert encoded == b'{"k":"a\\"b\\\\c\\n\\u0001"}'


def test_booleans_and_negative_integers():
    assert encode_canonical({"b": True, "n": -7}) == b'{"b":true,"n":-7}'


# ─── Rejections ──────────────────────────────────────────────────

@pytest.mark.parametrize("value", [1.5, float("nan"), b"raw", {1, 2}, object()])
def test_values_without_canonical_form_rejected(value):
    with pytest.raises(CanonicalEncodingError) as exc:
        encode_canonical({"v": value})
    assert exc.value.code == "ENCODING_ERROR"


def test_non_string_keys_rejected():
    with pytest.raises(CanonicalEncodingError):
        canonicalize({1: "one"})


def test_lone_surrogate_rejected():
    with pytest.raises(CanonicalEncodingError):
        encode_canonical({"k": "\ud800"})


def test_integer_past_digit_limit_rejected(int_digit_limit):
    with pytest.raises(CanonicalEncodingError) as exc:
        encode_canonical({"Size": 10 ** (int_digit_limit + 1)})
    assert isinstance(exc.value.__cause__, ValueError)


def test_nesting_past_recursion_limit_rejected():
    nested = []
    for _ in range(100_000):
        nested = [nested]
    with pytest.raises(CanonicalEncodingError):
        encode_canonical({"v": nested})


def test_canonicalize_returns_sorted_structure():
    result = canonicalize({"b": 1, "a": {"d": 2, "c": 3}})
    assert list(result) == ["a", "b"]
    assert list(result["a"]) == ["c", "d"]


# ─── Decoding ────────────────────────────────────────────────────

def test_decode_record_round_trips_canonical_bytes():
    record = dict(_FIELDS)
    assert decode_record(encode_canonical(record)) == record


def test_decode_record_accepts_text():
    assert decode_record('{"a":1}') == {"a": 1}


@pytest.mark.parametrize("raw", [b"not json", b"[1,2]", b'"text"', b"42", b"\xff\xfe"])
def test_decode_record_rejects_non_objects(raw):
    with pytest.raises(DecodeFailureError) as exc:
        decode_record(raw)
    assert exc.value.code == "DECODE_FAILURE"


def test_decode_record_keeps_cause():
    with pytest.raises(DecodeFailureError) as exc:
        decode_record(b"not json")
    assert exc.value.__cause__ is not None


def test_decode_record_integer_past_digit_limit(int_digit_limit):
    raw = b'{"Size":' + b"9" * (int_digit_limit + 700) + b"}"
    with pytest.raises(DecodeFailureError):
        decode_record(raw)


def test_decode_record_nesting_past_recursion_limit():
    with pytest.raises(DecodeFailureError):
        decode_record(b"[" * 100_000 + b"]" * 100_000)


# ─── Digest ──────────────────────────────────────────────────────

def test_state_digest_is_sha256_hex():
    digest = compute_state_digest(b"{}")
    assert digest == (
        "44136fa355b3678a1146ad16f7e8649e94fb4fc21fe77e8310c060f61caaff8a"
    )


def test_equal_records_share_digest():
    a = encode_canonical(dict(_FIELDS))
    b = encode_canonical(dict(reversed(_FIELDS)))
    assert compute_state_digest(a) == compute_state_digest(b)
