"""Asset Records: validation at decode time and the Decoded | Raw entry variant."""

import pytest

from asset_ledger.core.asset import Asset, Decoded, Raw, decode_entry
from asset_ledger.core.errors import DecodeFailureError


def _asset(**overrides) -> Asset:
    fields = dict(
        id="asset1", color="blue", size=5, owner="Tomoko", appraised_value=300,
    )
    fields.update(overrides)
    return Asset(**fields)


def test_to_record_uses_stored_field_names():
    assert _asset().to_record() == {
        "ID": "asset1",
        "Color": "blue",
        "Size": 5,
        "Owner": "Tomoko",
        "AppraisedValue": 300,
    }


def test_doc_type_included_only_when_set():
    assert "docType" not in _asset().to_record()
    assert _asset(doc_type="asset").to_record()["docType"] == "asset"


def test_encode_then_decode_returns_equal_asset():
    asset = _asset(doc_type="asset")
    assert Asset.decode(asset.encode()) == asset


def test_with_owner_changes_only_owner():
    asset = _asset(doc_type="asset")
    moved = asset.with_owner("Brad")
    assert moved.owner == "Brad"
    assert moved.to_record() | {"Owner": "Tomoko"} == asset.to_record()


def test_negative_numbers_are_valid_assets():
    asset = Asset.from_record({
        "ID": "a", "Color": "c", "Size": -1, "Owner": "o", "AppraisedValue": -50,
    })
    assert asset.size == -1
    assert asset.appraised_value == -50


@pytest.mark.parametrize("record", [
    {"Color": "c", "Size": 1, "Owner": "o", "AppraisedValue": 1},
    {"ID": "a", "Color": "c", "Size": "1", "Owner": "o", "AppraisedValue": 1},
    {"ID": "a", "Color": "c", "Size": 1.0, "Owner": "o", "AppraisedValue": 1},
    {"ID": "a", "Color": "c", "Size": True, "Owner": "o", "AppraisedValue": 1},
    {"ID": "a", "Color": 3, "Size": 1, "Owner": "o", "AppraisedValue": 1},
    {"ID": "a", "Color": "c", "Size": 1, "Owner": "o", "AppraisedValue": 1, "docType": 7},
    {"ID": "a", "Color": "c", "Size": 1, "Owner": "o", "AppraisedValue": 1, "Extra": 1},
])
def test_non_conforming_records_rejected(record):
    with pytest.raises(DecodeFailureError):
        Asset.from_record(record)


def test_decode_entry_returns_decoded_for_conforming_bytes():
    asset = _asset()
    entry = decode_entry(asset.encode())
    assert entry == Decoded(asset)
    assert entry.to_wire() == {"Record": asset.to_record()}


def test_decode_entry_falls_back_to_raw_text():
    entry = decode_entry(b"plain text value")
    assert isinstance(entry, Raw)
    assert entry.text == "plain text value"
    assert entry.reason
    assert entry.to_wire() == {"Record": "plain text value"}


def test_decode_entry_keeps_json_of_wrong_shape_as_raw():
    entry = decode_entry(b'{"hello":"world"}')
    assert entry.to_wire() == {"Record": '{"hello":"world"}'}


def test_decode_entry_replaces_invalid_utf8():
    entry = decode_entry(b"bad \xff byte")
    assert isinstance(entry, Raw)
    assert entry.text == "bad � byte"
