"""Asset Schemas: request body validation at the API boundary."""

import pytest
from pydantic import ValidationError

from asset_ledger.schemas.asset import AssetCreate, AssetUpdate, OwnerTransfer
from asset_ledger.schemas.ledger import InvokeRequest

BODY = {"ID": "asset1", "Color": "blue", "Size": 5, "Owner": "Tomoko", "AppraisedValue": 300}


def test_create_accepts_stored_field_names():
    body = AssetCreate.model_validate(BODY)
    assert body.id == "asset1"
    assert body.appraised_value == 300


def test_create_accepts_snake_case_names():
    body = AssetCreate(
        id="asset1", color="blue", size=5, owner="Tomoko", appraised_value=300,
    )
    assert body.size == 5


def test_text_fields_stripped():
    body = AssetCreate.model_validate({**BODY, "ID": " asset1 ", "Owner": " Tomoko "})
    assert body.id == "asset1"
    assert body.owner == "Tomoko"


@pytest.mark.parametrize("field,value", [
    ("Size", "5"),
    ("Size", 5.0),
    ("AppraisedValue", None),
    ("ID", "   "),
    ("ID", ""),
    ("Owner", "  "),
])
def test_create_rejects_invalid_fields(field, value):
    with pytest.raises(ValidationError):
        AssetCreate.model_validate({**BODY, field: value})


def test_update_has_no_id():
    body = AssetUpdate.model_validate(BODY)
    assert not hasattr(body, "id")


def test_negative_numbers_allowed():
    body = AssetUpdate.model_validate({**BODY, "Size": -2, "AppraisedValue": -1})
    assert body.size == -2


def test_transfer_requires_non_blank_owner():
    assert OwnerTransfer.model_validate({"NewOwner": " Brad "}).new_owner == "Brad"
    with pytest.raises(ValidationError):
        OwnerTransfer.model_validate({"NewOwner": "  "})


def test_invoke_request_defaults_to_no_args():
    assert InvokeRequest(function="InitLedger").args == []
