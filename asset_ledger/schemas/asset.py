"""Asset Schemas: Pydantic request bodies for the asset endpoints.

Invariants:
    - Size and AppraisedValue are strict integers (no "5" or 5.0 coercion), any sign
    - Text fields stripped; ID and Owner must be non-empty after stripping
    - Bodies accept the stored field names (ID, Color...) or the snake_case names

Design Decisions:
    - No range checks on numbers: numeric policy is a caller concern, the
      ledger stores what it is given
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _AssetFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    color: str = Field(alias="Color", max_length=255)
    size: int = Field(alias="Size", strict=True)
    owner: str = Field(alias="Owner", min_length=1, max_length=255)
    appraised_value: int = Field(alias="AppraisedValue", strict=True)

    @field_validator("color", "owner")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("owner")
    @classmethod
    def owner_not_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("Owner cannot be empty or whitespace")
        return v


class AssetCreate(_AssetFields):
    """Asset creation: ID plus all mutable fields."""
    id: str = Field(alias="ID", min_length=1, max_length=255)

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("ID cannot be empty or whitespace")
        return v


class AssetUpdate(_AssetFields):
    """Full replacement of an existing asset; ID comes from the path."""


class OwnerTransfer(BaseModel):
    """Ownership transfer: only the new owner."""
    model_config = ConfigDict(populate_by_name=True)

    new_owner: str = Field(alias="NewOwner", min_length=1, max_length=255)

    @field_validator("new_owner")
    @classmethod
    def strip_owner(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("NewOwner cannot be empty or whitespace")
        return v
