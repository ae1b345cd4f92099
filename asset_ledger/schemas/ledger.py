"""Ledger Invocation Schemas: chaincode-style transaction request and response."""

from pydantic import BaseModel, Field


class InvokeRequest(BaseModel):
    """Transaction name plus positional string arguments."""
    function: str = Field(min_length=1, max_length=64)
    args: list[str] = Field(default_factory=list, max_length=16)


class InvokeResponse(BaseModel):
    function: str
    payload: str
