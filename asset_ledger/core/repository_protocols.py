"""Boundary Protocols: contracts between the ledger and its host store.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All state IO goes through StateStore
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, stores need no shared base class
    - Async in Protocol: implementations do IO. range_scan is an async generator
      so enumeration can suspend between entries while holding only the cursor
"""

from collections.abc import AsyncGenerator
from typing import Protocol


class StateStore(Protocol):
    """Key-value world state supplied by the host.

    get() returns None (or b"") for absent keys. range_scan() treats an empty
    start_key/end_key as unbounded; start is inclusive, end exclusive. The
    ledger aclose()s a scan it stops consuming early.
    """
    async def get(self, key: str) -> bytes | None: ...
    async def put(self, key: str, value: bytes) -> None: ...
    async def delete(self, key: str) -> None: ...
    def range_scan(
        self, start_key: str, end_key: str,
    ) -> AsyncGenerator[tuple[str, bytes], None]: ...
