"""In-Memory State Store: dict-backed StateStore for tests and local runs.

Invariants:
    - range_scan yields keys in sorted order, start inclusive, end exclusive
    - Empty start/end bound means unbounded on that side
    - range_scan iterates over a snapshot: writes during a scan are not observed

Design Decisions:
    - Snapshot copy on scan start: mirrors a consistent-snapshot host
    - Stores bytes only; put() of any other type raises TypeError
"""

from collections.abc import AsyncIterator


class InMemoryStateStore:
    """StateStore over a plain dict."""

    def __init__(self, initial: dict[str, bytes] | None = None):
        self._state: dict[str, bytes] = dict(initial or {})

    async def get(self, key: str) -> bytes | None:
        return self._state.get(key)

    async def put(self, key: str, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"state values must be bytes, got {type(value).__name__}")
        self._state[key] = bytes(value)

    async def delete(self, key: str) -> None:
        self._state.pop(key, None)

    async def range_scan(
        self, start_key: str, end_key: str,
    ) -> AsyncIterator[tuple[str, bytes]]:
        snapshot = sorted(self._state.items())
        for key, value in snapshot:
            if start_key and key < start_key:
                continue
            if end_key and key >= end_key:
                break
            yield key, value

    def __len__(self) -> int:
        return len(self._state)
