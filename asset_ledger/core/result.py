"""Operation Results: explicit success/failure values for ledger operations.

Invariants:
    - Every ledger operation returns Ok or Err, never raises an AssetLedgerError
    - Err always carries an AssetLedgerError subclass instance
    - unwrap() is the only place an Err turns back into a raised exception

Design Decisions:
    - Frozen dataclasses with a shared is_ok flag: callers branch on a bool
      or use match statements on the class
    - Errors stay exceptions so the HTTP boundary can raise them unchanged
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from asset_ledger.core.errors import AssetLedgerError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))


@dataclass(frozen=True)
class Err:
    error: AssetLedgerError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        """Raise the carried error."""
        raise self.error

    def map(self, fn: Callable) -> "Err":
        return self


Result = Union[Ok[T], Err]
