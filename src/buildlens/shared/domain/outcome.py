"""
Two-case outcome type used across the model-query boundary.

Every operation that talks to the model service returns either Ok (a value
plus an optional note) or Err (an optional cause plus an optional note)
instead of raising. Consumers check with isinstance, or use `map`.

Usage:
```python
outcome = fetch(session, handle, ModelKind.BASIC_PROJECT, BasicProjectModel)
if isinstance(outcome, Err):
    return outcome.forward()
model = outcome.value
```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, TypeVar, Union

from buildlens.shared.domain.base_model import to_json_value
from buildlens.shared.domain.exceptions import ModelNotFound

T = TypeVar("T")
N = TypeVar("N")
O = TypeVar("O")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome."""

    value: T
    note: str | None = None

    @property
    def is_ok(self) -> bool:
        return True

    def map(self, on_ok: Callable[["Ok[T]"], O], on_err: Callable[["Err[T]"], O]) -> O:
        return on_ok(self)

    def to_json(self) -> Dict[str, Any]:
        value = self.value
        if hasattr(value, "model_dump"):
            value = value.model_dump(by_alias=True, mode="json")
        return {"status": "ok", "value": to_json_value(value), "note": self.note}


@dataclass(frozen=True)
class Err(Generic[T]):
    """Failed outcome. The cause is carried as a value, never raised."""

    cause: BaseException | None = None
    note: str | None = None

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_not_found(self) -> bool:
        """True when the service simply has no model of the requested kind."""
        return isinstance(self.cause, ModelNotFound)

    def map(self, on_ok: Callable[["Ok[T]"], O], on_err: Callable[["Err[T]"], O]) -> O:
        return on_err(self)

    def forward(self) -> "Err[N]":
        """
        Re-wrap this failure as the Err of another operation.

        Used when an operation depends on a lower-layer result that failed:
        cause and note are preserved so no diagnostic context is lost.
        """
        return Err(cause=self.cause, note=self.note)

    def to_json(self) -> Dict[str, Any]:
        return {"status": "error", "cause": to_json_value(self.cause), "note": self.note}


Outcome = Union[Ok[T], Err[T]]
