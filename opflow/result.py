"""Result: the two-variant outcome threaded through every operation.

``Ok`` holds a success value, ``Err`` holds a failure (usually an
:class:`~opflow.error.Error`).  Both are frozen; combinators always return
a Result and never mutate the receiver.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from .errors import ResultAccessError

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome."""

    _value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    @property
    def value(self) -> T:
        return self._value

    @property
    def error(self) -> Any:
        raise ResultAccessError(f"Ok has no error (value={self._value!r})")

    def then(self, fn: Callable[[T], "Result"]) -> "Result":
        """Bind: return ``fn(value)``, which must itself be a Result."""
        out = fn(self._value)
        if not isinstance(out, (Ok, Err)):
            raise TypeError(
                f"then() callback must return Ok or Err, got {type(out).__name__}"
            )
        return out

    def tee(self, fn: Callable[[T], Any]) -> "Result":
        """Run ``fn(value)`` for its effect; keep ``self`` unless it returns Err."""
        out = fn(self._value)
        if isinstance(out, Err):
            return out
        return self

    def map(self, fn: Callable[[T], Any]) -> "Result":
        return Ok(fn(self._value))

    def unwrap_or(self, default: Any) -> T:
        return self._value

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome.  Every combinator returns ``self`` unchanged."""

    _error: E

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    @property
    def value(self) -> Any:
        raise ResultAccessError(f"Err has no value (error={self._error!r})")

    @property
    def error(self) -> E:
        return self._error

    def then(self, fn: Callable[[Any], "Result"]) -> "Err[E]":
        return self

    def tee(self, fn: Callable[[Any], Any]) -> "Err[E]":
        return self

    def map(self, fn: Callable[[Any], Any]) -> "Err[E]":
        return self

    def unwrap_or(self, default: Any) -> Any:
        return default

    def __repr__(self) -> str:
        return f"Err({self._error!r})"


Result = Union[Ok[Any], Err[Any]]


def success(value: Any) -> Ok[Any]:
    return Ok(value)


def failure(error: Any) -> Err[Any]:
    return Err(error)


def wrap(obj: Any) -> Result:
    """Return *obj* if it is already a Result, otherwise ``Ok(obj)``.

    This is the only place plain step return values are turned into
    Results.
    """
    if isinstance(obj, (Ok, Err)):
        return obj
    return Ok(obj)
