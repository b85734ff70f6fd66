"""Structural types for step bodies and sub-sequence controllers."""

from __future__ import annotations

from typing import Any, Callable, Protocol, Union, runtime_checkable

from .result import Result
from .state import State

#: Zero-argument callable handed to a controller; runs the nested steps.
Continuation = Callable[[], Result]


@runtime_checkable
class StepCallable(Protocol):
    """Anything callable with the current State.

    May return a plain value, an ``Ok``/``Err``, or (for ``map`` steps) a
    Result wrapping a whole State.
    """

    def __call__(self, state: State) -> Any: ...


@runtime_checkable
class Controller(Protocol):
    """Decides whether, and how many times, a sub-sequence runs."""

    def __call__(self, continuation: Continuation, state: State) -> Any: ...


#: What a builder accepts as a step body: a callable, or the name of a
#: method on the operation class.
StepBody = Union[str, Callable[..., Any]]
