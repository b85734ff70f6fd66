"""Ready-made controllers for ``Builder.sequence``.

A controller receives ``(continuation, state)`` and decides whether to call
``continuation()``.  Each call runs the nested steps on a fresh copy of the
state; the result of the last call becomes the running result.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Union

from .protocol import Continuation, Controller
from .state import State

logger = logging.getLogger(__name__)

Condition = Union[str, Callable[[State], Any]]


def _predicate(cond: Condition) -> Callable[[State], bool]:
    if isinstance(cond, str):
        return lambda state: bool(state.get(cond))
    if callable(cond):
        return lambda state: bool(cond(state))
    raise TypeError(
        f"condition must be a state key or a callable, got {type(cond).__name__}"
    )


def when(cond: Condition) -> Controller:
    """Run the sub-sequence once when *cond* holds for the current state."""
    check = _predicate(cond)

    def controller(continuation: Continuation, state: State) -> None:
        if check(state):
            continuation()

    return controller


def unless(cond: Condition) -> Controller:
    """Run the sub-sequence once when *cond* does not hold."""
    check = _predicate(cond)

    def controller(continuation: Continuation, state: State) -> None:
        if not check(state):
            continuation()

    return controller


def retry(times: int) -> Controller:
    """Run the sub-sequence until it succeeds, at most *times* attempts.

    Every attempt starts from the state as it was before the sub-sequence.
    When all attempts fail, the last failure is kept.
    """
    if times < 1:
        raise ValueError(f"retry() needs at least one attempt, got {times}")

    def controller(continuation: Continuation, state: State) -> None:
        for attempt in range(1, times + 1):
            result = continuation()
            if result.is_ok:
                return
            logger.debug("retry: attempt %d/%d failed with %r", attempt, times, result.error)

    return controller
