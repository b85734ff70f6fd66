"""Step declaration (Builder) and interpretation (Executor).

An operation's steps are recorded once, when its class is created, as a
tuple of frozen ``StepSpec`` descriptors.  Every ``call`` then runs a fresh
``Executor`` over that tuple::

    class PlaceOrder(Operation):
        result_key = "order"

        @staticmethod
        def process(p: Builder) -> None:
            p.set("cart", "load_cart")
            p.step("check_stock")
            with p.if_true("express") as express:
                express.set("carrier", lambda state: "courier")
            p.set("create_order")
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

from . import controllers
from .config import get_config
from .errors import OperationDefinitionError
from .protocol import StepBody
from .result import Err, Ok, Result, wrap
from .state import State

if TYPE_CHECKING:
    from .operation import Operation

logger = logging.getLogger(__name__)


class StepKind(Enum):
    """The four composition primitives."""

    STEP = "step"
    SET = "set"
    MAP = "map"
    SEQUENCE = "sequence"


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Body:
    """A step body resolved at definition time.

    ``bound`` bodies are functions looked up on the operation class and
    receive the operation instance as their first argument.
    """

    fn: Callable[..., Any]
    name: str
    bound: bool = False

    def invoke(self, operation: "Operation", *args: Any) -> Any:
        if self.bound:
            return self.fn(operation, *args)
        return self.fn(*args)


@dataclass(frozen=True)
class StepSpec:
    """One declared step.  Immutable and shared by every call."""

    kind: StepKind
    body: Body
    # SET only; ``None`` means the operation's result key
    key: Optional[str] = None
    # SEQUENCE only
    steps: tuple["StepSpec", ...] = ()

    @property
    def label(self) -> str:
        if self.kind is StepKind.SET:
            return f"set({self.key or '<result>'}, {self.body.name})"
        return f"{self.kind.value}({self.body.name})"


@dataclass(frozen=True)
class ProcessDefinition:
    """The ordered steps of one operation class."""

    steps: tuple[StepSpec, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.steps)


def resolve_body(owner: type, body: StepBody) -> Body:
    """Turn a callable or a method name on *owner* into a ``Body``.

    Raises ``OperationDefinitionError`` for unknown names and non-callables.
    """
    if isinstance(body, str):
        try:
            static = inspect.getattr_static(owner, body)
        except AttributeError:
            raise OperationDefinitionError(
                f"{owner.__name__} has no method {body!r} to use as a step"
            ) from None
        if isinstance(static, (staticmethod, classmethod)):
            return Body(fn=getattr(owner, body), name=body)
        if not callable(static):
            raise OperationDefinitionError(
                f"{owner.__name__}.{body} is not callable"
            )
        return Body(fn=static, name=body, bound=True)

    if callable(body):
        name = getattr(body, "__qualname__", None) or type(body).__name__
        return Body(fn=body, name=name)

    raise OperationDefinitionError(
        f"step body must be callable or a method name, got {type(body).__name__}"
    )


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class Builder:
    """Records steps for one operation class (or one nested sub-sequence).

    Every method returns a builder so declarations can be chained.
    ``sequence`` and friends called without a setup function return the
    child builder, which is also a context manager for readability.
    """

    def __init__(self, owner: type) -> None:
        self.owner = owner
        # StepSpec, or (Body, Builder) for a sub-sequence still being filled
        self._entries: list[Any] = []

    def __enter__(self) -> "Builder":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def step(self, body: StepBody) -> "Builder":
        """Run *body* for validation or side effects; state is kept as is."""
        self._entries.append(StepSpec(StepKind.STEP, resolve_body(self.owner, body)))
        return self

    def set(self, key_or_body: StepBody, body: Optional[StepBody] = None) -> "Builder":
        """Store the value of *body* at *key* (or at the result key).

        ``set(body)`` stores at the operation's result key;
        ``set("key", body)`` stores at ``"key"``.
        """
        if body is None:
            key, body = None, key_or_body
        else:
            if not isinstance(key_or_body, str):
                raise OperationDefinitionError(
                    f"set() key must be a string, got {type(key_or_body).__name__}"
                )
            key = key_or_body
        self._entries.append(
            StepSpec(StepKind.SET, resolve_body(self.owner, body), key=key)
        )
        return self

    def map(self, body: StepBody) -> "Builder":
        """Replace the whole state with the Result *body* returns."""
        self._entries.append(StepSpec(StepKind.MAP, resolve_body(self.owner, body)))
        return self

    def sequence(
        self,
        controller: StepBody,
        setup: Optional[Callable[["Builder"], Any]] = None,
    ) -> "Builder":
        """Group nested steps whose execution *controller* decides.

        With *setup*, nested steps are added by calling it with the child
        builder and ``self`` is returned, so chained calls stay at this
        level.  Without it the child builder is returned for use in a
        ``with`` block.
        """
        child = Builder(self.owner)
        self._entries.append((resolve_body(self.owner, controller), child))
        if setup is None:
            return child
        setup(child)
        return self

    around = sequence

    def if_true(
        self,
        cond: controllers.Condition,
        setup: Optional[Callable[["Builder"], Any]] = None,
    ) -> "Builder":
        """Run nested steps only when *cond* (state key or callable) holds."""
        return self.sequence(controllers.when(cond), setup)

    def if_false(
        self,
        cond: controllers.Condition,
        setup: Optional[Callable[["Builder"], Any]] = None,
    ) -> "Builder":
        """Run nested steps only when *cond* does not hold."""
        return self.sequence(controllers.unless(cond), setup)

    # ------------------------------------------------------------------
    # Freezing
    # ------------------------------------------------------------------

    def build(self) -> tuple[StepSpec, ...]:
        specs: list[StepSpec] = []
        for entry in self._entries:
            if isinstance(entry, StepSpec):
                specs.append(entry)
            else:
                controller, child = entry
                specs.append(
                    StepSpec(StepKind.SEQUENCE, controller, steps=child.build())
                )
        return tuple(specs)


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------


class Executor:
    """Interprets step descriptors against a running ``Result[State]``.

    Once the running result is an ``Err`` every remaining step is skipped
    and the same ``Err`` object is returned.  Exceptions raised by step
    bodies are not caught.
    """

    def __init__(self, operation: "Operation", result: Result) -> None:
        self.operation = operation
        self.result = result
        self._log = get_config().log_steps

    def run(self, steps: tuple[StepSpec, ...]) -> Result:
        for spec in steps:
            if self.result.is_err:
                if self._log:
                    logger.debug(
                        "%s: skipping %s after failure",
                        type(self.operation).__name__,
                        spec.label,
                    )
                continue
            if self._log:
                logger.debug("%s: running %s", type(self.operation).__name__, spec.label)
            self._dispatch[spec.kind](self, spec)
        return self.result

    def fork(self, state: State) -> "Executor":
        return Executor(self.operation, Ok(state.copy()))

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def _step(self, spec: StepSpec) -> None:
        self.result = self.result.tee(
            lambda state: spec.body.invoke(self.operation, state)
        )

    def _set(self, spec: StepSpec) -> None:
        key = spec.key if spec.key is not None else self.operation.result_key

        def assign(state: State) -> Result:
            return wrap(spec.body.invoke(self.operation, state)).then(
                lambda value: Ok(state.update({key: value}))
            )

        self.result = self.result.then(assign)

    def _map(self, spec: StepSpec) -> None:
        def replace(state: State) -> Result:
            out = wrap(spec.body.invoke(self.operation, state))
            if isinstance(out, Err) or isinstance(out.value, State):
                return out
            if isinstance(out.value, Mapping):
                return Ok(State(out.value, result_key=state.result_key))
            raise TypeError(
                f"map step {spec.body.name} must produce a State, "
                f"got {type(out.value).__name__}"
            )

        self.result = self.result.then(replace)

    def _sequence(self, spec: StepSpec) -> None:
        state = self.result.value

        def continuation() -> Result:
            self.result = self.fork(state).run(spec.steps)
            return self.result

        spec.body.invoke(self.operation, continuation, state)

    _dispatch: dict[StepKind, Callable[["Executor", StepSpec], None]] = {
        StepKind.STEP: _step,
        StepKind.SET: _set,
        StepKind.MAP: _map,
        StepKind.SEQUENCE: _sequence,
    }
