"""Operation: the per-class facade turning declared steps into ``call``."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Optional, Union

from .config import get_config
from .dsl import Builder, Executor, ProcessDefinition
from .error import Error
from .errors import OperationDefinitionError
from .plugins import resolve_plugins
from .result import Err, Ok, Result, failure, success, wrap
from .state import State

logger = logging.getLogger(__name__)


def error(
    kind: str,
    message: Optional[str] = None,
    details: Optional[Any] = None,
) -> Err[Error]:
    """Build an :class:`Error` and wrap it in ``Err``."""
    return Err(Error(kind=kind, message=message, details=details))


def wrap_if_present(
    value: Any,
    kind: str = "not_found",
    message: Optional[str] = None,
    details: Optional[Any] = None,
) -> Result:
    """``Ok(value)`` unless *value* is ``None``, else ``error(kind, ...)``."""
    if value is None:
        return error(kind, message=message, details=details)
    return Ok(value)


class Operation:
    """Base class for operations.

    Subclasses declare their steps in a ``process`` function that receives a
    :class:`~opflow.dsl.Builder`.  It is evaluated once per class, when the
    class is created, so method names used as steps must be defined in the
    class body (or inherited)::

        class CheckAge(Operation):
            result_key = "age"

            @staticmethod
            def process(p):
                p.set("age", lambda state: state["input"]["age"])
                p.step("check_adult")

            def check_adult(self, state):
                if state["age"] < 18:
                    return self.error("underage")

        CheckAge().call({"age": 20})   # Ok(20)

    Subclasses that do not define ``process`` re-evaluate the inherited one
    against themselves, so overridden step methods are honoured.

    ``result_key`` is inherited like any class attribute; root classes that
    leave it unset get ``FlowConfig.default_result_key``.
    """

    result_key: ClassVar[Optional[str]] = None
    process: ClassVar[Optional[Callable[[Builder], Any]]] = None

    _definition: ClassVar[Optional[ProcessDefinition]] = None
    _plugins: ClassVar[tuple[type, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.result_key is None:
            cls.result_key = get_config().default_result_key
        process = cls.process
        if process is None:
            return
        builder = Builder(cls)
        process(builder)
        cls._definition = ProcessDefinition(builder.build())
        logger.debug(
            "%s: declared %d step(s), result key %r",
            cls.__name__,
            len(cls._definition),
            cls.result_key,
        )

    def __init__(self, **context: Any) -> None:
        self._context = MappingProxyType(dict(context))

    # ------------------------------------------------------------------
    # Plugin composition
    # ------------------------------------------------------------------

    @classmethod
    def with_plugins(cls, *plugins: Union[str, type]) -> type["Operation"]:
        """Return a new base class combining *plugins* with this one.

        Plugins are resolved through the registry, placed ahead of ``cls``
        in the MRO and their ``apply`` hook runs once on the new class.
        Plugins already present on ``cls`` are skipped.
        """
        if cls._definition is not None:
            raise OperationDefinitionError(
                f"{cls.__name__} already declares a process; "
                "plugins must be attached to a base class before any steps"
            )
        new = [p for p in resolve_plugins(plugins) if p not in cls._plugins]
        if not new:
            return cls
        name = cls.__name__ + "".join(p.__name__ for p in new)
        composed = type(
            name,
            (*new, cls),
            {"__module__": cls.__module__, "_plugins": cls._plugins + tuple(new)},
        )
        for plugin in new:
            apply = getattr(plugin, "apply", None)
            if apply is not None:
                apply(composed)
        return composed

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    @property
    def context(self) -> MappingProxyType:
        """Read-only values merged under the input of every call."""
        return self._context

    @classmethod
    def definition(cls) -> Optional[ProcessDefinition]:
        return cls._definition

    def call(self, input: Any = None) -> Result:
        """Run the declared steps against *input*.

        Returns ``Ok(value at result key)`` or the first ``Err`` produced by
        a step, unchanged.
        """
        definition = type(self)._definition
        if definition is None:
            raise NotImplementedError(
                f"{type(self).__name__} does not declare a process"
            )
        config = get_config()
        state = State.build(
            self.context,
            input,
            result_key=self.result_key,
            input_key=config.input_key,
        )
        result = Executor(self, Ok(state)).run(definition.steps)
        if result.is_err:
            logger.info(
                "%s finished with failure %s", type(self).__name__, result.error
            )
            return result
        return result.map(lambda state: state.get(self.result_key))

    # ------------------------------------------------------------------
    # Helpers for step bodies
    # ------------------------------------------------------------------

    success = staticmethod(success)
    failure = staticmethod(failure)
    wrap = staticmethod(wrap)
    error = staticmethod(error)
    wrap_if_present = staticmethod(wrap_if_present)
