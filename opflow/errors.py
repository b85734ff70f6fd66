"""Exception types raised by the operation engine.

Business failures never appear here: they travel as ``Err(Error(...))``
values.  These exceptions signal programming mistakes in how an operation
is declared or how a ``Result`` is consumed.
"""

from __future__ import annotations


class OpflowError(Exception):
    """Base class for every engine-level exception."""


class ResultAccessError(OpflowError):
    """The wrong variant of a ``Result`` was read.

    Examples:
    - ``Err(...).value``
    - ``Ok(...).error``
    """


class OperationDefinitionError(OpflowError):
    """Invalid operation declaration.

    Examples:
    - A step names a method the operation class does not define.
    - A step body is neither callable nor a method name.
    - A plugin is attached to a class that already declared its process.
    """


class PluginError(OpflowError):
    """A plugin name is not registered, or a plugin is malformed."""


class ScopeError(OpflowError, TypeError):
    """Context passed to a scoped operation does not match its ``scope``.

    ``missing`` and ``unexpected`` hold the offending keys.
    """

    def __init__(
        self,
        operation: str,
        missing: frozenset[str] = frozenset(),
        unexpected: frozenset[str] = frozenset(),
    ) -> None:
        self.missing = missing
        self.unexpected = unexpected
        parts = []
        if missing:
            parts.append(f"missing {sorted(missing)!r}")
        if unexpected:
            parts.append(f"unexpected {sorted(unexpected)!r}")
        super().__init__(f"{operation} context is invalid: " + "; ".join(parts))


class UnhandledFailureError(OpflowError):
    """A responder had no handler for the failure it received.

    ``error`` is the unhandled failure payload.
    """

    def __init__(self, error: object) -> None:
        self.error = error
        super().__init__(f"no failure handler for {error!r}")
