"""``scope`` plugin: declared, validated construction context."""

from __future__ import annotations

from typing import Any, ClassVar

from ..errors import ScopeError
from . import register_plugin


@register_plugin("scope")
class Scope:
    """Restrict an operation's context to the keys named in ``scope``.

    Construction fails with ``ScopeError`` when a declared key is missing
    or an undeclared key is passed.  Declared keys are readable as
    attributes::

        class ShowPost(Operation.with_plugins("scope")):
            scope = ("current_user",)

        ShowPost(current_user=user).current_user
    """

    scope: ClassVar[tuple[str, ...]] = ()

    def __init__(self, **context: Any) -> None:
        declared = frozenset(type(self).scope)
        given = frozenset(context)
        if declared != given:
            raise ScopeError(
                type(self).__name__,
                missing=declared - given,
                unexpected=given - declared,
            )
        super().__init__(**context)

    def __getattr__(self, name: str) -> Any:
        if name in type(self).scope:
            return self.context[name]
        raise AttributeError(
            f"{type(self).__name__!r} object has no attribute {name!r}"
        )

    @classmethod
    def apply(cls, operation: type) -> None:
        if "scope" not in vars(operation):
            operation.scope = ()
