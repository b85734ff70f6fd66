"""Plugin registry.

A plugin is a plain mixin class.  Its methods and classmethods become
available on operations composed with it, and its optional ``apply(cls)``
classmethod runs once against the composed class.  Plugins are attached
ahead of time with ``Operation.with_plugins(...)``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Callable, Union

from ..errors import PluginError

_REGISTRY: dict[str, type] = {}


def register_plugin(name: str) -> Callable[[type], type]:
    """Class decorator registering a plugin under *name*."""

    def decorator(plugin: type) -> type:
        if not isinstance(plugin, type):
            raise PluginError(f"plugin {name!r} must be a class")
        existing = _REGISTRY.get(name)
        if existing is not None and existing is not plugin:
            raise PluginError(f"plugin name {name!r} is already registered")
        _REGISTRY[name] = plugin
        return plugin

    return decorator


def get_plugin(name: str) -> type:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise PluginError(
            f"unknown plugin {name!r}; available: {sorted(_REGISTRY)}"
        ) from None


def available_plugins() -> list[str]:
    return sorted(_REGISTRY)


def resolve_plugins(plugins: Iterable[Union[str, type]]) -> tuple[type, ...]:
    """Resolve names and classes to plugin classes, dropping duplicates."""
    resolved: list[type] = []
    for plugin in plugins:
        if isinstance(plugin, str):
            plugin = get_plugin(plugin)
        elif not isinstance(plugin, type):
            raise PluginError(
                f"plugin must be a registered name or a class, got {plugin!r}"
            )
        if plugin not in resolved:
            resolved.append(plugin)
    return tuple(resolved)


from .responder import Responder  # noqa: E402
from .scope import Scope  # noqa: E402

__all__ = [
    "Responder",
    "Scope",
    "available_plugins",
    "get_plugin",
    "register_plugin",
    "resolve_plugins",
]
