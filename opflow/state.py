"""State: the mutable key/value container threaded through one call."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, Optional


class State:
    """Ordered key/value store owned by a single ``Operation.call``.

    Seeded from the operation's context with the caller's input merged on
    top.  Steps grow it through ``update``; there is no deletion.  The
    ``result_key`` names the entry projected out when the call succeeds.

    A State is never shared between calls, so in-place mutation is safe.
    Sub-sequences work on a ``copy()``.
    """

    __slots__ = ("_data", "result_key")

    def __init__(
        self,
        values: Optional[Mapping[str, Any]] = None,
        *,
        result_key: str = "value",
    ) -> None:
        self._data: dict[str, Any] = dict(values or {})
        self.result_key = result_key

    @classmethod
    def build(
        cls,
        context: Mapping[str, Any],
        input: Any,
        *,
        result_key: str,
        input_key: str = "input",
    ) -> "State":
        """Merge *context* with ``{input_key: input}``; the input wins on collision."""
        return cls({**context, input_key: input}, result_key=result_key)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> "State":
        self._data[key] = value
        return self

    def contains(self, key: str) -> bool:
        return key in self._data

    def update(self, values: Optional[Mapping[str, Any]] = None, **pairs: Any) -> "State":
        """Merge *values* and *pairs* into the state and return ``self``."""
        if values:
            self._data.update(values)
        if pairs:
            self._data.update(pairs)
        return self

    def result(self) -> Any:
        """Value stored at the result key, or ``None`` when it was never set."""
        return self._data.get(self.result_key)

    def snapshot(self) -> MappingProxyType:
        """Read-only live view of every entry."""
        return MappingProxyType(self._data)

    def copy(self) -> "State":
        """Shallow copy with the same result key.

        Only top-level entries are isolated; nested lists or dicts are
        shared with the original.
        """
        return State(self._data, result_key=self.result_key)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    # ------------------------------------------------------------------
    # Mapping-style sugar
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return self._data == other._data and self.result_key == other.result_key

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"State({self._data!r}, result_key={self.result_key!r})"
