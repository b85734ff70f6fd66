"""``responder`` plugin: dispatch a call's Result to host handlers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from ..errors import UnhandledFailureError
from ..result import Result
from . import register_plugin

logger = logging.getLogger(__name__)

FailureHandlers = Union[Callable[[Any], Any], Mapping[str, Callable[[Any], Any]]]


def respond(
    result: Result,
    on_success: Callable[[Any], Any],
    on_failure: Optional[FailureHandlers] = None,
    otherwise: Optional[Callable[[Any], Any]] = None,
) -> Any:
    """Call the handler matching *result* and return what it returns.

    *on_failure* is either one handler for every failure or a mapping from
    error kind to handler; *otherwise* catches kinds the mapping lacks.
    A failure nobody handles raises ``UnhandledFailureError``.
    """
    if result.is_ok:
        return on_success(result.value)

    err = result.error
    handler: Optional[Callable[[Any], Any]] = None
    if isinstance(on_failure, Mapping):
        handler = on_failure.get(getattr(err, "kind", None))
    elif on_failure is not None:
        handler = on_failure
    if handler is None:
        handler = otherwise
    if handler is None:
        raise UnhandledFailureError(err)
    logger.debug("responder: dispatching failure %r", err)
    return handler(err)


@register_plugin("responder")
class Responder:
    """Adds ``respond_to(input, ...)``: ``call`` followed by ``respond``."""

    def respond_to(
        self,
        input: Any,
        on_success: Callable[[Any], Any],
        on_failure: Optional[FailureHandlers] = None,
        otherwise: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        return respond(self.call(input), on_success, on_failure, otherwise)
