"""Structured business-failure payload carried inside ``Err``."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Error(BaseModel):
    """A business failure produced by a step body.

    ``kind`` identifies the failure for callers that dispatch on it
    (``"not_found"``, ``"invalid"``, ...).  Instances are frozen; the engine
    forwards the same object untouched to the caller.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: str = Field(..., description="Identifier callers dispatch on")
    message: Optional[str] = Field(
        default=None, description="Human readable explanation"
    )
    details: Optional[Any] = Field(
        default=None, description="Structured data describing the failure"
    )

    def to_dict(self) -> dict[str, Any]:
        """Return the ``{kind, message, details}`` shape used at host boundaries."""
        return self.model_dump(include={"kind", "message", "details"})

    def __str__(self) -> str:
        if self.message:
            return f"{self.kind}: {self.message}"
        return self.kind
