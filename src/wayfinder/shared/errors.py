"""
Failure types shared by the gateway, the generation client and the flows.

Places transport and configuration problems never show up here: the gateway
absorbs them and degrades to empty or fallback values.
"""
from __future__ import annotations

from typing import Optional


class WayfinderError(Exception):
    """Base class for every error raised by the planner."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class GenerationFailure(WayfinderError):
    """The model call errored, returned nothing, or returned off-schema output."""


class EmptyResultFailure(WayfinderError):
    """The model answered in shape but with nothing usable in it."""


class ValidationFailure(WayfinderError):
    """Caller input was rejected before any external call."""


_KINDS = (
    (ValidationFailure, "validation"),
    (EmptyResultFailure, "empty"),
    (GenerationFailure, "generation"),
)


class PlannerError(WayfinderError):
    """
    The single error shape seen by callers of the planner entry points.
    `stage` names the step that failed and `cause` keeps the original error.
    """

    def __init__(self, message: str, *, stage: str, cause: Optional[BaseException] = None):
        super().__init__(message, cause=cause)
        self.stage = stage

    @property
    def kind(self) -> str:
        for cls, name in _KINDS:
            if isinstance(self.cause, cls):
                return name
        return "generation"

    def to_dict(self) -> dict:
        return {"detail": self.message, "stage": self.stage, "kind": self.kind}
