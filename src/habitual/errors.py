"""Typed failures raised by the habit engine.

All of these are expected outcomes that callers map to responses; none of
them indicate a bug.
"""

from __future__ import annotations


class HabitualError(Exception):
    """Base class for engine failures."""


class NotFoundError(HabitualError, LookupError):
    """Entity is missing or belongs to another user.

    The two cases are deliberately reported the same way so callers cannot
    probe for the existence of other users' data.
    """


class ConflictError(HabitualError):
    """Duplicate completion for a period or duplicate follow request."""


class InvalidStateError(HabitualError):
    """Transition not allowed from the entity's current state."""


class InvalidArgumentError(HabitualError, ValueError):
    """Malformed input such as a self-follow or an unknown action."""


class StoreUnavailableError(HabitualError):
    """Transient storage failure; the surrounding transaction was rolled back."""


__all__ = [
    "ConflictError",
    "HabitualError",
    "InvalidArgumentError",
    "InvalidStateError",
    "NotFoundError",
    "StoreUnavailableError",
]
