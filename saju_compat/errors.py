"""
Typed exceptions raised by the table, relation and scoring layers.

Taxonomy
--------
InvalidIndexError       : a stem/branch code outside its enumeration.
                          Propagates immediately; never clamped, except that
                          integer branch lookups in ``saju_compat.tables`` are
                          normalized modulo 12 first.
OutOfRangeError         : InvalidIndexError raised by a table projection.
StructuralViolationError: caller-supplied data breaks a core invariant
                          (e.g. a candidate name with zero characters).

Missing *optional* upstream inputs are not exceptions: the scorer records a
``FallbackReason`` in the trace and degrades to a partial score.
"""

from __future__ import annotations

from typing import Any


class InvalidIndexError(ValueError):
    """Raised when a stem or branch identifier is not a valid code.

    Attributes:
        kind:  ``"stem"`` or ``"branch"``.
        value: The rejected input, as given by the caller.
    """

    def __init__(self, kind: str, value: Any) -> None:
        self.kind  = kind
        self.value = value
        super().__init__(f"Invalid {kind} identifier: {value!r}.")


class OutOfRangeError(InvalidIndexError):
    """Raised by a canonical-table lookup for an input outside the table."""


class StructuralViolationError(ValueError):
    """Raised when caller-supplied composition breaks a core invariant.

    Attributes:
        reason: Short description of the violated invariant.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot evaluate: {reason}")
