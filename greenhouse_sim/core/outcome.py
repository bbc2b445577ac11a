"""Command outcomes: success values and recoverable failure kinds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Recoverable, local failure kinds returned by core commands."""

    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVALID_PLOT = "invalid_plot"            # locked, occupied or nonexistent
    MISSING_RESOURCE = "missing_resource"    # no consumable item for a care action
    BUFF_CAPPED = "buff_capped"
    PREREQUISITE_UNMET = "prerequisite_unmet"
    UNKNOWN_CATALOG_ENTRY = "unknown_catalog_entry"
    NOT_FOUND = "not_found"
    LIMIT_REACHED = "limit_reached"          # shop ownership limit


@dataclass(frozen=True)
class Outcome:
    """Result of a command: either ok with an optional value, or an error kind.

    A failed command has performed no mutation.
    """

    ok: bool
    value: Any = None
    error: Optional[ErrorKind] = None

    @classmethod
    def success(cls, value: Any = None) -> Outcome:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> Outcome:
        return cls(ok=False, error=error)

    def __bool__(self) -> bool:
        return self.ok
