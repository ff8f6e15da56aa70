"""Exception hierarchy for the multiplier engine and impact decomposition.

Hierarchy:
    GamingImpactError (base)
    ├── InvalidInputError        (also ValueError): request rejected up front
    ├── StateNotFoundError       (also KeyError)  : unknown state, with suggestions
    ├── AmbiguousStateError      (also ValueError): several states match
    ├── NoDataError              (also KeyError)  : state known, sector absent
    └── ModelComputationError                     : offline, per-state
        ├── DataAlignmentError
        └── SingularMatrixError

Offline failures are caught per state by the batch runner; request-time
failures propagate to the caller. Nothing is retryable: every operation is
deterministic.
"""

from __future__ import annotations

from typing import Any


class GamingImpactError(Exception):
    """Base exception carrying a message plus structured details."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError subclasses would otherwise repr() the message.
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# ---------------------------------------------------------------------------
# Request-time errors
# ---------------------------------------------------------------------------


class InvalidInputError(GamingImpactError, ValueError):
    """Input rejected before any computation (revenue, sector, overrides)."""


class StateNotFoundError(GamingImpactError, KeyError):
    """No state matches the requested name.

    ``suggestions`` holds the "did you mean" candidates, or a sample of valid
    state names when nothing resembles the request.
    """

    def __init__(
        self,
        state: str,
        suggestions: list[str],
        *,
        is_sample: bool = False,
    ) -> None:
        self.state = state
        self.suggestions = list(suggestions)
        self.is_sample = is_sample
        if is_sample:
            msg = (
                f"State not found: {state!r}. "
                f"Available states: {', '.join(self.suggestions)}, ..."
            )
        else:
            msg = f"State not found: {state!r}. Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(msg, details={"state": state, "suggestions": self.suggestions})


class AmbiguousStateError(GamingImpactError, ValueError):
    """More than one state matches the requested name."""

    def __init__(self, state: str, matches: list[str]) -> None:
        self.state = state
        self.matches = list(matches)
        super().__init__(
            f"Multiple states match {state!r}: {', '.join(self.matches)}",
            details={"state": state, "matches": self.matches},
        )


class NoDataError(GamingImpactError, KeyError):
    """The state exists but has no multipliers for the requested sector."""

    def __init__(self, state: str, sector: str) -> None:
        self.state = state
        self.sector = sector
        super().__init__(
            f"No multiplier data for sector {sector!r} in {state}",
            details={"state": state, "sector": sector},
        )


# ---------------------------------------------------------------------------
# Offline (batch) errors
# ---------------------------------------------------------------------------


class ModelComputationError(GamingImpactError):
    """A state's IO model could not be built; the batch skips the state."""

    def __init__(self, state: str, message: str, details: dict[str, Any] | None = None) -> None:
        self.state = state
        merged = {"state": state, **(details or {})}
        super().__init__(f"{state}: {message}", details=merged)


class DataAlignmentError(ModelComputationError):
    """Common sector set is empty or a required value-added row is missing."""


class SingularMatrixError(ModelComputationError):
    """(I - A) or the household-augmented (I - A_bar) is not invertible."""
