"""Validation warning models for multiplier batches."""

from enum import StrEnum

from pydantic import Field

from gaming_impact.models.common import GamingImpactBase, UUIDv7, new_uuid7


class ValidationCheck(StrEnum):
    """Which plausibility rule a warning comes from."""

    TYPE_I_BELOW_ONE = "TYPE_I_BELOW_ONE"
    TYPE_II_BELOW_TYPE_I = "TYPE_II_BELOW_TYPE_I"
    VA_COEF_OUT_OF_RANGE = "VA_COEF_OUT_OF_RANGE"
    LOW_CROSS_STATE_VARIATION = "LOW_CROSS_STATE_VARIATION"


class ValidationSeverity(StrEnum):
    """Severity levels for validation warnings."""

    INFO = "INFO"
    WARNING = "WARNING"


class ValidationWarning(GamingImpactBase, frozen=True):
    """A single data-quality flag raised on a computed multiplier record.

    ``state`` is None for cross-state checks.
    """

    warning_id: UUIDv7 = Field(default_factory=new_uuid7)
    check: ValidationCheck
    severity: ValidationSeverity = ValidationSeverity.WARNING
    state: str | None = None
    sector: str
    message: str
    value: float | None = None
