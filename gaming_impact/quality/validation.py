"""Plausibility checks on computed multiplier records.

* Type I output multiplier < 1                          -> WARNING
* Type II < Type I for output, VA, wage or employment   -> WARNING
* Direct VA coefficient outside [0, 1]                  -> WARNING
* Type I output nearly identical across states (SD <= 0.01) -> INFO

These usually point at upstream table problems (e.g. inconsistent state
filtering), not at the algorithm. They never block persistence.
"""

from __future__ import annotations

import statistics
from collections import defaultdict
from collections.abc import Iterable

from gaming_impact.models.common import Metric, MultiplierType
from gaming_impact.models.multipliers import MultiplierRecord
from gaming_impact.quality.models import ValidationCheck, ValidationSeverity, ValidationWarning

# Rounding noise allowed before Type II < Type I is flagged
_TOLERANCE = 1e-9

MIN_CROSS_STATE_SD = 0.01


def check_record(record: MultiplierRecord) -> list[ValidationWarning]:
    """Run the per-record checks."""
    warnings: list[ValidationWarning] = []

    if record.type_i_output < 1.0 - _TOLERANCE:
        warnings.append(ValidationWarning(
            check=ValidationCheck.TYPE_I_BELOW_ONE,
            state=record.state,
            sector=record.sector,
            message=f"Type I output multiplier {record.type_i_output:.4f} < 1.0",
            value=record.type_i_output,
        ))

    for metric in Metric:
        type_i = record.multiplier(metric, MultiplierType.TYPE_I)
        type_ii = record.multiplier(metric, MultiplierType.TYPE_II)
        if type_ii < type_i - _TOLERANCE:
            warnings.append(ValidationWarning(
                check=ValidationCheck.TYPE_II_BELOW_TYPE_I,
                state=record.state,
                sector=record.sector,
                message=f"Type II {metric.value} multiplier {type_ii:.4f} < Type I {type_i:.4f}",
                value=type_ii - type_i,
            ))

    if not 0.0 <= record.direct_va_coef <= 1.0:
        warnings.append(ValidationWarning(
            check=ValidationCheck.VA_COEF_OUT_OF_RANGE,
            state=record.state,
            sector=record.sector,
            message=f"Direct VA coefficient {record.direct_va_coef:.4f} outside [0, 1]",
            value=record.direct_va_coef,
        ))

    return warnings


def check_cross_state_variation(
    records: Iterable[MultiplierRecord],
    min_sd: float = MIN_CROSS_STATE_SD,
) -> list[ValidationWarning]:
    """Flag sectors whose Type I output multiplier barely varies across states."""
    by_sector: dict[str, list[float]] = defaultdict(list)
    for record in records:
        by_sector[record.sector].append(record.type_i_output)

    warnings: list[ValidationWarning] = []
    for sector, values in sorted(by_sector.items()):
        if len(values) < 2:
            continue
        sd = statistics.stdev(values)
        if sd <= min_sd:
            warnings.append(ValidationWarning(
                check=ValidationCheck.LOW_CROSS_STATE_VARIATION,
                severity=ValidationSeverity.INFO,
                sector=sector,
                message=f"{sector} multipliers may be too similar across states (SD = {sd:.4f})",
                value=sd,
            ))
    return warnings


def validate_records(records: Iterable[MultiplierRecord]) -> list[ValidationWarning]:
    """All checks over a batch of records."""
    records = list(records)
    warnings: list[ValidationWarning] = []
    for record in records:
        warnings.extend(check_record(record))
    warnings.extend(check_cross_state_variation(records))
    return warnings
