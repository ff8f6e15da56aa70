"""Type I / Type II multipliers from the Leontief inverses.

Type II closes the model with respect to households: A is augmented with a
labor-income row and a consumption column, and only the industry block of
the (n+1)×(n+1) inverse contributes to industry multipliers.

Employment multipliers are employment-weighted (emp_coef · L), then put in
ratio-to-direct form. Supply-chain sectors are far less labor-intensive than
gaming or food service, so reusing the VA multiplier would misstate jobs.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import numpy as np

from gaming_impact.data.sectors import SECTOR_NAMES
from gaming_impact.engine.coefficients import CoefficientVector
from gaming_impact.engine.numerics import finite_or, safe_divide
from gaming_impact.engine.requirements import DirectRequirementsModel, leontief_inverse
from gaming_impact.models.multipliers import EmploymentRecord, MultiplierRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MultiplierVectors:
    """Economy-wide multipliers, one entry per industry of the state."""

    industries: list[str]
    L2: np.ndarray
    type1_output: np.ndarray
    type2_output: np.ndarray
    type1_va: np.ndarray
    type2_va: np.ndarray
    type1_wage: np.ndarray
    type2_wage: np.ndarray
    type1_emp: np.ndarray
    type2_emp: np.ndarray


@dataclass(frozen=True)
class StateMultipliers:
    """Target-sector records for one state plus the sectors it lacks."""

    state: str
    records: list[MultiplierRecord]
    missing_sectors: list[str]


def augment_with_households(A: np.ndarray, hh_row: np.ndarray, hh_col: np.ndarray) -> np.ndarray:
    """Build A_bar: A in the top-left block, household row and column at n."""
    n = A.shape[0]
    A_bar = np.zeros((n + 1, n + 1))
    A_bar[:n, :n] = A
    A_bar[n, :n] = hh_row
    A_bar[:n, n] = hh_col
    return A_bar


class MultiplierCalculator:
    """Computes multipliers and emits MultiplierRecords for target sectors."""

    def vectors(
        self,
        *,
        model: DirectRequirementsModel,
        coefficients: CoefficientVector,
    ) -> MultiplierVectors:
        """Compute all Type I / Type II multipliers for every industry.

        Raises:
            SingularMatrixError: If (I - A_bar) cannot be inverted.
        """
        n = model.n
        L = model.L
        A_bar = augment_with_households(model.A, coefficients.hh_row, coefficients.hh_col)
        L2 = leontief_inverse(A_bar, state=model.state, label="I - A_bar")
        L2_ind = L2[:n, :n]

        # Row vector × matrix, padded with 0 for the household pseudo-industry
        def type2(weights: np.ndarray) -> np.ndarray:
            return (np.append(weights, 0.0) @ L2)[:n]

        va = coefficients.va_coef
        wage = coefficients.wage_coef
        emp = coefficients.emp_coef

        type1_emp_raw = emp @ L
        type2_emp_raw = type2(emp)
        direct_emp_per_output = emp * va

        return MultiplierVectors(
            industries=list(model.industries),
            L2=L2,
            type1_output=L.sum(axis=0),
            type2_output=L2_ind.sum(axis=0),
            type1_va=va @ L,
            type2_va=type2(va),
            type1_wage=wage @ L,
            type2_wage=type2(wage),
            type1_emp=finite_or(safe_divide(type1_emp_raw, direct_emp_per_output, np.nan), 1.0),
            type2_emp=finite_or(safe_divide(type2_emp_raw, direct_emp_per_output, np.nan), 1.0),
        )

    def calculate(
        self,
        *,
        abbrev: str,
        base_year: int,
        model: DirectRequirementsModel,
        coefficients: CoefficientVector,
        target_sectors: Iterable[str],
        employment: Mapping[str, EmploymentRecord] | None = None,
    ) -> StateMultipliers:
        """Build one MultiplierRecord per target sector present in the state.

        Target sectors missing from the common sector set are returned in
        ``missing_sectors``; that is "no data", not a failure.

        Args:
            abbrev: Two-letter state code.
            base_year: IO table vintage.
            model: Requirements model (A, D, L) for the state.
            coefficients: Coefficient vectors for the same state.
            target_sectors: Sector codes to emit records for.
            employment: Optional sector → EmploymentRecord for the state, used
                for the joined employment/wage columns.
        """
        employment = employment or {}
        vec = self.vectors(model=model, coefficients=coefficients)

        records: list[MultiplierRecord] = []
        missing: list[str] = []
        for sector in target_sectors:
            i = model.index_of(sector)
            if i is None:
                missing.append(sector)
                continue

            emp_row = employment.get(sector)
            jobs = emp_row.employment if emp_row is not None else None
            wages = emp_row.total_wages if emp_row is not None else None
            avg_wage = safe_divide(wages, jobs) if jobs and wages is not None else None

            records.append(MultiplierRecord(
                state=model.state,
                abbrev=abbrev,
                sector=sector,
                sector_name=SECTOR_NAMES.get(sector, sector),
                base_year=base_year,
                direct_va_coef=float(coefficients.va_coef[i]),
                direct_wage_coef=float(coefficients.wage_coef[i]),
                emp_coef=float(coefficients.emp_coef[i]),
                employment_imputed=bool(coefficients.emp_imputed[i]),
                industry_output_m=float(model.g[i]) / 1e6 if np.isfinite(model.g[i]) else 0.0,
                type_i_output=float(vec.type1_output[i]),
                type_i_va=float(vec.type1_va[i]),
                type_i_wage=float(vec.type1_wage[i]),
                type_i_emp=float(vec.type1_emp[i]),
                type_ii_output=float(vec.type2_output[i]),
                type_ii_va=float(vec.type2_va[i]),
                type_ii_wage=float(vec.type2_wage[i]),
                type_ii_emp=float(vec.type2_emp[i]),
                employment=jobs,
                total_wages_m=wages / 1e6 if wages is not None else None,
                avg_wage=avg_wage,
            ))

        if missing:
            logger.info("%s: no data for sectors %s", model.state, ", ".join(missing))

        return StateMultipliers(state=model.state, records=records, missing_sectors=missing)
