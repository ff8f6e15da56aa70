"""Direct coefficients and household augmentation vectors per state.

Employment coefficients are derived for every industry in the state, not
only the target sectors: Type I/II employment multipliers propagate through
the whole supply chain.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np

from gaming_impact.engine.numerics import safe_divide
from gaming_impact.engine.requirements import DirectRequirementsModel
from gaming_impact.engine.snapshot import VALUE_ADDED_CODES, StateIOSnapshot
from gaming_impact.errors import DataAlignmentError

logger = logging.getLogger(__name__)

DEFAULT_EMPLOYMENT_FALLBACK = 10.0


@dataclass(frozen=True)
class CoefficientVector:
    """Per-industry coefficients, aligned to DirectRequirementsModel.industries.

    va_coef / wage_coef are per $ of output; emp_coef is jobs per $1M of
    value added. hh_row / hh_col augment A for the Type II model.
    """

    total_va: np.ndarray
    compensation: np.ndarray
    va_coef: np.ndarray
    wage_coef: np.ndarray
    emp_coef: np.ndarray
    emp_imputed: np.ndarray
    hh_row: np.ndarray
    hh_col: np.ndarray


class CoefficientDeriver:
    """Derives VA, wage, employment and household vectors for one state."""

    def __init__(
        self,
        *,
        pce_column: str = "F010",
        employment_fallback: float = DEFAULT_EMPLOYMENT_FALLBACK,
    ) -> None:
        self._pce_column = pce_column
        self._employment_fallback = employment_fallback

    def derive(
        self,
        *,
        snapshot: StateIOSnapshot,
        model: DirectRequirementsModel,
        employment: Mapping[str, float | None],
    ) -> CoefficientVector:
        """Compute all coefficient vectors.

        Args:
            snapshot: Raw tables (value added and the PCE column are read here).
            model: Aligned requirements model for the same state.
            employment: Industry code → jobs. Missing, zero or NaN entries are
                imputed.

        Raises:
            DataAlignmentError: If a V001/V002/V003 row is missing.
        """
        inds = model.industries
        v001, v002, v003 = (self._va_row(snapshot, code, inds) for code in VALUE_ADDED_CODES)

        total_va = v001 + v002 + v003
        va_coef = safe_divide(total_va, model.g)
        wage_coef = safe_divide(v001, model.g)

        hh_row = wage_coef.copy()
        hh_col = model.D @ self._household_consumption(snapshot, model, v001)

        emp_coef, emp_imputed = self.employment_coefficients(
            state=snapshot.state, industries=inds, total_va=total_va, employment=employment,
        )

        return CoefficientVector(
            total_va=total_va,
            compensation=v001,
            va_coef=va_coef,
            wage_coef=wage_coef,
            emp_coef=emp_coef,
            emp_imputed=emp_imputed,
            hh_row=hh_row,
            hh_col=hh_col,
        )

    def employment_coefficients(
        self,
        *,
        state: str,
        industries: list[str],
        total_va: np.ndarray,
        employment: Mapping[str, float | None],
    ) -> tuple[np.ndarray, np.ndarray]:
        """Jobs per $1M value added, with imputation for missing sectors.

        emp_coef[i] = employment[i] / (total_va[i] / 1e6). Industries without
        a positive coefficient take the mean of the positive ones; if there are
        none, the fixed fallback.

        Returns:
            (emp_coef, imputed_mask)
        """
        jobs = np.array(
            [np.nan if employment.get(c) is None else float(employment[c]) for c in industries],
            dtype=np.float64,
        )
        raw = safe_divide(jobs, total_va / 1e6)
        raw = np.where(total_va > 0, raw, 0.0)

        # Zero or NaN only: EmploymentRecord rejects negative jobs and VA <= 0 maps to 0.
        imputed = ~(raw > 0)
        if np.any(~imputed):
            fill = float(np.mean(raw[~imputed]))
        else:
            fill = self._employment_fallback
            logger.warning(
                "%s: no usable employment data; using fallback %.1f jobs per $1M VA",
                state, fill,
            )

        if np.any(imputed):
            logger.debug(
                "%s: imputed employment coefficient %.3f for %d industries",
                state, fill, int(np.sum(imputed)),
            )
        return np.where(imputed, fill, raw), imputed

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _va_row(snapshot: StateIOSnapshot, code: str, industries: list[str]) -> np.ndarray:
        row = snapshot.value_added.get(code)
        if row is None:
            raise DataAlignmentError(
                snapshot.state,
                f"value-added row {code} is missing",
                details={"row": code},
            )
        return np.array([row.get(c, np.nan) for c in industries], dtype=np.float64)

    def _household_consumption(
        self,
        snapshot: StateIOSnapshot,
        model: DirectRequirementsModel,
        compensation: np.ndarray,
    ) -> np.ndarray:
        """PCE per $ of economy-wide labor income, in commodity space."""
        pce = snapshot.use_column(self._pce_column, model.commodities)
        if pce is None:
            logger.warning(
                "%s: PCE column %s not in Use table; induced effects will be zero",
                snapshot.state, self._pce_column,
            )
            return np.zeros(len(model.commodities))
        pce = np.where(np.isfinite(pce), pce, 0.0)
        return safe_divide(pce, float(np.nansum(compensation)))
