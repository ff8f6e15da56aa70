"""Tests for direct coefficients, employment coefficients and household vectors."""

import numpy as np
import pytest

from gaming_impact.engine.coefficients import CoefficientDeriver
from gaming_impact.engine.requirements import MatrixModelBuilder
from gaming_impact.errors import DataAlignmentError

COLUMN_SUMS = np.array([0.13, 0.17, 0.21, 0.19, 0.12])
COMPENSATION_SHARE = np.array([0.25, 0.45, 0.35, 0.35, 0.45])
PCE_SHARE = np.array([0.30, 0.05, 0.08, 0.04, 0.10])


def _derive(snapshot, jobs=None, **kwargs):
    model = MatrixModelBuilder().build(snapshot)
    jobs = {} if jobs is None else jobs
    coefficients = CoefficientDeriver(**kwargs).derive(
        snapshot=snapshot, model=model, employment=jobs,
    )
    return model, coefficients


# ===================================================================
# Value added and wages
# ===================================================================


class TestDirectCoefficients:

    def test_va_coefficient(self, nevada) -> None:
        _, c = _derive(nevada)
        np.testing.assert_array_almost_equal(c.va_coef, 1.0 - COLUMN_SUMS)

    def test_wage_coefficient(self, nevada) -> None:
        _, c = _derive(nevada)
        np.testing.assert_array_almost_equal(c.wage_coef, (1.0 - COLUMN_SUMS) * COMPENSATION_SHARE)

    def test_va_coefficients_in_unit_interval(self, nevada) -> None:
        _, c = _derive(nevada)
        assert np.all((c.va_coef >= 0) & (c.va_coef <= 1))

    def test_missing_va_row_raises(self, snapshot_factory) -> None:
        with pytest.raises(DataAlignmentError, match="V002"):
            _derive(snapshot_factory(without_va=("V002",)))


# ===================================================================
# Household augmentation
# ===================================================================


class TestHouseholdVectors:

    def test_household_row_is_wage_coefficient(self, nevada) -> None:
        _, c = _derive(nevada)
        np.testing.assert_array_equal(c.hh_row, c.wage_coef)

    def test_household_column_is_pce_per_dollar_of_compensation(self, nevada) -> None:
        # D = I in the synthetic economy, so hh_col equals the PCE shares
        _, c = _derive(nevada)
        np.testing.assert_array_almost_equal(c.hh_col, PCE_SHARE)

    def test_missing_pce_column_gives_zero_column(self, snapshot_factory) -> None:
        _, c = _derive(snapshot_factory(with_pce=False))
        np.testing.assert_array_equal(c.hh_col, np.zeros(5))

    def test_custom_pce_column(self, snapshot_factory) -> None:
        _, c = _derive(snapshot_factory(), pce_column="F040")
        assert np.all(c.hh_col > 0)
        assert not np.allclose(c.hh_col, PCE_SHARE)


# ===================================================================
# Employment coefficients
# ===================================================================


class TestEmploymentCoefficients:

    def test_jobs_per_million_va(self, nevada) -> None:
        _, c = _derive(nevada, jobs={"713": 9000.0})
        va_713_m = (1.0 - 0.21) * 1.0e9 / 1e6
        assert c.emp_coef[2] == pytest.approx(9000.0 / va_713_m)
        assert not c.emp_imputed[2]

    def test_missing_sectors_take_mean_of_known(self, nevada) -> None:
        _, c = _derive(nevada, jobs={"713": 9000.0, "722": 20000.0})
        known = np.array([c.emp_coef[2], c.emp_coef[4]])
        for i in (0, 1, 3):
            assert c.emp_imputed[i]
            assert c.emp_coef[i] == pytest.approx(known.mean())

    def test_zero_and_none_are_imputed(self, nevada) -> None:
        _, c = _derive(nevada, jobs={"531": 0.0, "711AS": None, "713": 9000.0})
        assert c.emp_imputed[0]
        assert c.emp_imputed[1]
        assert c.emp_coef[0] == pytest.approx(c.emp_coef[2])

    def test_no_employment_uses_fallback(self, nevada) -> None:
        _, c = _derive(nevada)
        np.testing.assert_array_equal(c.emp_coef, np.full(5, 10.0))
        assert c.emp_imputed.all()

    def test_configurable_fallback(self, nevada) -> None:
        _, c = _derive(nevada, employment_fallback=12.5)
        np.testing.assert_array_equal(c.emp_coef, np.full(5, 12.5))

    def test_zero_va_sector_is_imputed(self) -> None:
        deriver = CoefficientDeriver()
        emp, imputed = deriver.employment_coefficients(
            state="X",
            industries=["A", "B"],
            total_va=np.array([0.0, 2.0e6]),
            employment={"A": 50.0, "B": 30.0},
        )
        assert imputed.tolist() == [True, False]
        np.testing.assert_array_almost_equal(emp, [15.0, 15.0])
