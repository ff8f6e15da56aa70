"""Tests for Type I / Type II multipliers and MultiplierRecord emission."""

import numpy as np
import pytest

from gaming_impact.data.sectors import TARGET_SECTOR_CODES
from gaming_impact.engine.coefficients import CoefficientDeriver
from gaming_impact.engine.multipliers import MultiplierCalculator, augment_with_households
from gaming_impact.engine.requirements import MatrixModelBuilder
from gaming_impact.models.common import Metric, MultiplierType


def _pipeline(snapshot, employment_records=()):
    model = MatrixModelBuilder().build(snapshot)
    by_sector = {e.io_sector: e for e in employment_records}
    coefficients = CoefficientDeriver().derive(
        snapshot=snapshot,
        model=model,
        employment={k: e.employment for k, e in by_sector.items()},
    )
    return model, coefficients, by_sector


def _records(snapshot, employment_records=()):
    model, coefficients, by_sector = _pipeline(snapshot, employment_records)
    return MultiplierCalculator().calculate(
        abbrev=snapshot.abbrev,
        base_year=snapshot.base_year,
        model=model,
        coefficients=coefficients,
        target_sectors=TARGET_SECTOR_CODES,
        employment=by_sector,
    )


# ===================================================================
# Household augmentation
# ===================================================================


class TestAugmentation:

    def test_block_layout(self) -> None:
        A = np.array([[0.1, 0.2], [0.3, 0.4]])
        A_bar = augment_with_households(A, np.array([0.5, 0.6]), np.array([0.7, 0.8]))
        np.testing.assert_array_equal(A_bar, [
            [0.1, 0.2, 0.7],
            [0.3, 0.4, 0.8],
            [0.5, 0.6, 0.0],
        ])


# ===================================================================
# Multiplier vectors
# ===================================================================


class TestMultiplierVectors:

    def test_type_i_output_is_column_sum_of_L(self, nevada) -> None:
        model, coefficients, _ = _pipeline(nevada)
        vec = MultiplierCalculator().vectors(model=model, coefficients=coefficients)
        np.testing.assert_array_almost_equal(vec.type1_output, model.L.sum(axis=0))

    def test_type_ii_uses_industry_block_only(self, nevada) -> None:
        model, coefficients, _ = _pipeline(nevada)
        vec = MultiplierCalculator().vectors(model=model, coefficients=coefficients)
        np.testing.assert_array_almost_equal(vec.type2_output, vec.L2[:5, :5].sum(axis=0))
        assert vec.L2.shape == (6, 6)

    def test_va_multiplier_is_weighted_L(self, nevada) -> None:
        model, coefficients, _ = _pipeline(nevada)
        vec = MultiplierCalculator().vectors(model=model, coefficients=coefficients)
        np.testing.assert_array_almost_equal(vec.type1_va, coefficients.va_coef @ model.L)

    def test_no_pce_makes_type_ii_equal_type_i_output(self, snapshot_factory) -> None:
        model, coefficients, _ = _pipeline(snapshot_factory(with_pce=False))
        vec = MultiplierCalculator().vectors(model=model, coefficients=coefficients)
        np.testing.assert_array_almost_equal(vec.type2_output, vec.type1_output)

    def test_employment_multiplier_ratio_form(self, nevada, nevada_employment) -> None:
        model, coefficients, _ = _pipeline(nevada, nevada_employment)
        vec = MultiplierCalculator().vectors(model=model, coefficients=coefficients)
        raw = coefficients.emp_coef @ model.L
        expected = raw / (coefficients.emp_coef * coefficients.va_coef)
        np.testing.assert_array_almost_equal(vec.type1_emp, expected)

    def test_zero_employment_coefficient_gives_unit_multiplier(self, nevada) -> None:
        model, coefficients, _ = _pipeline(nevada)
        object.__setattr__(coefficients, "emp_coef", np.zeros(5))
        vec = MultiplierCalculator().vectors(model=model, coefficients=coefficients)
        np.testing.assert_array_equal(vec.type1_emp, np.ones(5))
        np.testing.assert_array_equal(vec.type2_emp, np.ones(5))


# ===================================================================
# Invariants over emitted records
# ===================================================================


class TestRecordInvariants:

    @pytest.mark.parametrize("intensity", [0.5, 1.0, 1.5])
    def test_type_i_output_at_least_one(self, snapshot_factory, intensity) -> None:
        result = _records(snapshot_factory(intensity=intensity))
        for record in result.records:
            assert record.type_i_output >= 1.0

    @pytest.mark.parametrize("intensity", [0.5, 1.0, 1.5])
    def test_type_ii_at_least_type_i_for_every_metric(self, snapshot_factory, employment_factory, intensity) -> None:
        result = _records(snapshot_factory(intensity=intensity), employment_factory())
        for record in result.records:
            for metric in Metric:
                assert record.multiplier(metric, MultiplierType.TYPE_II) >= (
                    record.multiplier(metric, MultiplierType.TYPE_I) - 1e-12
                )

    def test_va_coefficient_in_unit_interval(self, nevada) -> None:
        for record in _records(nevada).records:
            assert 0.0 <= record.direct_va_coef <= 1.0

    def test_type_i_employment_at_least_one(self, nevada, nevada_employment) -> None:
        for record in _records(nevada, nevada_employment).records:
            assert record.type_i_emp >= 1.0


# ===================================================================
# Record contents
# ===================================================================


class TestCalculate:

    def test_one_record_per_target_sector(self, nevada) -> None:
        result = _records(nevada)
        assert [r.sector for r in result.records] == list(TARGET_SECTOR_CODES)
        assert result.missing_sectors == []
        assert {r.state for r in result.records} == {"Nevada"}

    def test_missing_sector_reported(self, snapshot_factory) -> None:
        result = _records(snapshot_factory(drop=("721",)))
        assert "721" not in [r.sector for r in result.records]
        assert result.missing_sectors == ["721"]

    def test_record_fields(self, nevada, nevada_employment) -> None:
        record = next(r for r in _records(nevada, nevada_employment).records if r.sector == "713")
        assert record.abbrev == "NV"
        assert record.base_year == 2019
        assert record.sector_name == "Amusement, Gambling, Recreation"
        assert record.direct_va_coef == pytest.approx(0.79)
        assert record.industry_output_m == pytest.approx(1000.0)
        assert record.employment == 9000.0
        assert record.total_wages_m == pytest.approx(450.0)
        assert record.avg_wage == pytest.approx(50_000.0)
        assert record.emp_coef == pytest.approx(9000.0 / 790.0)
        assert not record.employment_imputed

    def test_imputed_flag_without_employment(self, nevada) -> None:
        record = _records(nevada).records[0]
        assert record.employment_imputed
        assert record.employment is None
        assert record.avg_wage is None
