"""Tests for multiplier plausibility checks."""

import pytest

from gaming_impact.quality.models import ValidationCheck, ValidationSeverity
from gaming_impact.quality.validation import (
    check_cross_state_variation,
    check_record,
    validate_records,
)


class TestCheckRecord:

    def test_plausible_record_has_no_warnings(self, nevada_gaming) -> None:
        assert check_record(nevada_gaming) == []

    def test_type_i_below_one(self, record_factory) -> None:
        warnings = check_record(record_factory(type_i_output=0.97))
        assert [w.check for w in warnings] == [ValidationCheck.TYPE_I_BELOW_ONE]
        assert warnings[0].value == pytest.approx(0.97)
        assert warnings[0].severity == ValidationSeverity.WARNING

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("type_ii_output", 1.40),
            ("type_ii_va", 0.70),
            ("type_ii_wage", 0.40),
            ("type_ii_emp", 2.00),
        ],
    )
    def test_type_ii_below_type_i(self, record_factory, field, value) -> None:
        warnings = check_record(record_factory(**{field: value}))
        assert [w.check for w in warnings] == [ValidationCheck.TYPE_II_BELOW_TYPE_I]
        assert warnings[0].value < 0

    def test_equal_type_i_and_type_ii_allowed(self, record_factory) -> None:
        assert check_record(record_factory(type_ii_output=1.4520)) == []

    @pytest.mark.parametrize("va_coef", [-0.05, 1.2])
    def test_va_coefficient_out_of_range(self, record_factory, va_coef) -> None:
        warnings = check_record(record_factory(direct_va_coef=va_coef))
        assert [w.check for w in warnings] == [ValidationCheck.VA_COEF_OUT_OF_RANGE]

    def test_warning_carries_location(self, record_factory) -> None:
        (warning,) = check_record(record_factory("Ohio", "722", type_i_output=0.9, type_ii_output=0.95))
        assert warning.state == "Ohio"
        assert warning.sector == "722"


class TestCrossStateVariation:

    def test_identical_states_flagged(self, record_factory) -> None:
        records = [record_factory(s) for s in ("Nevada", "Ohio", "Iowa")]
        (warning,) = check_cross_state_variation(records)
        assert warning.check == ValidationCheck.LOW_CROSS_STATE_VARIATION
        assert warning.severity == ValidationSeverity.INFO
        assert warning.state is None
        assert warning.sector == "713"

    def test_varied_states_pass(self, record_factory) -> None:
        records = [
            record_factory("Nevada", type_i_output=1.45),
            record_factory("Ohio", type_i_output=1.62),
        ]
        assert check_cross_state_variation(records) == []

    def test_single_state_not_checked(self, nevada_gaming) -> None:
        assert check_cross_state_variation([nevada_gaming]) == []

    def test_threshold_configurable(self, record_factory) -> None:
        records = [
            record_factory("Nevada", type_i_output=1.45),
            record_factory("Ohio", type_i_output=1.50),
        ]
        assert check_cross_state_variation(records, min_sd=0.05)


class TestValidateRecords:

    def test_combines_all_checks(self, record_factory) -> None:
        records = [
            record_factory("Nevada", direct_va_coef=1.1),
            record_factory("Ohio"),
        ]
        checks = [w.check for w in validate_records(records)]
        assert checks == [
            ValidationCheck.VA_COEF_OUT_OF_RANGE,
            ValidationCheck.LOW_CROSS_STATE_VARIATION,
        ]

    def test_accepts_generators(self, record_factory) -> None:
        records = (record_factory(s, type_i_output=1.0 + i / 10) for i, s in enumerate(["Utah", "Iowa"]))
        assert validate_records(records) == []
