"""Shared pytest fixtures: stored multiplier records."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from gaming_impact.data.sectors import SECTOR_NAMES, STATE_ABBREVIATIONS
from gaming_impact.models.multipliers import MultiplierRecord


def make_record(state: str = "Nevada", sector: str = "713", **overrides: object) -> MultiplierRecord:
    """A stored record shaped like the Nevada gaming row (per $ of output)."""
    fields: dict[str, object] = {
        "state": state,
        "abbrev": STATE_ABBREVIATIONS.get(state, ""),
        "sector": sector,
        "sector_name": SECTOR_NAMES.get(sector, sector),
        "base_year": 2019,
        "direct_va_coef": 0.5516,
        "direct_wage_coef": 0.2890,
        "emp_coef": 12.0,
        "industry_output_m": 14_000.0,
        "type_i_output": 1.4520,
        "type_i_va": 0.7810,
        "type_i_wage": 0.4560,
        "type_i_emp": 2.130,
        "type_ii_output": 1.9860,
        "type_ii_va": 1.0810,
        "type_ii_wage": 0.6320,
        "type_ii_emp": 3.053,
    }
    fields.update(overrides)
    return MultiplierRecord(**fields)


@pytest.fixture()
def record_factory() -> Callable[..., MultiplierRecord]:
    return make_record


@pytest.fixture()
def nevada_gaming() -> MultiplierRecord:
    return make_record()
