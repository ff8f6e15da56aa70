"""Request-time impact decomposition.

Pure O(1) arithmetic over a stored MultiplierRecord: no matrix algebra and
no hidden state, so it is safe to call concurrently.

Revenue is direct output in $M. Dollar metrics come back in $M and
employment in jobs.

Employment uses the ratio path:
    direct   = user employment, or deflate(gdp_direct) × emp_coef
    indirect = direct × (TypeI_emp − 1)
    induced  = direct × (TypeII_emp − TypeI_emp)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import TYPE_CHECKING

from gaming_impact.data.sectors import DEPARTMENT_SECTORS
from gaming_impact.engine.deflation import Deflator
from gaming_impact.engine.numerics import safe_divide
from gaming_impact.errors import InvalidInputError, NoDataError
from gaming_impact.models.common import Department, Metric, ValueSource
from gaming_impact.models.impact import (
    CombinedImpactResult,
    DepartmentImpact,
    EffectBreakdown,
    ImpactResult,
)
from gaming_impact.models.multipliers import MultiplierRecord

if TYPE_CHECKING:
    from gaming_impact.engine.multiplier_table import MultiplierTable

logger = logging.getLogger(__name__)


def _check_revenue(revenue: float) -> float:
    revenue = float(revenue)
    if not math.isfinite(revenue) or revenue <= 0:
        msg = f"Revenue must be a positive number (got {revenue})."
        raise InvalidInputError(msg, details={"revenue": revenue})
    return revenue


def _check_override(name: str, value: float | None) -> float | None:
    if value is None:
        return None
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        msg = f"{name} override must be a positive number (got {value})."
        raise InvalidInputError(msg, details={name: value})
    return value


def _breakdown(direct: float, indirect: float, induced: float, source: ValueSource) -> EffectBreakdown:
    return EffectBreakdown(
        direct=direct,
        indirect=indirect,
        induced=induced,
        total=direct + indirect + induced,
        source=source,
    )


def effect_multipliers(breakdowns: Mapping[Metric, EffectBreakdown]) -> dict[Metric, float]:
    """total / direct per metric; 0.0 where direct is zero."""
    return {m: float(safe_divide(b.total, b.direct)) for m, b in breakdowns.items()}


class ImpactDecomposer:
    """Splits a revenue figure into direct, indirect and induced effects."""

    def __init__(self, deflator: Deflator | None = None) -> None:
        self._deflator = deflator or Deflator()

    def decompose(
        self,
        record: MultiplierRecord,
        revenue: float,
        *,
        direct_employment: float | None = None,
        direct_wages: float | None = None,
        analysis_year: int | None = None,
    ) -> ImpactResult:
        """Decompose ``revenue`` ($M) with the multipliers in ``record``.

        Args:
            record: Multipliers for the (state, sector).
            revenue: Direct output in $M; must be > 0.
            direct_employment: Actual direct jobs, replacing the calculated figure.
            direct_wages: Actual direct wages in $M, replacing the calculated figure.
            analysis_year: Year the revenue is denominated in; used to deflate
                GDP before applying the employment coefficient.

        Raises:
            InvalidInputError: Non-positive revenue or override.
        """
        revenue = _check_revenue(revenue)
        direct_employment = _check_override("direct_employment", direct_employment)
        direct_wages = _check_override("direct_wages", direct_wages)
        deflator = self._deflator.for_year(analysis_year)

        r = record
        output = _breakdown(
            revenue,
            revenue * (r.type_i_output - 1),
            revenue * (r.type_ii_output - r.type_i_output),
            ValueSource.CALCULATED,
        )

        gdp_direct = revenue * r.direct_va_coef
        gdp = _breakdown(
            gdp_direct,
            revenue * r.type_i_va - gdp_direct,
            revenue * r.type_ii_va - revenue * r.type_i_va,
            ValueSource.CALCULATED,
        )

        if direct_wages is None:
            wage_direct = revenue * r.direct_wage_coef
            wage_source = ValueSource.CALCULATED
        else:
            wage_direct = direct_wages
            wage_source = ValueSource.USER
        # Indirect wages net out the direct wage share actually paid
        wage_coef = wage_direct / revenue
        wages = _breakdown(
            wage_direct,
            revenue * r.type_i_wage - revenue * wage_coef,
            revenue * (r.type_ii_wage - r.type_i_wage),
            wage_source,
        )

        if direct_employment is None:
            emp_direct = gdp_direct * deflator * r.emp_coef
            emp_source = ValueSource.CALCULATED
        else:
            emp_direct = direct_employment
            emp_source = ValueSource.USER
        employment = _breakdown(
            emp_direct,
            emp_direct * (r.type_i_emp - 1),
            emp_direct * (r.type_ii_emp - r.type_i_emp),
            emp_source,
        )

        breakdowns = {
            Metric.OUTPUT: output,
            Metric.GDP: gdp,
            Metric.EMPLOYMENT: employment,
            Metric.WAGES: wages,
        }
        return ImpactResult(
            state=r.state,
            sector=r.sector,
            sector_name=r.sector_name,
            revenue=revenue,
            analysis_year=analysis_year,
            deflator=deflator,
            output=output,
            gdp=gdp,
            employment=employment,
            wages=wages,
            multipliers=effect_multipliers(breakdowns),
        )

    def decompose_combined(
        self,
        table: MultiplierTable,
        state: str,
        revenues: Mapping[Department, float | None],
        *,
        known: Mapping[Department, tuple[float | None, float | None]] | None = None,
        analysis_year: int | None = None,
    ) -> CombinedImpactResult:
        """Decompose each department's revenue through its own sector and sum.

        Departments with no revenue are skipped, as are departments whose
        sector has no multipliers in the state.

        Args:
            table: Multiplier table to read records from.
            state: State name; resolved by the table.
            revenues: Department → revenue in $M.
            known: Department → (direct employment, direct wages $M) overrides.
            analysis_year: Year for deflation.

        Raises:
            StateNotFoundError / AmbiguousStateError: Unresolvable state.
            InvalidInputError: Negative revenue, or no department left to compute.
        """
        known = known or {}
        state = table.resolve_state(state)

        departments: list[DepartmentImpact] = []
        for department in Department:
            revenue = revenues.get(department)
            if revenue is None or revenue == 0:
                continue
            sector, label = DEPARTMENT_SECTORS[department]
            try:
                record = table.get(state, sector)
            except NoDataError:
                logger.info("%s: no multipliers for %s (%s); skipping", state, label, sector)
                continue
            jobs, wages = known.get(department, (None, None))
            result = self.decompose(
                record,
                revenue,
                direct_employment=jobs,
                direct_wages=wages,
                analysis_year=analysis_year,
            )
            departments.append(DepartmentImpact(department=department, label=label, result=result))

        if not departments:
            msg = f"No department with revenue and multiplier data in {state}."
            raise InvalidInputError(msg, details={"state": state})

        totals: dict[Metric, EffectBreakdown] = {}
        for metric in Metric:
            parts = [d.result.breakdown(metric) for d in departments]
            any_user = any(p.source == ValueSource.USER for p in parts)
            totals[metric] = EffectBreakdown(
                direct=sum(p.direct for p in parts),
                indirect=sum(p.indirect for p in parts),
                induced=sum(p.induced for p in parts),
                total=sum(p.total for p in parts),
                source=ValueSource.USER if any_user else ValueSource.CALCULATED,
            )

        return CombinedImpactResult(
            state=state,
            by_department=departments,
            totals=totals,
            multipliers=effect_multipliers(totals),
        )
