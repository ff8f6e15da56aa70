"""Multiplier records: the contract between offline derivation and request-time impact.

A MultiplierRecord is computed once per (state, sector) by the batch and is
read-only afterwards. Consumers select values by Metric / MultiplierType tag.
"""

from pydantic import Field

from gaming_impact.models.common import GamingImpactBase, Metric, MultiplierType


class IndustrySector(GamingImpactBase, frozen=True):
    """A BEA summary-level IO sector."""

    code: str = Field(..., min_length=1, max_length=16)
    name: str = Field(..., min_length=1)
    description: str = ""


class EmploymentRecord(GamingImpactBase, frozen=True):
    """Employment and wages for one (state, IO sector), e.g. from QCEW."""

    state: str = Field(..., min_length=1)
    io_sector: str = Field(..., min_length=1)
    employment: float | None = Field(default=None, ge=0)
    total_wages: float | None = Field(
        default=None,
        ge=0,
        description="Total annual wages in dollars.",
    )


class MultiplierRecord(GamingImpactBase, frozen=True):
    """Direct coefficients and Type I / Type II multipliers for one (state, sector).

    Coefficients are per dollar of output, except ``emp_coef`` which is jobs
    per $1M of value added. Employment multipliers come from the
    employment-weighted Leontief application, not from the VA multipliers.
    """

    state: str = Field(..., min_length=1)
    abbrev: str = Field(default="", max_length=2)
    sector: str = Field(..., min_length=1)
    sector_name: str = ""
    base_year: int = Field(..., ge=1900, le=2100)

    # Direct coefficients
    direct_va_coef: float
    direct_wage_coef: float
    emp_coef: float = Field(..., ge=0, description="Jobs per $1M value added.")
    employment_imputed: bool = Field(
        default=False,
        description="emp_coef came from the state average or the fixed fallback.",
    )
    industry_output_m: float = 0.0

    # Type I
    type_i_output: float
    type_i_va: float
    type_i_wage: float
    type_i_emp: float

    # Type II
    type_ii_output: float
    type_ii_va: float
    type_ii_wage: float
    type_ii_emp: float

    # Employment data joined from the employment table
    employment: float | None = Field(default=None, ge=0)
    total_wages_m: float | None = Field(default=None, ge=0)
    avg_wage: float | None = Field(default=None, ge=0)

    @property
    def key(self) -> tuple[str, str]:
        return (self.state, self.sector)

    def multiplier(self, metric: Metric, kind: MultiplierType) -> float:
        """Return the stored multiplier for ``metric`` at Type I or Type II."""
        pairs = {
            Metric.OUTPUT: (self.type_i_output, self.type_ii_output),
            Metric.GDP: (self.type_i_va, self.type_ii_va),
            Metric.WAGES: (self.type_i_wage, self.type_ii_wage),
            Metric.EMPLOYMENT: (self.type_i_emp, self.type_ii_emp),
        }
        type_i, type_ii = pairs[metric]
        return type_i if kind == MultiplierType.TYPE_I else type_ii

    # --- Derived metrics ---

    @property
    def va_m(self) -> float:
        """Sector value added in $M."""
        return self.industry_output_m * self.direct_va_coef

    @property
    def jobs_per_1m_output_direct(self) -> float:
        return self.emp_coef * self.direct_va_coef

    @property
    def jobs_per_1m_output_type_i(self) -> float:
        return self.jobs_per_1m_output_direct * self.type_i_emp

    @property
    def jobs_per_1m_output_type_ii(self) -> float:
        return self.jobs_per_1m_output_direct * self.type_ii_emp

    @property
    def jobs_per_1m_gdp_direct(self) -> float:
        return self.emp_coef

    @property
    def jobs_per_1m_gdp_type_i(self) -> float:
        return self.emp_coef * self.type_i_emp

    @property
    def jobs_per_1m_gdp_type_ii(self) -> float:
        return self.emp_coef * self.type_ii_emp
