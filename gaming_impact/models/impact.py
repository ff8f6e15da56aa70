"""Impact results. Request-scoped, never persisted."""

from pydantic import Field, computed_field

from gaming_impact.models.common import (
    Department,
    EffectType,
    GamingImpactBase,
    Metric,
    ValueSource,
)

METRIC_LABELS: dict[Metric, str] = {
    Metric.OUTPUT: "Output ($M)",
    Metric.GDP: "GDP ($M)",
    Metric.EMPLOYMENT: "Employment (Jobs)",
    Metric.WAGES: "Wages ($M)",
}


class EffectBreakdown(GamingImpactBase, frozen=True):
    """Direct / indirect / induced / total for one metric."""

    direct: float
    indirect: float
    induced: float
    total: float
    source: ValueSource = ValueSource.CALCULATED

    def get(self, effect: EffectType) -> float:
        return {
            EffectType.DIRECT: self.direct,
            EffectType.INDIRECT: self.indirect,
            EffectType.INDUCED: self.induced,
            EffectType.TOTAL: self.total,
        }[effect]


class ImpactResult(GamingImpactBase, frozen=True):
    """Decomposed impact of one revenue figure in one (state, sector).

    Dollar metrics are in $M; employment is in jobs. ``multipliers`` holds
    total/direct per metric, recomputed from the breakdowns.
    """

    state: str
    sector: str
    sector_name: str = ""
    revenue: float = Field(..., gt=0, description="Direct output in $M.")
    analysis_year: int | None = None
    deflator: float = Field(default=1.0, gt=0)

    output: EffectBreakdown
    gdp: EffectBreakdown
    employment: EffectBreakdown
    wages: EffectBreakdown
    multipliers: dict[Metric, float]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_user_data(self) -> bool:
        """True if any direct figure came from a user override."""
        return any(
            self.breakdown(m).source == ValueSource.USER for m in Metric
        )

    def breakdown(self, metric: Metric) -> EffectBreakdown:
        return {
            Metric.OUTPUT: self.output,
            Metric.GDP: self.gdp,
            Metric.EMPLOYMENT: self.employment,
            Metric.WAGES: self.wages,
        }[metric]

    def summary_rows(self) -> list[dict[str, object]]:
        """Display table: dollars to 2 decimals, jobs to 0, multipliers to 3."""
        rows: list[dict[str, object]] = []
        for metric in Metric:
            b = self.breakdown(metric)
            digits = 0 if metric == Metric.EMPLOYMENT else 2
            rows.append({
                "metric": METRIC_LABELS[metric],
                "direct": round(b.direct, digits),
                "indirect": round(b.indirect, digits),
                "induced": round(b.induced, digits),
                "total": round(b.total, digits),
                "multiplier": round(self.multipliers[metric], 3),
                "source": b.source.value,
            })
        return rows


class DepartmentImpact(GamingImpactBase, frozen=True):
    """One revenue stream of a property and its decomposed impact."""

    department: Department
    label: str
    result: ImpactResult


class CombinedImpactResult(GamingImpactBase, frozen=True):
    """Impact of a property's revenue streams, each through its own sector."""

    state: str
    by_department: list[DepartmentImpact]
    totals: dict[Metric, EffectBreakdown]
    multipliers: dict[Metric, float]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_user_data(self) -> bool:
        return any(d.result.has_user_data for d in self.by_department)
