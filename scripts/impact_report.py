"""Print the economic impact of casino revenue in one state.

Reads a multiplier table written by the offline batch.

Usage:
    python -m scripts.impact_report --state Nevada --revenue 100
    python -m scripts.impact_report --state "New Jersey" --sector 722 \\
        --revenue 25 --year 2024 --employment 310
    python -m scripts.impact_report --compare --revenue 100
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from gaming_impact.config.settings import get_settings
from gaming_impact.engine.deflation import Deflator
from gaming_impact.engine.impact import ImpactDecomposer
from gaming_impact.engine.multiplier_table import MultiplierTable
from gaming_impact.errors import GamingImpactError
from gaming_impact.models.common import Metric
from gaming_impact.models.impact import ImpactResult
from gaming_impact.observability.logging import configure_logging


def _print_result(result: ImpactResult) -> None:
    """Print one impact table."""
    w = 72
    print("=" * w)
    print(f"  {result.state} / {result.sector} {result.sector_name}")
    print(f"  Revenue: ${result.revenue:,.2f}M", end="")
    if result.analysis_year is not None:
        print(f"  ({result.analysis_year} dollars, deflator {result.deflator:.4f})")
    else:
        print()
    print("=" * w)
    print(
        f"  {'Metric':<18} {'Direct':>10} {'Indirect':>10}"
        f" {'Induced':>10} {'Total':>10} {'Mult':>7}"
    )
    for row in result.summary_rows():
        flag = " *" if row["source"] == "user" else ""
        print(
            f"  {row['metric']:<18} {row['direct']:>10,} {row['indirect']:>10,}"
            f" {row['induced']:>10,} {row['total']:>10,} {row['multiplier']:>7}{flag}"
        )
    if result.has_user_data:
        print()
        print("  * direct figure supplied by the user")


def _print_comparison(results: list[ImpactResult]) -> None:
    """Print a ranked state comparison."""
    print(f"  {'State':<16} {'Output mult':>11} {'Total jobs':>11} {'Total GDP $M':>13}")
    for r in results:
        print(
            f"  {r.state:<16} {r.multipliers[Metric.OUTPUT]:>11.3f}"
            f" {r.employment.total:>11,.0f} {r.gdp.total:>13,.2f}"
        )


def main() -> int:
    """Run the report."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Casino revenue economic impact")
    parser.add_argument(
        "--table", type=Path, default=Path(settings.MULTIPLIER_TABLE_PATH),
        help="Multiplier table CSV",
    )
    parser.add_argument("--state", default=None, help="State name or two-letter code")
    parser.add_argument("--sector", default="713", help="IO sector code (default 713)")
    parser.add_argument("--revenue", type=float, required=True, help="Revenue in $M")
    parser.add_argument("--year", type=int, default=None, help="Analysis year for deflation")
    parser.add_argument("--employment", type=float, default=None, help="Actual direct jobs")
    parser.add_argument("--wages", type=float, default=None, help="Actual direct wages in $M")
    parser.add_argument("--compare", action="store_true", help="Compare all states")
    args = parser.parse_args()

    log = configure_logging(settings)
    table = MultiplierTable.from_csv(
        args.table,
        match_cutoff=settings.STATE_MATCH_CUTOFF,
        suggestion_sample=settings.STATE_SUGGESTION_SAMPLE,
    )
    log.info("multiplier_table_loaded", path=str(args.table), records=len(table), checksum=table.checksum)
    decomposer = ImpactDecomposer(Deflator(base_year=settings.IO_BASE_YEAR))

    try:
        if args.compare:
            _print_comparison(table.compare_states(decomposer, args.revenue, args.sector))
            return 0
        if args.state is None:
            parser.error("--state is required unless --compare is given")
        record = table.get(args.state, args.sector)
        result = decomposer.decompose(
            record,
            args.revenue,
            direct_employment=args.employment,
            direct_wages=args.wages,
            analysis_year=args.year,
        )
    except GamingImpactError as exc:
        log.error("impact_request_rejected", **exc.to_dict())
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
