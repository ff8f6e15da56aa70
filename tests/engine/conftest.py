"""Shared fixtures for engine tests: a small synthetic state economy.

Five industries, one commodity each, Make = diag(g) so D = I and A equals
the direct-requirements matrix below. Values are dollars.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np
import pytest

from gaming_impact.engine.snapshot import StateIOSnapshot
from gaming_impact.models.multipliers import EmploymentRecord

INDUSTRIES = ["531", "711AS", "713", "721", "722"]

OUTPUT = np.array([2.0e9, 5.0e8, 1.0e9, 8.0e8, 1.2e9])

# Commodity rows × industry columns, per $ of industry output
REQUIREMENTS = np.array([
    [0.10, 0.08, 0.10, 0.12, 0.08],
    [0.01, 0.05, 0.02, 0.01, 0.01],
    [0.00, 0.01, 0.03, 0.01, 0.00],
    [0.01, 0.01, 0.02, 0.02, 0.01],
    [0.01, 0.02, 0.04, 0.03, 0.02],
])

COMPENSATION_SHARE = np.array([0.25, 0.45, 0.35, 0.35, 0.45])
TAX_SHARE = 0.10

# PCE per commodity as a share of total compensation
PCE_SHARE = np.array([0.30, 0.05, 0.08, 0.04, 0.10])

JOBS = {"531": 3000.0, "711AS": 6000.0, "713": 9000.0, "721": 8000.0, "722": 20000.0}


def build_snapshot(
    state: str = "Nevada",
    abbrev: str = "NV",
    *,
    intensity: float = 1.0,
    requirements: np.ndarray | None = None,
    drop: Sequence[str] = (),
    with_pce: bool = True,
    without_va: Sequence[str] = (),
    base_year: int = 2019,
) -> StateIOSnapshot:
    """Build a snapshot; ``intensity`` scales intermediate purchases."""
    req = REQUIREMENTS * intensity if requirements is None else np.asarray(requirements)
    keep = [i for i, c in enumerate(INDUSTRIES) if c not in drop]
    codes = [INDUSTRIES[i] for i in keep]
    g = OUTPUT[keep]
    req = req[np.ix_(keep, keep)]

    use_intermediate = req * g[np.newaxis, :]
    va_total = (1.0 - req.sum(axis=0)) * g
    v001 = va_total * COMPENSATION_SHARE[keep]
    v002 = va_total * TAX_SHARE
    v003 = va_total - v001 - v002

    final_columns = ["F010", "F040"] if with_pce else ["F040"]
    pce = PCE_SHARE[keep] * v001.sum()
    exports = g - use_intermediate.sum(axis=1) - (pce if with_pce else 0.0)
    final = np.column_stack([pce, exports]) if with_pce else exports[:, np.newaxis]

    use = np.vstack([
        np.hstack([use_intermediate, final]),
        np.hstack([np.vstack([v001, v002, v003]), np.zeros((3, len(final_columns)))]),
    ])

    value_added = {
        code: dict(zip(codes, row.tolist()))
        for code, row in (("V001", v001), ("V002", v002), ("V003", v003))
        if code not in without_va
    }

    return StateIOSnapshot(
        state=state,
        abbrev=abbrev,
        base_year=base_year,
        make=np.diag(g),
        make_industries=list(codes),
        make_commodities=list(codes),
        use=use,
        use_rows=[*codes, "V001", "V002", "V003"],
        use_columns=[*codes, *final_columns],
        industry_output=dict(zip(codes, g.tolist())),
        commodity_output=dict(zip(codes, g.tolist())),
        value_added=value_added,
    )


def employment_rows(state: str = "Nevada", jobs: dict[str, float] | None = None) -> list[EmploymentRecord]:
    """Employment records with $50k average wages."""
    jobs = JOBS if jobs is None else jobs
    return [
        EmploymentRecord(state=state, io_sector=code, employment=n, total_wages=n * 50_000.0)
        for code, n in jobs.items()
    ]


@pytest.fixture()
def snapshot_factory() -> Callable[..., StateIOSnapshot]:
    return build_snapshot


@pytest.fixture()
def nevada() -> StateIOSnapshot:
    return build_snapshot()


@pytest.fixture()
def nevada_employment() -> list[EmploymentRecord]:
    return employment_rows()


@pytest.fixture()
def employment_factory() -> Callable[..., list[EmploymentRecord]]:
    return employment_rows
