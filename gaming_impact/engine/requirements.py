"""Direct requirements and Leontief inverse per state (Industry Technology Assumption).

    D[i,c] = V[i,c] / q[c]      market shares        (industry × commodity)
    B[c,j] = U[c,j] / g[j]      commodity inputs     (commodity × industry)
    A      = D · B              direct requirements  (industry × industry)
    L      = (I - A)^-1         Type I Leontief inverse

Pure deterministic functions. Invalid divisions give 0 (see numerics).
"""

import logging
from dataclasses import dataclass

import numpy as np
from scipy import linalg as scipy_linalg

from gaming_impact.engine.numerics import safe_divide
from gaming_impact.engine.snapshot import (
    FINAL_DEMAND_PREFIX,
    VALUE_ADDED_CODES,
    StateIOSnapshot,
)
from gaming_impact.errors import DataAlignmentError, SingularMatrixError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlignedSectors:
    """Common industry and commodity codes, in Make-table order."""

    industries: list[str]
    commodities: list[str]


@dataclass(frozen=True)
class DirectRequirementsModel:
    """Aligned tables plus D, B, A and the Type I inverse L for one state."""

    state: str
    industries: list[str]
    commodities: list[str]
    V: np.ndarray
    U: np.ndarray
    g: np.ndarray
    q: np.ndarray
    D: np.ndarray
    B: np.ndarray
    A: np.ndarray
    L: np.ndarray

    @property
    def n(self) -> int:
        return len(self.industries)

    def index_of(self, industry: str) -> int | None:
        try:
            return self.industries.index(industry)
        except ValueError:
            return None


def leontief_inverse(A: np.ndarray, *, state: str, label: str = "I - A") -> np.ndarray:
    """Return (I - A)^-1.

    Solves (I - A) · L = I with scipy's LU solver rather than inverting
    explicitly.

    Raises:
        SingularMatrixError: If (I - A) is singular or the result is not finite.
    """
    n = A.shape[0]
    identity = np.eye(n)
    try:
        L = scipy_linalg.solve(identity - A, identity)
    except (scipy_linalg.LinAlgError, ValueError) as exc:
        raise SingularMatrixError(
            state, f"({label}) is not invertible: {exc}", details={"matrix": label, "n": n},
        ) from exc
    L = np.asarray(L)
    if not np.all(np.isfinite(L)):
        raise SingularMatrixError(
            state, f"({label}) inverse is not finite", details={"matrix": label, "n": n},
        )
    return L


class MatrixModelBuilder:
    """Builds the direct requirements model and Type I inverse for a state."""

    def align(self, snapshot: StateIOSnapshot) -> AlignedSectors:
        """Intersect codes across Make, Use and output vectors.

        Industries: Make rows ∩ Use industry columns ∩ g.
        Commodities: Make columns ∩ Use commodity rows ∩ q.
        Value-added rows and final-demand columns never count as sectors.
        """
        use_industries = {
            c for c in snapshot.use_columns if not c.startswith(FINAL_DEMAND_PREFIX)
        }
        use_commodities = {c for c in snapshot.use_rows if c not in VALUE_ADDED_CODES}

        industries = [
            c for c in snapshot.make_industries
            if c in use_industries and c in snapshot.industry_output
        ]
        commodities = [
            c for c in snapshot.make_commodities
            if c in use_commodities and c in snapshot.commodity_output
        ]
        return AlignedSectors(industries=industries, commodities=commodities)

    def build(self, snapshot: StateIOSnapshot) -> DirectRequirementsModel:
        """Compute D, B, A and L for one state.

        Raises:
            DataAlignmentError: If the common industry or commodity set is empty.
            SingularMatrixError: If (I - A) cannot be inverted.
        """
        aligned = self.align(snapshot)
        if not aligned.industries or not aligned.commodities:
            raise DataAlignmentError(
                snapshot.state,
                "no common sectors across Make, Use and output tables",
                details={
                    "industries": len(aligned.industries),
                    "commodities": len(aligned.commodities),
                },
            )

        inds, coms = aligned.industries, aligned.commodities

        make_rows = {c: i for i, c in enumerate(snapshot.make_industries)}
        make_cols = {c: i for i, c in enumerate(snapshot.make_commodities)}
        use_rows = {c: i for i, c in enumerate(snapshot.use_rows)}
        use_cols = {c: i for i, c in enumerate(snapshot.use_columns)}

        V = snapshot.make[np.ix_([make_rows[c] for c in inds], [make_cols[c] for c in coms])]
        U = snapshot.use[np.ix_([use_rows[c] for c in coms], [use_cols[c] for c in inds])]
        g = np.array([snapshot.industry_output[c] for c in inds], dtype=np.float64)
        q = np.array([snapshot.commodity_output[c] for c in coms], dtype=np.float64)

        D = safe_divide(V, q[np.newaxis, :])
        B = safe_divide(U, g[np.newaxis, :])
        A = D @ B
        L = leontief_inverse(A, state=snapshot.state)

        logger.debug(
            "Built requirements for %s: %d industries, %d commodities",
            snapshot.state, len(inds), len(coms),
        )

        return DirectRequirementsModel(
            state=snapshot.state,
            industries=list(inds),
            commodities=list(coms),
            V=V,
            U=U,
            g=g,
            q=q,
            D=D,
            B=B,
            A=A,
            L=L,
        )
