"""In-memory StateIO tables for one state and one base year.

Loaders (out of scope here) resolve any state-suffixed labels from the
source files and hand over plain sector codes. Values are in dollars.
"""

from dataclasses import dataclass, field

import numpy as np

VALUE_ADDED_CODES: tuple[str, str, str] = ("V001", "V002", "V003")
"""Employee compensation, taxes on production, gross operating surplus."""

FINAL_DEMAND_PREFIX = "F"


@dataclass(frozen=True)
class StateIOSnapshot:
    """Make, Use, output and value-added tables for one state.

    Attributes:
        make: Industry × commodity Make matrix V.
        make_industries / make_commodities: Row / column codes of ``make``.
        use: Commodity × column Use matrix. Rows may include value-added
            codes; columns include industries and final-demand columns
            (codes starting with "F", PCE is "F010").
        use_rows / use_columns: Row / column codes of ``use``.
        industry_output: Industry code → output g.
        commodity_output: Commodity code → output q.
        value_added: "V001"/"V002"/"V003" → industry code → value.
    """

    state: str
    abbrev: str
    base_year: int
    make: np.ndarray
    make_industries: list[str]
    make_commodities: list[str]
    use: np.ndarray
    use_rows: list[str]
    use_columns: list[str]
    industry_output: dict[str, float]
    commodity_output: dict[str, float]
    value_added: dict[str, dict[str, float]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        make = np.asarray(self.make, dtype=np.float64)
        use = np.asarray(self.use, dtype=np.float64)
        object.__setattr__(self, "make", make)
        object.__setattr__(self, "use", use)

        if make.shape != (len(self.make_industries), len(self.make_commodities)):
            msg = (
                f"dimension mismatch: make is {make.shape[0]}×{make.shape[1]} but has "
                f"{len(self.make_industries)} row codes and {len(self.make_commodities)} column codes."
            )
            raise ValueError(msg)
        if use.shape != (len(self.use_rows), len(self.use_columns)):
            msg = (
                f"dimension mismatch: use is {use.shape[0]}×{use.shape[1]} but has "
                f"{len(self.use_rows)} row codes and {len(self.use_columns)} column codes."
            )
            raise ValueError(msg)
        for label, codes in (
            ("make_industries", self.make_industries),
            ("make_commodities", self.make_commodities),
            ("use_rows", self.use_rows),
            ("use_columns", self.use_columns),
        ):
            if len(set(codes)) != len(codes):
                msg = f"{label} contains duplicate codes."
                raise ValueError(msg)

    def use_column(self, code: str, rows: list[str]) -> np.ndarray | None:
        """Use-table column ``code`` aligned to ``rows`` (missing rows → NaN).

        Returns None when the column does not exist.
        """
        if code not in self.use_columns:
            return None
        col = self.use_columns.index(code)
        row_index = {c: i for i, c in enumerate(self.use_rows)}
        return np.array(
            [self.use[row_index[r], col] if r in row_index else np.nan for r in rows],
            dtype=np.float64,
        )
