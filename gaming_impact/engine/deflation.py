"""CPI deflator: current-year dollars → IO base-year dollars.

Employment coefficients are calibrated to the IO table vintage. GDP figures
entered by users are in current dollars, so they are deflated before being
multiplied by a coefficient; otherwise jobs are overstated for every year
after the base year.
"""

from __future__ import annotations

from collections.abc import Mapping

from gaming_impact.data.cpi import CPI_ANNUAL_AVG, CPI_BASE_YEAR
from gaming_impact.errors import InvalidInputError


class Deflator:
    """deflator(year) = CPI[base_year] / CPI[year].

    Years missing from the CPI table use the latest available year.
    """

    def __init__(
        self,
        cpi: Mapping[int, float] | None = None,
        base_year: int = CPI_BASE_YEAR,
    ) -> None:
        table = dict(CPI_ANNUAL_AVG if cpi is None else cpi)
        if base_year not in table:
            msg = f"CPI table has no value for base year {base_year}."
            raise InvalidInputError(msg, details={"base_year": base_year})
        if any(v <= 0 for v in table.values()):
            msg = "CPI values must be positive."
            raise InvalidInputError(msg)
        self._cpi = table
        self._base_year = base_year
        self._latest_year = max(table)

    @property
    def base_year(self) -> int:
        return self._base_year

    def cpi_for(self, year: int) -> float:
        return self._cpi.get(year, self._cpi[self._latest_year])

    def for_year(self, year: int | None) -> float:
        """Deflator for ``year``; 1.0 when no year is given."""
        if year is None:
            return 1.0
        return self._cpi[self._base_year] / self.cpi_for(year)

    def deflate(self, amount: float, year: int | None) -> float:
        """Express ``amount`` (in ``year`` dollars) in base-year dollars."""
        return amount * self.for_year(year)
