"""NAICS → BEA summary IO sector concordance.

Rolls NAICS-level employment and wages (e.g. QCEW private-sector state
totals) up to the IO sectors used by the StateIO tables, so that employment
coefficients can be built for every sector of the economy, not just the
target sectors.

Lookup tries the full NAICS code, then its 4-, 3- and 2-digit prefixes.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from gaming_impact.models.multipliers import EmploymentRecord

logger = logging.getLogger(__name__)

# naics_prefix -> io_sector
NAICS_TO_IO: dict[str, str] = {
    # Agriculture, forestry, fishing
    "111": "111CA", "112": "111CA",
    "113": "113FF", "114": "113FF", "115": "113FF",
    # Mining
    "211": "211", "212": "212", "213": "213",
    # Utilities, construction
    "22": "22", "221": "22",
    "23": "23", "236": "23", "237": "23", "238": "23",
    # Manufacturing
    "311": "311FT", "312": "311FT",
    "313": "313TT", "314": "313TT",
    "315": "315AL", "316": "315AL",
    "321": "321", "322": "322", "323": "323",
    "324": "324", "325": "325", "326": "326",
    "327": "327", "331": "331", "332": "332",
    "333": "333", "334": "334", "335": "335",
    "3361": "3361MV", "3362": "3361MV", "3363": "3361MV",
    "3364": "3364OT", "3365": "3364OT", "3366": "3364OT", "3369": "3364OT",
    "337": "337", "339": "339",
    # Wholesale and retail trade
    "42": "42", "423": "42", "424": "42", "425": "42",
    "441": "441", "445": "445",
    "452": "452", "455": "452",
    "444": "4A0", "449": "4A0", "456": "4A0", "457": "4A0", "458": "4A0", "459": "4A0",
    # Transportation and warehousing
    "481": "481", "482": "482", "483": "483", "484": "484",
    "485": "485", "486": "486",
    "487": "487OS", "488": "487OS", "491": "487OS", "492": "487OS",
    "493": "493",
    # Information
    "511": "511", "512": "512",
    "515": "513", "517": "513",
    "518": "514", "519": "514",
    # Finance and insurance
    "521": "521CI", "522": "521CI",
    "523": "523", "524": "524", "525": "525",
    # Real estate, rental and leasing
    "531": "HS", "5311": "ORE", "5312": "ORE",
    "532": "532RL", "533": "532RL",
    # Professional services
    "5411": "5411", "5415": "5415",
    "5412": "5412OP", "5413": "5412OP", "5414": "5412OP", "5416": "5412OP",
    "5417": "5412OP", "5418": "5412OP", "5419": "5412OP",
    # Management, administrative, waste
    "55": "55", "551": "55",
    "561": "561", "562": "562",
    # Education, health, social assistance
    "61": "61", "611": "61",
    "621": "621", "622": "622", "623": "623", "624": "624",
    # Arts, entertainment, recreation, accommodation, food
    "711": "711AS", "712": "711AS", "713": "713",
    "721": "721", "722": "722",
    # Other services
    "81": "81", "811": "81", "812": "81", "813": "81", "814": "81",
    # Government
    "92": "GSLG", "921": "GSLG", "922": "GSLG", "923": "GSLG", "924": "GSLG",
    "925": "GSLG", "926": "GSLG", "927": "GSLG", "999": "GSLG",
    "928": "GFGD",
}


@dataclass(frozen=True)
class NaicsEmployment:
    """One NAICS-level employment row for a state."""

    state: str
    naics: str
    employment: float
    total_wages: float


def find_io_sector(naics: str, mapping: dict[str, str] | None = None) -> str | None:
    """Map a NAICS code to its IO sector, or None if unmapped."""
    table = mapping or NAICS_TO_IO
    naics = naics.strip()
    for length in (len(naics), 4, 3, 2):
        if length > len(naics):
            continue
        sector = table.get(naics[:length])
        if sector is not None:
            return sector
    return None


def aggregate_employment(
    rows: Iterable[NaicsEmployment],
    mapping: dict[str, str] | None = None,
) -> list[EmploymentRecord]:
    """Sum NAICS employment and wages into (state, IO sector) records.

    Unmapped NAICS codes are dropped and logged. Output is sorted by
    state then sector.
    """
    employment: dict[tuple[str, str], float] = defaultdict(float)
    wages: dict[tuple[str, str], float] = defaultdict(float)
    unmapped: set[str] = set()

    for row in rows:
        sector = find_io_sector(row.naics, mapping)
        if sector is None:
            unmapped.add(row.naics)
            continue
        key = (row.state, sector)
        employment[key] += row.employment
        wages[key] += row.total_wages

    if unmapped:
        logger.warning("Unmapped NAICS codes dropped: %s", ", ".join(sorted(unmapped)))

    return [
        EmploymentRecord(
            state=state,
            io_sector=sector,
            employment=employment[(state, sector)],
            total_wages=wages[(state, sector)],
        )
        for state, sector in sorted(employment)
    ]
