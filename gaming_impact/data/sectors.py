"""Target sectors, US states, and the casino department → sector mapping."""

from __future__ import annotations

from gaming_impact.models.common import Department
from gaming_impact.models.multipliers import IndustrySector

TARGET_SECTORS: tuple[IndustrySector, ...] = (
    IndustrySector(
        code="711AS",
        name="Arts, Entertainment, Recreation",
        description="Performing arts, spectator sports, museums",
    ),
    IndustrySector(
        code="713",
        name="Amusement, Gambling, Recreation",
        description="Casinos, gambling, amusement parks, recreation",
    ),
    IndustrySector(
        code="721",
        name="Accommodation",
        description="Hotels, motels, casino hotels",
    ),
    IndustrySector(
        code="722",
        name="Food Services & Drinking Places",
        description="Restaurants, bars, drinking places",
    ),
)

TARGET_SECTOR_CODES: tuple[str, ...] = tuple(s.code for s in TARGET_SECTORS)

SECTOR_NAMES: dict[str, str] = {s.code: s.name for s in TARGET_SECTORS}

# Department revenue streams → (IO sector, display label)
DEPARTMENT_SECTORS: dict[Department, tuple[str, str]] = {
    Department.GAMING: ("713", "Gaming (GGR)"),
    Department.FOOD: ("722", "Food & Beverage"),
    Department.LODGING: ("721", "Lodging"),
    Department.OTHER: ("711AS", "Other"),
}

STATE_ABBREVIATIONS: dict[str, str] = {
    "Alabama": "AL", "Alaska": "AK", "Arizona": "AZ", "Arkansas": "AR",
    "California": "CA", "Colorado": "CO", "Connecticut": "CT", "Delaware": "DE",
    "Florida": "FL", "Georgia": "GA", "Hawaii": "HI", "Idaho": "ID",
    "Illinois": "IL", "Indiana": "IN", "Iowa": "IA", "Kansas": "KS",
    "Kentucky": "KY", "Louisiana": "LA", "Maine": "ME", "Maryland": "MD",
    "Massachusetts": "MA", "Michigan": "MI", "Minnesota": "MN", "Mississippi": "MS",
    "Missouri": "MO", "Montana": "MT", "Nebraska": "NE", "Nevada": "NV",
    "New Hampshire": "NH", "New Jersey": "NJ", "New Mexico": "NM", "New York": "NY",
    "North Carolina": "NC", "North Dakota": "ND", "Ohio": "OH", "Oklahoma": "OK",
    "Oregon": "OR", "Pennsylvania": "PA", "Rhode Island": "RI", "South Carolina": "SC",
    "South Dakota": "SD", "Tennessee": "TN", "Texas": "TX", "Utah": "UT",
    "Vermont": "VT", "Virginia": "VA", "Washington": "WA", "West Virginia": "WV",
    "Wisconsin": "WI", "Wyoming": "WY",
}

STATE_NAMES: tuple[str, ...] = tuple(STATE_ABBREVIATIONS)


def get_sector(code: str) -> IndustrySector | None:
    """Look up a target sector by code."""
    for sector in TARGET_SECTORS:
        if sector.code == code:
            return sector
    return None
