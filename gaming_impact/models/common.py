"""Shared types, enums, and base models used across Gaming Impact domain models."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def new_uuid7() -> UUID:
    """Generate a new time-sortable UUID v7."""
    return uuid7()


# --- Reusable annotated types ---

UUIDv7 = Annotated[UUID, Field(description="Time-sortable UUID v7.")]


# --- Shared enums ---


class Metric(StrEnum):
    """The four impact metrics reported for every query."""

    OUTPUT = "output"
    GDP = "gdp"
    EMPLOYMENT = "employment"
    WAGES = "wages"


class EffectType(StrEnum):
    """Effect decomposition columns."""

    DIRECT = "direct"
    INDIRECT = "indirect"
    INDUCED = "induced"
    TOTAL = "total"


class MultiplierType(StrEnum):
    """Type I = direct + indirect; Type II adds household-induced effects."""

    TYPE_I = "type_i"
    TYPE_II = "type_ii"


class ValueSource(StrEnum):
    """Where a direct figure came from, disclosed in reports."""

    CALCULATED = "calculated"
    USER = "user"


class Department(StrEnum):
    """Casino revenue streams, each mapped to one IO sector."""

    GAMING = "gaming"
    FOOD = "food"
    LODGING = "lodging"
    OTHER = "other"


# --- Base model ---


class GamingImpactBase(BaseModel):
    """Base model with common configuration for all Gaming Impact Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
        "allow_inf_nan": False,
    }
