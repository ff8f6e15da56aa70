"""Immutable multiplier table, the read side of the batch output.

Built once from MultiplierRecords (by the batch or from CSV) and injected
wherever impacts are computed. Lookups never mutate it, so concurrent
readers need no locking.
"""

from __future__ import annotations

import csv
import hashlib
import io
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from rapidfuzz import fuzz, process

from gaming_impact.config.settings import Settings
from gaming_impact.data.sectors import (
    STATE_ABBREVIATIONS,
    TARGET_SECTOR_CODES,
    TARGET_SECTORS,
    get_sector,
)
from gaming_impact.errors import (
    AmbiguousStateError,
    InvalidInputError,
    NoDataError,
    StateNotFoundError,
)
from gaming_impact.models.common import Metric
from gaming_impact.models.impact import ImpactResult
from gaming_impact.models.multipliers import IndustrySector, MultiplierRecord

if TYPE_CHECKING:
    from gaming_impact.engine.impact import ImpactDecomposer

logger = logging.getLogger(__name__)

CSV_COLUMNS: tuple[str, ...] = tuple(MultiplierRecord.model_fields)

DEFAULT_MATCH_CUTOFF = 80.0
DEFAULT_SUGGESTION_SAMPLE = 10


class MultiplierTable:
    """Read-only (state, sector) → MultiplierRecord lookup."""

    def __init__(
        self,
        records: Iterable[MultiplierRecord],
        *,
        states: Iterable[str] = (),
        match_cutoff: float = DEFAULT_MATCH_CUTOFF,
        suggestion_sample: int = DEFAULT_SUGGESTION_SAMPLE,
    ) -> None:
        """Index ``records``.

        Args:
            records: One record per (state, sector).
            states: Additional known states. A known state with no record
                for a sector raises NoDataError rather than StateNotFoundError.

        Raises:
            ValueError: If a (state, sector) pair appears more than once.
        """
        by_key: dict[tuple[str, str], MultiplierRecord] = {}
        for record in records:
            if record.key in by_key:
                msg = f"Duplicate multiplier record for {record.state} / {record.sector}."
                raise ValueError(msg)
            by_key[record.key] = record

        self._records = MappingProxyType(by_key)
        self._states = tuple(sorted({state for state, _ in by_key} | set(states)))
        self._by_lower = {s.lower(): s for s in self._states}
        for record in by_key.values():
            if record.abbrev:
                self._by_lower.setdefault(record.abbrev.lower(), record.state)
        for state in self._states:
            abbrev = STATE_ABBREVIATIONS.get(state)
            if abbrev:
                self._by_lower.setdefault(abbrev.lower(), state)
        self._match_cutoff = match_cutoff
        self._suggestion_sample = suggestion_sample

    @classmethod
    def from_settings(
        cls,
        records: Iterable[MultiplierRecord],
        settings: Settings,
        *,
        states: Iterable[str] = (),
    ) -> MultiplierTable:
        return cls(
            records,
            states=states,
            match_cutoff=settings.STATE_MATCH_CUTOFF,
            suggestion_sample=settings.STATE_SUGGESTION_SAMPLE,
        )

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MultiplierRecord]:
        return iter(self._records.values())

    def __contains__(self, key: object) -> bool:
        return key in self._records

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve_state(self, name: str) -> str:
        """Return the canonical state name for ``name``.

        Exact matches (name or two-letter code, case-insensitive) resolve.
        Anything else raises with suggestions: substring matches first,
        then typo matches scored with rapidfuzz.

        Raises:
            StateNotFoundError: No match; carries one suggestion or a sample.
            AmbiguousStateError: Several states match.
        """
        query = name.strip().lower()
        exact = self._by_lower.get(query)
        if exact is not None:
            return exact

        candidates = [s for s in self._states if query and query in s.lower()]
        if not candidates and query:
            matches = process.extract(
                query,
                [s.lower() for s in self._states],
                scorer=fuzz.ratio,
                score_cutoff=self._match_cutoff,
                limit=None,
            )
            candidates = [self._states[idx] for _, _, idx in matches]

        if len(candidates) == 1:
            raise StateNotFoundError(name, candidates)
        if len(candidates) > 1:
            raise AmbiguousStateError(name, sorted(candidates))
        raise StateNotFoundError(
            name,
            list(self._states[: self._suggestion_sample]),
            is_sample=True,
        )

    def get(self, state: str, sector: str) -> MultiplierRecord:
        """Multipliers for (state, sector).

        Raises:
            InvalidInputError: ``sector`` is not a target sector.
            StateNotFoundError / AmbiguousStateError: See resolve_state.
            NoDataError: The state has no record for ``sector``.
        """
        if get_sector(sector) is None:
            msg = f"Unknown sector code {sector!r}. Valid sectors: {', '.join(TARGET_SECTOR_CODES)}."
            raise InvalidInputError(msg, details={"sector": sector})
        resolved = self.resolve_state(state)
        record = self._records.get((resolved, sector))
        if record is None:
            raise NoDataError(resolved, sector)
        return record

    def list_states(self) -> list[str]:
        return list(self._states)

    def list_sectors(self) -> list[IndustrySector]:
        """Target sectors with at least one record, in canonical order."""
        present = {sector for _, sector in self._records}
        return [s for s in TARGET_SECTORS if s.code in present]

    def state_multipliers(self, state: str) -> list[MultiplierRecord]:
        """All records for one state, in canonical sector order."""
        resolved = self.resolve_state(state)
        return [
            self._records[(resolved, code)]
            for code in TARGET_SECTOR_CODES
            if (resolved, code) in self._records
        ]

    def compare_states(
        self,
        decomposer: ImpactDecomposer,
        revenue: float,
        sector: str,
        states: Iterable[str] | None = None,
    ) -> list[ImpactResult]:
        """Decompose the same revenue in several states.

        States that cannot be resolved or lack the sector are skipped and
        logged. Results are sorted by output multiplier, highest first.

        Raises:
            InvalidInputError: Non-positive revenue or unknown sector.
        """
        results: list[ImpactResult] = []
        for state in self._states if states is None else states:
            try:
                record = self.get(state, sector)
            except (StateNotFoundError, AmbiguousStateError, NoDataError) as exc:
                logger.info("Skipping %s in comparison: %s", state, exc)
                continue
            results.append(decomposer.decompose(record, revenue))
        results.sort(key=lambda r: r.multipliers[Metric.OUTPUT], reverse=True)
        return results

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _write_rows(self, handle: io.TextIOBase) -> None:
        writer = csv.DictWriter(handle, fieldnames=CSV_COLUMNS, lineterminator="\n")
        writer.writeheader()
        for record in self._records.values():
            row = record.model_dump()
            writer.writerow({k: "" if v is None else v for k, v in row.items()})
        # Known states without records are kept as rows with an empty sector.
        with_records = {state for state, _ in self._records}
        for state in self._states:
            if state not in with_records:
                writer.writerow({"state": state})

    @property
    def checksum(self) -> str:
        """sha256 over the CSV serialization of every record."""
        buffer = io.StringIO()
        self._write_rows(buffer)
        return f"sha256:{hashlib.sha256(buffer.getvalue().encode('utf-8')).hexdigest()}"

    def to_csv(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            self._write_rows(handle)
        logger.info("Wrote %d multiplier records to %s", len(self), path)

    @classmethod
    def from_csv(
        cls,
        path: str | Path,
        *,
        match_cutoff: float = DEFAULT_MATCH_CUTOFF,
        suggestion_sample: int = DEFAULT_SUGGESTION_SAMPLE,
    ) -> MultiplierTable:
        """Load a table written by ``to_csv``; empty cells fall back to field defaults."""
        records: list[MultiplierRecord] = []
        states: list[str] = []
        with Path(path).open(encoding="utf-8", newline="") as handle:
            for row in csv.DictReader(handle):
                if not row.get("sector"):
                    states.append(row["state"])
                    continue
                records.append(
                    MultiplierRecord.model_validate({k: v for k, v in row.items() if v != ""}),
                )
        return cls(
            records,
            states=states,
            match_cutoff=match_cutoff,
            suggestion_sample=suggestion_sample,
        )
