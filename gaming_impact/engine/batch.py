"""Offline batch: StateIO snapshots → MultiplierTable.

Each state runs builder → deriver → calculator independently in a thread
pool. A state whose model cannot be built, or whose records fail
validation, is recorded as a failure and the rest of the batch continues. Results are merged in input order once every
state has finished.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from gaming_impact.config.settings import Settings, get_settings
from gaming_impact.data.sectors import TARGET_SECTOR_CODES
from gaming_impact.engine.coefficients import CoefficientDeriver
from gaming_impact.engine.multiplier_table import MultiplierTable
from gaming_impact.engine.multipliers import MultiplierCalculator, StateMultipliers
from gaming_impact.engine.requirements import MatrixModelBuilder
from gaming_impact.engine.snapshot import StateIOSnapshot
from gaming_impact.errors import ModelComputationError
from gaming_impact.models.common import new_uuid7, utc_now
from gaming_impact.models.multipliers import EmploymentRecord
from gaming_impact.quality.models import ValidationSeverity, ValidationWarning
from gaming_impact.quality.validation import validate_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateFailure:
    """A state skipped by the batch."""

    state: str
    error_type: str
    message: str


@dataclass(frozen=True)
class BatchResult:
    """Outcome of one batch run."""

    run_id: UUID
    started_at: datetime
    table: MultiplierTable
    failures: list[StateFailure] = field(default_factory=list)
    missing_sectors: dict[str, list[str]] = field(default_factory=dict)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def succeeded(self) -> list[str]:
        return self.table.list_states()


class MultiplierBatch:
    """Computes target-sector multipliers for every state snapshot."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._builder = MatrixModelBuilder()
        self._deriver = CoefficientDeriver(
            pce_column=self._settings.PCE_COLUMN,
            employment_fallback=self._settings.EMPLOYMENT_FALLBACK_COEF,
        )
        self._calculator = MultiplierCalculator()

    def run_state(
        self,
        snapshot: StateIOSnapshot,
        employment: Sequence[EmploymentRecord],
        target_sectors: Sequence[str] = TARGET_SECTOR_CODES,
    ) -> StateMultipliers:
        """Run the offline pipeline for one state.

        Raises:
            DataAlignmentError: No common sectors or a value-added row is missing.
            SingularMatrixError: (I - A) or (I - A_bar) is not invertible.
            pydantic.ValidationError: Snapshot metadata (abbrev, base year)
                does not fit a MultiplierRecord.
        """
        if snapshot.base_year != self._settings.IO_BASE_YEAR:
            logger.warning(
                "%s: snapshot base year %d differs from configured IO base year %d",
                snapshot.state, snapshot.base_year, self._settings.IO_BASE_YEAR,
            )
        by_sector = {e.io_sector: e for e in employment}
        model = self._builder.build(snapshot)
        coefficients = self._deriver.derive(
            snapshot=snapshot,
            model=model,
            employment={code: e.employment for code, e in by_sector.items()},
        )
        return self._calculator.calculate(
            abbrev=snapshot.abbrev,
            base_year=snapshot.base_year,
            model=model,
            coefficients=coefficients,
            target_sectors=target_sectors,
            employment=by_sector,
        )

    def run(
        self,
        snapshots: Sequence[StateIOSnapshot],
        employment: Iterable[EmploymentRecord] = (),
        target_sectors: Sequence[str] = TARGET_SECTOR_CODES,
    ) -> BatchResult:
        """Compute multipliers for all snapshots.

        Args:
            snapshots: One IO snapshot per state.
            employment: Employment rows for any states and IO sectors.
            target_sectors: Sectors to emit records for.

        Returns:
            BatchResult with the table, per-state failures, sectors missing
            per state, and validation warnings.
        """
        run_id = new_uuid7()
        started_at = utc_now()
        by_state: dict[str, list[EmploymentRecord]] = defaultdict(list)
        for row in employment:
            by_state[row.state].append(row)

        logger.info("Batch %s: computing multipliers for %d states", run_id, len(snapshots))

        outcomes: dict[int, StateMultipliers | StateFailure] = {}
        with ThreadPoolExecutor(max_workers=self._settings.BATCH_MAX_WORKERS) as executor:
            futures = {
                executor.submit(self.run_state, snap, by_state.get(snap.state, []), target_sectors): i
                for i, snap in enumerate(snapshots)
            }
            for future in as_completed(futures):
                i = futures[future]
                try:
                    outcomes[i] = future.result()
                except (ModelComputationError, ValueError) as exc:
                    logger.error("Skipping %s: %s", snapshots[i].state, exc)
                    outcomes[i] = StateFailure(
                        state=snapshots[i].state,
                        error_type=type(exc).__name__,
                        message=str(exc),
                    )

        records = []
        processed: list[str] = []
        failures: list[StateFailure] = []
        missing: dict[str, list[str]] = {}
        for i in range(len(snapshots)):
            outcome = outcomes[i]
            if isinstance(outcome, StateFailure):
                failures.append(outcome)
                continue
            processed.append(outcome.state)
            records.extend(outcome.records)
            if outcome.missing_sectors:
                missing[outcome.state] = list(outcome.missing_sectors)

        warnings = validate_records(records)
        for w in warnings:
            level = logging.INFO if w.severity == ValidationSeverity.INFO else logging.WARNING
            logger.log(level, "%s %s: %s", w.state or "all states", w.sector, w.message)

        table = MultiplierTable.from_settings(records, self._settings, states=processed)
        logger.info(
            "Batch %s: %d records, %d states failed, %d warnings",
            run_id, len(table), len(failures), len(warnings),
        )
        return BatchResult(
            run_id=run_id,
            started_at=started_at,
            table=table,
            failures=failures,
            missing_sectors=missing,
            warnings=warnings,
        )
