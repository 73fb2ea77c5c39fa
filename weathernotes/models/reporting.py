"""Per-note outcomes and run-level reporting models."""

from dataclasses import dataclass, field
from enum import StrEnum


class OutcomeStatus(StrEnum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class NoteOutcome:
    path: str
    status: OutcomeStatus
    stage: str = ""
    message: str = ""
    mode: str = ""  # "forecast" or "history" when the note was planned


@dataclass
class RunSummary:
    root: str
    dry_run: bool = False
    notes_found: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped: int = 0
    failed: int = 0
    forecast_notes: int = 0
    history_notes: int = 0
    duration_seconds: float = 0.0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0
