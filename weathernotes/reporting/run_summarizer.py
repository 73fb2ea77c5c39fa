"""Run summarizer: aggregates per-note outcomes into a RunSummary."""

from weathernotes.models.reporting import NoteOutcome, OutcomeStatus, RunSummary
from weathernotes.models.weather import WindowMode


class RunSummarizer:
    def __init__(self, root: str, dry_run: bool = False):
        self.summary = RunSummary(root=root, dry_run=dry_run)

    def record_outcome(self, outcome: NoteOutcome) -> None:
        self.summary.notes_found += 1
        if outcome.status == OutcomeStatus.UPDATED:
            self.summary.updated += 1
        elif outcome.status == OutcomeStatus.UNCHANGED:
            self.summary.unchanged += 1
        elif outcome.status == OutcomeStatus.SKIPPED:
            self.summary.skipped += 1
        else:
            self.summary.failed += 1
            self.summary.errors.append(
                f"{outcome.path}: [{outcome.stage}] {outcome.message}"
            )

        if outcome.mode == WindowMode.FORECAST:
            self.summary.forecast_notes += 1
        elif outcome.mode == WindowMode.HISTORY:
            self.summary.history_notes += 1

    def record_duration(self, seconds: float) -> None:
        self.summary.duration_seconds = seconds

    def finalize(self) -> RunSummary:
        return self.summary
