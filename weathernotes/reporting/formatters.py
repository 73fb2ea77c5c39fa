"""Output formatters for per-note outcomes and run summaries."""

import json

from weathernotes.models.reporting import NoteOutcome, OutcomeStatus, RunSummary


def format_outcome(o: NoteOutcome) -> str:
    """One console line per note."""
    if o.status == OutcomeStatus.UPDATED:
        return f"Updated weather: {o.path}"
    if o.status == OutcomeStatus.UNCHANGED:
        return f"Unchanged: {o.path}"
    if o.status == OutcomeStatus.SKIPPED:
        return f"Skipped {o.path}: {o.message}"
    return f"Failed {o.path}: [{o.stage}] {o.message}"


def format_summary_text(s: RunSummary) -> str:
    """Plain text summary for the console."""
    mode = " (dry-run)" if s.dry_run else ""
    lines = [
        f"=== Weather notes{mode} | {s.root} ===",
        f"Notes: {s.notes_found} found, {s.updated} updated, "
        f"{s.unchanged} unchanged, {s.skipped} skipped, {s.failed} failed",
        f"Windows: {s.forecast_notes} forecast, {s.history_notes} historic",
    ]
    if s.errors:
        lines.append(f"Errors: {len(s.errors)}")
        lines.extend(f"  {e}" for e in s.errors)
        lines.append(
            "One or more notes could not be updated. See the log above."
        )
    lines.append(f"Duration: {s.duration_seconds:.1f}s")
    return "\n".join(lines)


def format_summary_json(s: RunSummary) -> str:
    """JSON summary for programmatic consumption."""
    data = {
        "root": s.root,
        "dry_run": s.dry_run,
        "notes_found": s.notes_found,
        "updated": s.updated,
        "unchanged": s.unchanged,
        "skipped": s.skipped,
        "failed": s.failed,
        "forecast_notes": s.forecast_notes,
        "history_notes": s.history_notes,
        "duration_seconds": s.duration_seconds,
        "errors": s.errors,
    }
    return json.dumps(data, indent=2)
