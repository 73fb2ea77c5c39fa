"""Note pipeline: metadata -> window -> weather -> summary -> block upsert."""

import logging
import os
import shutil
import tempfile
import time
from datetime import date
from pathlib import Path

from weathernotes.config.schema import AppConfig
from weathernotes.errors import MissingFrontmatterError, NoteError
from weathernotes.ingest.open_meteo_client import OpenMeteoClient
from weathernotes.ingest.weather_fetcher import WeatherFetcher
from weathernotes.models.note import NoteMeta
from weathernotes.models.reporting import NoteOutcome, OutcomeStatus, RunSummary
from weathernotes.models.weather import WeatherWindow
from weathernotes.notes.frontmatter import extract_meta
from weathernotes.notes.scanner import discover_notes
from weathernotes.notes.weather_block import upsert_weather_block
from weathernotes.planning.window_planner import plan_window
from weathernotes.reporting.formatters import format_outcome
from weathernotes.reporting.run_summarizer import RunSummarizer
from weathernotes.reporting.weather_table import render_weather_fragment
from weathernotes.summary.temperature_summary import summarize

logger = logging.getLogger(__name__)


class NotePipeline:
    def __init__(
        self,
        config: AppConfig,
        client: OpenMeteoClient | None = None,
        today: date | None = None,
        dry_run: bool = False,
    ):
        self.config = config
        self.client = client or OpenMeteoClient(config.open_meteo)
        self.fetcher = WeatherFetcher(self.client)
        self.today = today
        self.dry_run = dry_run

    def _today(self) -> date:
        return self.today or date.today()

    def plan(self, text: str) -> tuple[NoteMeta, WeatherWindow]:
        """Extract metadata and plan the query window. No network access."""
        meta = extract_meta(text)
        window = plan_window(
            meta.arrival, meta.departure, self._today(),
            self.config.planner.horizon_days,
        )
        return meta, window

    def apply(self, text: str, meta: NoteMeta, window: WeatherWindow) -> str:
        """Fetch, summarize and render the window, then upsert it into text."""
        geo = self.client.geocode(meta.city)
        logger.debug(
            "Geocoded %r to %s (%.4f, %.4f, %s)",
            meta.city, geo.name, geo.latitude, geo.longitude, geo.timezone,
        )
        days = self.fetcher.fetch(geo, window)
        summary = summarize(days)
        fragment = render_weather_fragment(window, summary, days)
        return upsert_weather_block(text, fragment)

    def build_text(self, text: str) -> tuple[str, WeatherWindow]:
        """Compute the new note text. Raises NoteError on any stage failure."""
        meta, window = self.plan(text)
        return self.apply(text, meta, window), window

    def process_file(self, path: str | Path) -> NoteOutcome:
        path = Path(path)
        mode = ""
        try:
            with open(path, encoding="utf-8", newline="") as f:
                text = f.read()
            meta, window = self.plan(text)
            mode = window.mode.value
            new_text = self.apply(text, meta, window)
            if new_text == text:
                return NoteOutcome(str(path), OutcomeStatus.UNCHANGED, mode=mode)
            if not self.dry_run:
                _atomic_write(path, new_text)
            return NoteOutcome(str(path), OutcomeStatus.UPDATED, mode=mode)
        except MissingFrontmatterError as e:
            if self.config.scan.skip_missing_frontmatter:
                return NoteOutcome(
                    str(path), OutcomeStatus.SKIPPED, stage=e.stage, message=e.message
                )
            return NoteOutcome(
                str(path), OutcomeStatus.FAILED, stage=e.stage, message=e.message
            )
        except NoteError as e:
            return NoteOutcome(
                str(path), OutcomeStatus.FAILED,
                stage=e.stage, message=e.message, mode=mode,
            )
        except (OSError, UnicodeDecodeError) as e:
            return NoteOutcome(
                str(path), OutcomeStatus.FAILED, stage="io", message=str(e), mode=mode
            )

    def run(self, root: str | Path) -> RunSummary:
        """Process every note under root, one at a time."""
        start_time = time.monotonic()
        summarizer = RunSummarizer(str(root), self.dry_run)
        scan = self.config.scan

        for path in discover_notes(root, scan.extensions, scan.skip_hidden):
            outcome = self.process_file(path)
            summarizer.record_outcome(outcome)
            if outcome.status == OutcomeStatus.FAILED:
                logger.warning("%s", format_outcome(outcome))
            elif outcome.status == OutcomeStatus.SKIPPED:
                logger.debug("%s", format_outcome(outcome))
            else:
                logger.info("%s", format_outcome(outcome))

        summarizer.record_duration(time.monotonic() - start_time)
        return summarizer.finalize()


def _atomic_write(path: Path, text: str) -> None:
    """Write via a sibling temp file so a note is never left half-written."""
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
