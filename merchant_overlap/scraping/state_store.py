"""
JSON persistence of the resumable scrape state.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from merchant_overlap.logging_utils import log_event
from merchant_overlap.schemas.scrape_state import ScrapeState
from merchant_overlap.scraping.errors import ScrapeStateError

logger = logging.getLogger(__name__)

STATE_FILENAME = "scrape-state.json"
TEST_STATE_PREFIX = "test-"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def state_file_path(output_dir: str | Path, *, test_mode: bool = False) -> Path:
    prefix = TEST_STATE_PREFIX if test_mode else ""
    return Path(output_dir) / f"{prefix}{STATE_FILENAME}"


class ScrapeStateStore:
    """
    Loads and saves one scrape state file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> ScrapeState:
        if not self.path.exists():
            raise ScrapeStateError(f"Scrape state file not found: {self.path}")
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return ScrapeState.model_validate(raw)
        except OSError as exc:
            raise ScrapeStateError(f"Cannot read scrape state file {self.path}: {exc}") from exc
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            raise ScrapeStateError(f"Invalid scrape state file {self.path}: {exc}") from exc

    def save(self, state: ScrapeState) -> Path:
        """
        Refresh counters and timestamp, then write the state atomically.
        """

        state.last_updated = utc_now_iso()
        state.refresh_counters()

        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        temp_path.write_text(
            state.model_dump_json(by_alias=True, indent=2),
            encoding="utf-8",
        )
        temp_path.replace(self.path)

        total = state.total_links or 1
        log_event(
            logger,
            logging.INFO,
            "scrape_state_saved",
            path=str(self.path),
            completed=state.completed_links,
            failed=state.failed_links,
            pending=state.pending_links,
            total=state.total_links,
            completed_pct=round(state.completed_links / total * 100, 2),
            pages_with_marker=state.pages_with_amazon_deals,
        )
        return self.path


def scrape_state_domains(state: ScrapeState) -> set[str]:
    """
    `urlPath` values of every record, used verbatim as domain names.
    """

    domains: set[str] = set()
    skipped = 0
    for record in state.merchant_records:
        if record.url_path:
            domains.add(record.url_path)
        else:
            skipped += 1
    if skipped:
        log_event(
            logger,
            logging.WARNING,
            "scrape_state_records_without_path",
            skipped=skipped,
        )
    return domains


def load_scrape_state_domains(path: str | Path, *, required: bool) -> set[str]:
    """
    Domain set of a scrape state file. When not `required`, an unusable file
    yields an empty set and a warning instead of an error.
    """

    try:
        state = ScrapeStateStore(path).load()
    except ScrapeStateError as exc:
        if required:
            raise
        log_event(
            logger,
            logging.WARNING,
            "scrape_state_unavailable",
            path=str(path),
            error=str(exc),
        )
        return set()

    domains = scrape_state_domains(state)
    log_event(
        logger,
        logging.INFO,
        "scrape_state_domains_loaded",
        path=str(path),
        total_links=state.total_links,
        records=len(state.merchant_records),
        unique_domains=len(domains),
    )
    return domains
