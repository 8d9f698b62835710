"""
Resumable batch scraping of merchant pages.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

from merchant_overlap.config.models import MerchantScrapeSettings
from merchant_overlap.logging_utils import log_event
from merchant_overlap.schemas.scrape_state import MerchantRecord, ScrapeState
from merchant_overlap.scraping.errors import FirecrawlError
from merchant_overlap.scraping.firecrawl_client import FirecrawlClient, ScrapedPage
from merchant_overlap.scraping.merchant_parser import parse_merchant_page
from merchant_overlap.scraping.state_store import ScrapeStateStore, utc_now_iso

logger = logging.getLogger(__name__)

STATUS_ORDER = {"pending": 0, "failed": 1, "completed": 2}


@dataclass(frozen=True)
class ScrapeRunOptions:
    """
    Which records a run picks up and how many.
    """

    run_limit: int | None = None
    reprocess_completed: bool = False
    retry_failed: bool = False


@dataclass(frozen=True)
class ScrapeRunSummary:
    selected: int
    completed: int
    failed_attempts: int
    batches: int


def select_records(
    records: Sequence[MerchantRecord],
    *,
    options: ScrapeRunOptions,
    max_attempts: int,
) -> list[MerchantRecord]:
    """
    Records due for scraping: pending first, then failed, then completed,
    fewest attempts first within each status.
    """

    def is_due(record: MerchantRecord) -> bool:
        if record.status == "pending":
            return True
        if record.status == "completed":
            return options.reprocess_completed
        return options.retry_failed or record.attempts < max_attempts

    selected = sorted(
        (record for record in records if is_due(record)),
        key=lambda record: (STATUS_ORDER[record.status], record.attempts),
    )
    if options.run_limit is not None:
        selected = selected[: max(0, options.run_limit)]
    return selected


class MerchantPageScraper:
    """
    Scrapes merchant pages in batches and checkpoints the state file after each batch.
    """

    def __init__(
        self,
        *,
        client: FirecrawlClient,
        settings: MerchantScrapeSettings,
        store: ScrapeStateStore,
    ) -> None:
        self.client = client
        self.settings = settings
        self.store = store

    def run(self, state: ScrapeState, records: Sequence[MerchantRecord]) -> ScrapeRunSummary:
        batch_size = self.settings.batch_size
        total_batches = (len(records) + batch_size - 1) // batch_size
        completed = 0
        failed_attempts = 0

        try:
            for batch_number, start in enumerate(range(0, len(records), batch_size), start=1):
                batch = list(records[start : start + batch_size])
                log_event(
                    logger,
                    logging.INFO,
                    "merchant_batch_started",
                    batch=batch_number,
                    batches=total_batches,
                    urls=len(batch),
                )

                failures = self._scrape_batch(batch)
                completed += len(batch) - len(failures)
                failed_attempts += len(failures)
                self._record_failures(batch, failures)
                self.store.save(state)

                if batch_number < total_batches and self.settings.batch_delay_seconds > 0:
                    time.sleep(self.settings.batch_delay_seconds)
        except Exception:
            self.store.save(state)
            raise

        log_event(
            logger,
            logging.INFO,
            "merchant_scrape_run_completed",
            selected=len(records),
            completed=completed,
            failed_attempts=failed_attempts,
        )
        return ScrapeRunSummary(
            selected=len(records),
            completed=completed,
            failed_attempts=failed_attempts,
            batches=total_batches,
        )

    def _scrape_batch(self, batch: list[MerchantRecord]) -> dict[str, str]:
        urls = [record.url for record in batch]
        try:
            pages = self.client.batch_scrape(urls, formats=["html"])
        except FirecrawlError as exc:
            log_event(
                logger,
                logging.ERROR,
                "merchant_batch_failed",
                urls=len(urls),
                error=str(exc),
            )
            return {url: f"Batch scrape failed: {exc}" for url in urls}

        pages_by_url: dict[str, ScrapedPage] = {
            page.source_url: page for page in pages if page.source_url
        }
        failures: dict[str, str] = {}
        now = utc_now_iso()
        for record in batch:
            record.last_attempt = now
            page = pages_by_url.get(record.url)
            if page is None:
                failures[record.url] = "No matching result found in batch response"
                continue
            if not page.html:
                failures[record.url] = "No HTML content in scrape result"
                continue
            try:
                attributes = parse_merchant_page(page.html)
            except Exception as exc:
                failures[record.url] = f"HTML parsing error: {exc}"
                continue

            record.store_name = attributes.store_name
            record.has_amazon_deal = attributes.has_marker
            record.data_id = attributes.data_id
            record.status = "completed"
            record.processed_at = now
        return failures

    def _record_failures(self, batch: list[MerchantRecord], failures: dict[str, str]) -> None:
        for record in batch:
            error = failures.get(record.url)
            if error is None:
                continue
            record.attempts += 1
            event = "merchant_attempt_failed"
            if record.attempts >= self.settings.max_attempts:
                record.status = "failed"
                event = "merchant_marked_failed"
            log_event(
                logger,
                logging.WARNING,
                event,
                url=record.url,
                attempts=record.attempts,
                error=error,
            )
