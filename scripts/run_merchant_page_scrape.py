"""
Scrape pending merchant pages and update the scrape state file from CLI.
"""

from __future__ import annotations

import argparse

from merchant_overlap.config import get_firecrawl_settings, get_merchant_scrape_settings
from merchant_overlap.logging_utils import configure_logging
from merchant_overlap.scraping import (
    FirecrawlClient,
    FirecrawlError,
    MerchantPageScraper,
    ScrapeRunOptions,
    ScrapeStateError,
    ScrapeStateStore,
    select_records,
    state_file_path,
)


def main() -> int:
    settings = get_merchant_scrape_settings()
    parser = argparse.ArgumentParser(description="Scrape merchant pages using the scrape state file.")
    parser.add_argument("--test", action="store_true", help="Use test-scrape-state.json.")
    parser.add_argument(
        "--batch-size",
        dest="run_limit",
        type=int,
        default=settings.default_run_limit,
        help="Maximum number of records to process in this run.",
    )
    parser.add_argument(
        "--reprocess-completed",
        action="store_true",
        help="Scrape records that already completed again.",
    )
    parser.add_argument(
        "--retry-failed",
        action="store_true",
        help="Retry records that exhausted their attempts.",
    )
    args = parser.parse_args()
    configure_logging()

    store = ScrapeStateStore(state_file_path(settings.output_dir, test_mode=args.test))
    try:
        state = store.load()
    except ScrapeStateError as exc:
        print(f"{exc}. Run run_merchant_link_extract.py first.")
        return 1
    if not state.merchant_records:
        print("No merchant records found in the state file.")
        return 1

    options = ScrapeRunOptions(
        run_limit=args.run_limit,
        reprocess_completed=args.reprocess_completed,
        retry_failed=args.retry_failed,
    )
    records = select_records(
        state.merchant_records,
        options=options,
        max_attempts=settings.max_attempts,
    )
    if not records:
        print("No records need processing based on current filters and status.")
        return 0

    try:
        client = FirecrawlClient(settings=get_firecrawl_settings())
    except FirecrawlError as exc:
        print(str(exc))
        return 1

    scraper = MerchantPageScraper(
        client=client,
        settings=settings,
        store=store,
    )
    summary = scraper.run(state, records)
    print(
        f"Processed {summary.selected} records in {summary.batches} batches: "
        f"{summary.completed} completed, {summary.failed_attempts} failed attempts"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
