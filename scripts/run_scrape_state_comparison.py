"""
Compare the reference catalog with a merchant scrape state file from CLI.
"""

from __future__ import annotations

import argparse
import json

from merchant_overlap.logging_utils import configure_logging
from merchant_overlap.reporting import format_overlap_table
from merchant_overlap.scraping import ScrapeStateError
from merchant_overlap.services.scrape_state_comparison_service import (
    ScrapeStateComparisonService,
)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Compare reference catalog domains with scraped merchant paths."
    )
    parser.parse_args()
    configure_logging()

    try:
        result = ScrapeStateComparisonService().run()
    except ScrapeStateError as exc:
        print(str(exc))
        return 1
    print(format_overlap_table(result.summary.reference_domains_count, [result.overlap]))
    print(f"\nUnique domains in reference: {result.unique_in_reference}")
    print(f"Unique domains in scrape state: {result.unique_in_scrape_state}")
    print(json.dumps(result.summary.model_dump(by_alias=True), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
