"""
Extract merchant page links into a fresh scrape state file from CLI.
"""

from __future__ import annotations

import argparse

from merchant_overlap.config import get_firecrawl_settings, get_merchant_scrape_settings
from merchant_overlap.logging_utils import configure_logging
from merchant_overlap.scraping import FirecrawlClient, FirecrawlError, MerchantLinkExtractor


def main() -> int:
    parser = argparse.ArgumentParser(description="Extract merchant links from sitemap pages.")
    parser.add_argument(
        "--test",
        action="store_true",
        help="Only scrape the first two sitemap pages and write test-scrape-state.json.",
    )
    args = parser.parse_args()
    configure_logging()

    try:
        extractor = MerchantLinkExtractor(
            client=FirecrawlClient(settings=get_firecrawl_settings()),
            settings=get_merchant_scrape_settings(),
        )
        state = extractor.extract(test_mode=args.test)
    except FirecrawlError as exc:
        print(f"Merchant link extraction failed: {exc}")
        return 1

    print(f"Extracted {len(state.merchant_records)} merchant records")
    for record in state.merchant_records[:10]:
        print(f"  - {record.url} ({record.status})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
