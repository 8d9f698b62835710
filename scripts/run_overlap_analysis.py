"""
Run reference versus competitor sitemap overlap analysis from CLI.
"""

from __future__ import annotations

import argparse

from merchant_overlap.logging_utils import configure_logging
from merchant_overlap.reporting import format_overlap_table
from merchant_overlap.services.overlap_analysis_service import (
    RESULTS_FILENAME,
    OverlapAnalysisService,
)


def main() -> int:
    parser = argparse.ArgumentParser(description="Compute domain overlap with competitor sitemaps.")
    parser.parse_args()
    configure_logging()

    analysis = OverlapAnalysisService().run()
    print(format_overlap_table(analysis.reference_domains_count, analysis.competitor_results))
    print(f"\nUnique reference domains: {len(analysis.unique_reference_domains)}")
    print(f"Results saved to {RESULTS_FILENAME}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
