"""
Write one URL-level comparison CSV per competitor from CLI.
"""

from __future__ import annotations

import argparse
import json

from merchant_overlap.logging_utils import configure_logging
from merchant_overlap.services.competitor_csv_service import CompetitorCsvService


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate per-competitor comparison CSV files.")
    parser.parse_args()
    configure_logging()

    summaries = CompetitorCsvService().run()
    payload = [
        {
            "competitor": summary.competitor,
            "sitemap_files": summary.sitemap_files,
            "rows": summary.rows,
            "matched_rows": summary.matched_rows,
            "path": summary.path,
        }
        for summary in summaries
    ]
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
