"""
merchant_overlap/services/competitor_csv_service.py

Per-competitor URL comparison CSV export.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from merchant_overlap.config import AnalysisSettings, get_analysis_settings, load_extraction_rules
from merchant_overlap.extraction import (
    DomainExtractor,
    build_domain_url_map,
    domain_set_from_sitemaps,
)
from merchant_overlap.logging_utils import log_event
from merchant_overlap.reporting import (
    COMPETITOR_ROW_FIELDS,
    MATCHED,
    build_competitor_rows,
    write_rows_csv,
)
from merchant_overlap.sitemaps import (
    discover_competitor_sources,
    group_competitor_files,
    parse_sitemap_directory,
    parse_sitemap_files,
)

logger = logging.getLogger(__name__)

CSV_SUBDIR = "csv-output"


@dataclass(frozen=True)
class CompetitorCsvSummary:
    """
    One written competitor comparison CSV.
    """

    competitor: str
    sitemap_files: int
    rows: int
    matched_rows: int
    path: str


class CompetitorCsvService:
    """
    Writes one comparison CSV per competitor group, annotated with reference matches.
    """

    def __init__(
        self,
        *,
        settings: AnalysisSettings | None = None,
        extractor: DomainExtractor | None = None,
    ) -> None:
        self._settings = settings or get_analysis_settings()
        self._custom_extractor = extractor

    @cached_property
    def _extractor(self) -> DomainExtractor:
        if self._custom_extractor is not None:
            return self._custom_extractor
        return DomainExtractor(
            load_extraction_rules(config_path=self._settings.extraction_rules_path)
        )

    def run(self) -> list[CompetitorCsvSummary]:
        reference_sitemaps = parse_sitemap_directory(
            self._settings.reference_dir,
            max_workers=self._settings.sitemap_max_workers,
        )
        reference_domains = domain_set_from_sitemaps(
            reference_sitemaps,
            "Reference",
            self._extractor,
        )
        reference_urls = build_domain_url_map(reference_sitemaps, self._extractor)

        groups = group_competitor_files(
            discover_competitor_sources(self._settings.competitors_dir)
        )
        csv_dir = Path(self._settings.output_dir) / CSV_SUBDIR
        summaries: list[CompetitorCsvSummary] = []
        for competitor, files in groups.items():
            sitemaps = parse_sitemap_files(files, max_workers=self._settings.sitemap_max_workers)
            rows = build_competitor_rows(
                sitemaps,
                reference_domains=reference_domains,
                reference_urls=reference_urls,
                extractor=self._extractor,
            )
            path = csv_dir / f"{competitor}-comparison.csv"
            write_rows_csv(
                path,
                fields=COMPETITOR_ROW_FIELDS,
                rows=(row.as_record() for row in rows),
            )
            summary = CompetitorCsvSummary(
                competitor=competitor,
                sitemap_files=len(files),
                rows=len(rows),
                matched_rows=sum(1 for row in rows if row.match_status == MATCHED),
                path=str(path),
            )
            summaries.append(summary)
            log_event(
                logger,
                logging.INFO,
                "competitor_csv_generated",
                competitor=competitor,
                sitemap_files=summary.sitemap_files,
                rows=summary.rows,
                matched_rows=summary.matched_rows,
            )
        return summaries
