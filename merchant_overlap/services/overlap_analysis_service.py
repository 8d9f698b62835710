"""
merchant_overlap/services/overlap_analysis_service.py

Reference catalog versus competitor catalogs overlap analysis.
"""

from __future__ import annotations

import logging
from functools import cached_property, lru_cache
from pathlib import Path

from merchant_overlap.comparison import compare_all, find_unique_reference_domains
from merchant_overlap.config import AnalysisSettings, get_analysis_settings, load_extraction_rules
from merchant_overlap.domain.overlap import AnalysisResult
from merchant_overlap.extraction import DomainExtractor, build_domain_set, process_directory
from merchant_overlap.logging_utils import log_event
from merchant_overlap.reporting import write_domain_csv, write_json
from merchant_overlap.schemas.overlap import OverlapReportResponse
from merchant_overlap.scraping.state_store import load_scrape_state_domains
from merchant_overlap.sitemaps import discover_competitor_sources, parse_sitemap_file

logger = logging.getLogger(__name__)

RESULTS_FILENAME = "domain-overlap-results.json"
UNIQUE_DOMAINS_FILENAME = "reference-unique-domains.csv"
REFERENCE_LABEL = "Reference"
SCRAPE_STATE_LABEL = "ScrapeState"


class OverlapAnalysisService:
    """
    Builds every domain set, ranks competitors, and writes the results documents.
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

    def reference_domains(self) -> set[str]:
        return process_directory(
            self._settings.reference_dir,
            REFERENCE_LABEL,
            self._extractor,
            max_workers=self._settings.sitemap_max_workers,
        )

    def competitor_domains(self) -> dict[str, set[str]]:
        competitors: dict[str, set[str]] = {}
        for source in discover_competitor_sources(self._settings.competitors_dir):
            if source.grouped:
                competitors[source.name] = process_directory(
                    source.path,
                    source.name,
                    self._extractor,
                    max_workers=self._settings.sitemap_max_workers,
                )
                continue

            try:
                sitemap = parse_sitemap_file(source.path, source.name)
                competitors[source.name] = build_domain_set(sitemap, self._extractor)
            except OSError as exc:
                log_event(
                    logger,
                    logging.ERROR,
                    "competitor_file_failed",
                    competitor=source.name,
                    path=str(source.path),
                    error=str(exc),
                )
                competitors[source.name] = set()
                continue
            log_event(
                logger,
                logging.INFO,
                "competitor_domains_found",
                competitor=source.name,
                domains=len(competitors[source.name]),
            )

        if self._settings.include_scrape_state:
            competitors[SCRAPE_STATE_LABEL] = load_scrape_state_domains(
                self._settings.scrape_state_path,
                required=False,
            )
        return competitors

    def analyze(self) -> AnalysisResult:
        reference = self.reference_domains()
        competitors = self.competitor_domains()
        results = compare_all(reference, competitors)
        unique = find_unique_reference_domains(reference, competitors)
        log_event(
            logger,
            logging.INFO,
            "overlap_analysis_completed",
            reference_domains=len(reference),
            competitors=len(results),
            unique_reference_domains=len(unique),
        )
        return AnalysisResult(
            reference_domains_count=len(reference),
            competitor_results=results,
            unique_reference_domains=unique,
        )

    def run(self) -> AnalysisResult:
        """
        Analyze and write the results JSON plus the unique reference domains CSV.
        """

        analysis = self.analyze()
        output_dir = Path(self._settings.output_dir)
        report = OverlapReportResponse.from_analysis(analysis)
        write_json(output_dir / RESULTS_FILENAME, report.model_dump(by_alias=True))
        write_domain_csv(output_dir / UNIQUE_DOMAINS_FILENAME, analysis.unique_reference_domains)
        return analysis


@lru_cache(maxsize=1)
def get_overlap_analysis_service() -> OverlapAnalysisService:
    """
    Build and cache overlap analysis service.
    """

    return OverlapAnalysisService()
