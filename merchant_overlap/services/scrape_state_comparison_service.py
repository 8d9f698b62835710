"""
merchant_overlap/services/scrape_state_comparison_service.py

Reference catalog versus scraped merchant site comparison.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from merchant_overlap.comparison import compare_all, round_percentage, unique_domains
from merchant_overlap.config import AnalysisSettings, get_analysis_settings, load_extraction_rules
from merchant_overlap.domain.overlap import OverlapResult
from merchant_overlap.extraction import (
    DomainExtractor,
    build_domain_url_map,
    domain_set_from_sitemaps,
)
from merchant_overlap.logging_utils import log_event
from merchant_overlap.reporting import (
    STATE_ROW_FIELDS,
    StateComparisonRow,
    build_state_comparison_rows,
    write_json,
    write_rows_csv,
)
from merchant_overlap.schemas.comparison import StateComparisonSummary
from merchant_overlap.scraping.state_store import (
    ScrapeStateStore,
    scrape_state_domains,
    utc_now_iso,
)
from merchant_overlap.sitemaps import parse_sitemap_directory

logger = logging.getLogger(__name__)

SCRAPE_STATE_LABEL = "ScrapeState"
CSV_SUBDIR = "csv-output"


@dataclass(frozen=True)
class StateComparisonResult:
    """
    Overlap, per-record rows and summary of one scrape-state comparison.
    """

    overlap: OverlapResult
    rows: list[StateComparisonRow]
    summary: StateComparisonSummary
    unique_in_reference: int
    unique_in_scrape_state: int


class ScrapeStateComparisonService:
    """
    Compares reference catalog domains with the `urlPath` values of a scrape state file.
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

    def compare(self) -> StateComparisonResult:
        reference_sitemaps = parse_sitemap_directory(
            self._settings.reference_dir,
            max_workers=self._settings.sitemap_max_workers,
        )
        reference = domain_set_from_sitemaps(reference_sitemaps, "Reference", self._extractor)
        reference_urls = build_domain_url_map(
            reference_sitemaps,
            self._extractor,
            restrict_to=reference,
        )

        state = ScrapeStateStore(self._settings.scrape_state_path).load()
        state_domains = scrape_state_domains(state)
        overlap = compare_all(reference, {SCRAPE_STATE_LABEL: state_domains})[0]

        unique_in_reference = len(unique_domains(reference, state_domains))
        unique_in_state = len(unique_domains(state_domains, reference))

        rows = build_state_comparison_rows(
            state.merchant_records,
            reference_domains=reference,
            reference_urls=reference_urls,
        )
        matched = [row for row in rows if row.matched]
        matched_with_marker = [row for row in matched if row.third_party_link]
        marker_percentage = (
            round_percentage(len(matched_with_marker) / len(matched) * 100) if matched else 0.0
        )

        summary = StateComparisonSummary(
            reference_domains_count=len(reference),
            scrape_state_domains_count=len(state.merchant_records),
            overlapping_domains_count=overlap.overlapping_domains,
            overlap_percentage=overlap.overlap_percentage,
            overlapping_with_marker_count=len(matched_with_marker),
            marker_percentage_in_overlap=marker_percentage,
            extracted_at=state.extracted_at,
            last_updated=utc_now_iso(),
        )
        log_event(
            logger,
            logging.INFO,
            "scrape_state_comparison_completed",
            reference_domains=len(reference),
            scrape_state_domains=len(state_domains),
            overlapping=overlap.overlapping_domains,
            overlap_percentage=overlap.overlap_percentage,
            unique_in_reference=unique_in_reference,
            unique_in_scrape_state=unique_in_state,
            matched_with_marker=len(matched_with_marker),
        )
        return StateComparisonResult(
            overlap=overlap,
            rows=rows,
            summary=summary,
            unique_in_reference=unique_in_reference,
            unique_in_scrape_state=unique_in_state,
        )

    def run(self) -> StateComparisonResult:
        """
        Compare and write `<site>-comparison.csv` and `<site>-comparison.json`.
        """

        result = self.compare()
        output_dir = Path(self._settings.output_dir)
        site = self._settings.comparison_site
        records = [row.as_record() for row in result.rows]

        write_rows_csv(
            output_dir / CSV_SUBDIR / f"{site}-comparison.csv",
            fields=STATE_ROW_FIELDS,
            rows=records,
        )
        write_json(
            output_dir / f"{site}-comparison.json",
            {
                "summary": result.summary.model_dump(by_alias=True),
                "records": records,
            },
        )
        return result
