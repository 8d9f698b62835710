"""
Aggregation of extracted domains into per-source domain sets.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from merchant_overlap.domain.overlap import Domain
from merchant_overlap.domain.sitemap import ParsedSitemap
from merchant_overlap.extraction.extractor import DomainExtractor
from merchant_overlap.logging_utils import log_event
from merchant_overlap.sitemaps.discovery import parse_sitemap_directory

logger = logging.getLogger(__name__)

REJECTED_SAMPLE_SIZE = 5


@dataclass
class DomainExtractionReport:
    """
    Domains and rejected URLs for one parsed sitemap.
    """

    source_label: str
    domains: set[str] = field(default_factory=set)
    rejected_urls: list[str] = field(default_factory=list)


def extract_domains(
    sitemap: ParsedSitemap,
    extractor: DomainExtractor | None = None,
) -> DomainExtractionReport:
    active = extractor or DomainExtractor()
    report = DomainExtractionReport(source_label=sitemap.source_label)
    for entry in sitemap.urls:
        outcome = active.extract(entry.location)
        if isinstance(outcome, Domain):
            report.domains.add(outcome.name)
        else:
            report.rejected_urls.append(entry.location)
    return report


def build_domain_set(
    sitemap: ParsedSitemap,
    extractor: DomainExtractor | None = None,
) -> set[str]:
    """
    Unique domain names of one sitemap; rejected URLs are counted and sampled in the log.
    """

    report = extract_domains(sitemap, extractor)
    if report.rejected_urls:
        log_event(
            logger,
            logging.INFO,
            "urls_rejected",
            source=report.source_label,
            rejected_count=len(report.rejected_urls),
            sample=report.rejected_urls[:REJECTED_SAMPLE_SIZE],
            more=max(0, len(report.rejected_urls) - REJECTED_SAMPLE_SIZE),
        )
    return report.domains


def process_directory(
    directory: str | Path,
    label: str,
    extractor: DomainExtractor | None = None,
    *,
    max_workers: int = 4,
) -> set[str]:
    """
    Union of the domain sets of every sitemap under `directory`.
    """

    sitemaps = parse_sitemap_directory(directory, max_workers=max_workers)
    log_event(
        logger,
        logging.INFO,
        "sitemap_directory_parsed",
        source=label,
        directory=str(directory),
        sitemap_files=len(sitemaps),
    )
    return domain_set_from_sitemaps(sitemaps, label, extractor)


def domain_set_from_sitemaps(
    sitemaps: Iterable[ParsedSitemap],
    label: str,
    extractor: DomainExtractor | None = None,
) -> set[str]:
    active = extractor or DomainExtractor()
    all_domains: set[str] = set()
    for sitemap in sitemaps:
        domains = build_domain_set(sitemap, active)
        log_event(
            logger,
            logging.INFO,
            "sitemap_domains_found",
            source=label,
            sitemap=sitemap.source_label,
            domains=len(domains),
        )
        all_domains.update(domains)

    log_event(
        logger,
        logging.INFO,
        "domain_set_built",
        source=label,
        unique_domains=len(all_domains),
    )
    return all_domains


def build_domain_url_map(
    sitemaps: Iterable[ParsedSitemap],
    extractor: DomainExtractor | None = None,
    *,
    restrict_to: set[str] | None = None,
) -> dict[str, str]:
    """
    First catalog URL seen for each extracted domain name.
    """

    active = extractor or DomainExtractor()
    domain_urls: dict[str, str] = {}
    for sitemap in sitemaps:
        for entry in sitemap.urls:
            name = active.extract_name(entry.location)
            if name is None or name in domain_urls:
                continue
            if restrict_to is not None and name not in restrict_to:
                continue
            domain_urls[name] = entry.location

    log_event(
        logger,
        logging.INFO,
        "domain_url_map_built",
        entries=len(domain_urls),
    )
    return domain_urls
