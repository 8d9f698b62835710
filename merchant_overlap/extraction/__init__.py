"""
Merchant domain extraction from catalog URLs.
"""

from merchant_overlap.extraction.domain_sets import (
    DomainExtractionReport,
    build_domain_set,
    build_domain_url_map,
    domain_set_from_sitemaps,
    extract_domains,
    process_directory,
)
from merchant_overlap.extraction.extractor import DomainExtractor
from merchant_overlap.extraction.rules import DEFAULT_EXTRACTION_RULES, ExtractionRules

__all__ = [
    "DEFAULT_EXTRACTION_RULES",
    "DomainExtractionReport",
    "DomainExtractor",
    "ExtractionRules",
    "build_domain_set",
    "build_domain_url_map",
    "domain_set_from_sitemaps",
    "extract_domains",
    "process_directory",
]
