"""
merchant_overlap/domain/overlap.py

Domain models for extracted merchant domains and overlap results.
"""

from __future__ import annotations

from dataclasses import dataclass, field

REJECT_MALFORMED_URL = "malformed_url"
REJECT_AGGREGATOR_NON_DOMAIN = "aggregator_non_domain_segment"
REJECT_AGGREGATOR_COUPONS_NON_DOMAIN = "aggregator_coupons_non_domain"
REJECT_NO_DOMAIN_FOUND = "no_domain_found"


@dataclass(frozen=True)
class Domain:
    """
    Merchant domain matched in a catalog URL.

    `full` is the token as it appeared in the URL; `name` is the canonical
    form used for set membership.
    """

    full: str
    name: str


@dataclass(frozen=True)
class Rejected:
    """
    Extraction outcome for a URL that yields no merchant domain.
    """

    url: str
    reason: str


ExtractionOutcome = Domain | Rejected


@dataclass(frozen=True)
class OverlapResult:
    """
    Overlap of one competitor domain set with the reference set.

    `overlap_percentage` is relative to the competitor's own total.
    """

    source_name: str
    total_domains: int
    overlapping_domains: int
    overlap_percentage: float


@dataclass(frozen=True)
class AnalysisResult:
    """
    Reference set size plus the ranked per-competitor overlap results.
    """

    reference_domains_count: int
    competitor_results: list[OverlapResult] = field(default_factory=list)
    unique_reference_domains: list[str] = field(default_factory=list)
