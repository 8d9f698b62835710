"""
Domain models shared by extraction, comparison and reporting.
"""

from merchant_overlap.domain.overlap import (
    AnalysisResult,
    Domain,
    ExtractionOutcome,
    OverlapResult,
    Rejected,
)
from merchant_overlap.domain.sitemap import ParsedSitemap, SitemapUrl

__all__ = [
    "AnalysisResult",
    "Domain",
    "ExtractionOutcome",
    "OverlapResult",
    "ParsedSitemap",
    "Rejected",
    "SitemapUrl",
]
