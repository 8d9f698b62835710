"""
Application services orchestrating analysis runs.
"""

from merchant_overlap.services.competitor_csv_service import (
    CompetitorCsvService,
    CompetitorCsvSummary,
)
from merchant_overlap.services.overlap_analysis_service import (
    OverlapAnalysisService,
    get_overlap_analysis_service,
)
from merchant_overlap.services.scrape_state_comparison_service import (
    ScrapeStateComparisonService,
    StateComparisonResult,
)

__all__ = [
    "CompetitorCsvService",
    "CompetitorCsvSummary",
    "OverlapAnalysisService",
    "ScrapeStateComparisonService",
    "StateComparisonResult",
    "get_overlap_analysis_service",
]
