"""
Pydantic schemas for persisted and served documents.
"""

from merchant_overlap.schemas.comparison import StateComparisonSummary
from merchant_overlap.schemas.overlap import (
    OverlapCompareRequest,
    OverlapReportResponse,
    OverlapResultResponse,
)
from merchant_overlap.schemas.scrape_state import MerchantRecord, RecordStatus, ScrapeState

__all__ = [
    "MerchantRecord",
    "OverlapCompareRequest",
    "OverlapReportResponse",
    "OverlapResultResponse",
    "RecordStatus",
    "ScrapeState",
    "StateComparisonSummary",
]
