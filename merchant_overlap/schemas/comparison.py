"""
merchant_overlap/schemas/comparison.py

Serialized contract of the scrape-state comparison report.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StateComparisonSummary(BaseModel):
    """
    Headline figures of a reference catalog versus scrape-state comparison.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reference_domains_count: int = Field(..., ge=0)
    scrape_state_domains_count: int = Field(..., ge=0)
    overlapping_domains_count: int = Field(..., ge=0)
    overlap_percentage: float = Field(..., ge=0.0, le=100.0)
    overlapping_with_marker_count: int = Field(..., ge=0)
    marker_percentage_in_overlap: float = Field(..., ge=0.0, le=100.0)
    extracted_at: str | None = None
    last_updated: str
