"""
merchant_overlap/schemas/overlap.py

Serialized contracts of overlap analysis results.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from merchant_overlap.domain.overlap import AnalysisResult, OverlapResult


class OverlapResultResponse(BaseModel):
    """
    Overlap figures for one competitor source.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    source_name: str
    total_domains: int = Field(..., ge=0)
    overlapping_domains: int = Field(..., ge=0)
    overlap_percentage: float = Field(..., ge=0.0, le=100.0)

    @classmethod
    def from_result(cls, result: OverlapResult) -> "OverlapResultResponse":
        return cls(
            source_name=result.source_name,
            total_domains=result.total_domains,
            overlapping_domains=result.overlapping_domains,
            overlap_percentage=result.overlap_percentage,
        )


class OverlapReportResponse(BaseModel):
    """
    Results document consumed by chart and report renderers.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reference_domains_count: int = Field(..., ge=0)
    competitors: list[OverlapResultResponse] = Field(default_factory=list)

    @classmethod
    def from_analysis(cls, analysis: AnalysisResult) -> "OverlapReportResponse":
        return cls(
            reference_domains_count=analysis.reference_domains_count,
            competitors=[
                OverlapResultResponse.from_result(result)
                for result in analysis.competitor_results
            ],
        )


class OverlapCompareRequest(BaseModel):
    """
    Ad-hoc comparison of explicit domain lists.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    reference: list[str] = Field(default_factory=list)
    competitors: dict[str, list[str]] = Field(default_factory=dict)
