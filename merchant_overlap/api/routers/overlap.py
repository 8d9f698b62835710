"""
merchant_overlap/api/routers/overlap.py

Overlap analysis endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from merchant_overlap.comparison import compare_all
from merchant_overlap.domain.overlap import AnalysisResult
from merchant_overlap.schemas.overlap import OverlapCompareRequest, OverlapReportResponse
from merchant_overlap.services.overlap_analysis_service import (
    OverlapAnalysisService,
    get_overlap_analysis_service,
)

router = APIRouter(prefix="/overlap", tags=["overlap"])


@router.post("/analyze", response_model=OverlapReportResponse, response_model_by_alias=True)
def analyze_overlap(
    service: OverlapAnalysisService = Depends(get_overlap_analysis_service),
) -> OverlapReportResponse:
    """
    Run the configured sitemap overlap analysis and persist its outputs.
    """

    try:
        analysis = service.run()
    except (ValueError, FileNotFoundError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return OverlapReportResponse.from_analysis(analysis)


@router.post("/compare", response_model=OverlapReportResponse, response_model_by_alias=True)
def compare_domain_lists(payload: OverlapCompareRequest) -> OverlapReportResponse:
    """
    Rank posted competitor domain lists against a posted reference list.
    """

    reference = {domain for domain in payload.reference if domain}
    competitors = {
        name: {domain for domain in domains if domain}
        for name, domains in payload.competitors.items()
    }
    analysis = AnalysisResult(
        reference_domains_count=len(reference),
        competitor_results=compare_all(reference, competitors),
    )
    return OverlapReportResponse.from_analysis(analysis)
