"""
Per-URL comparison rows for CSV and JSON export.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Set
from dataclasses import dataclass
from typing import Any

from merchant_overlap.domain.sitemap import ParsedSitemap
from merchant_overlap.extraction.extractor import DomainExtractor
from merchant_overlap.schemas.scrape_state import MerchantRecord

MATCHED = "Matched"
NOT_MATCHED = "Not Matched"

COMPETITOR_ROW_FIELDS = ["URL", "Match_Status", "domain", "reference loc"]
STATE_ROW_FIELDS = [
    "URL",
    "Match_Status",
    "Last_Segment",
    "3rd Party Link",
    "Match URL",
    "dataId",
    "Merchant Name",
]


def match_status(matched: bool) -> str:
    return MATCHED if matched else NOT_MATCHED


@dataclass(frozen=True)
class CompetitorComparisonRow:
    """
    One competitor sitemap URL with its extracted domain and reference match.
    """

    url: str
    match_status: str
    domain: str
    reference_url: str

    def as_record(self) -> dict[str, Any]:
        return {
            "URL": self.url,
            "Match_Status": self.match_status,
            "domain": self.domain,
            "reference loc": self.reference_url,
        }


@dataclass(frozen=True)
class StateComparisonRow:
    """
    One scraped merchant record annotated with its reference match.
    """

    url: str
    match_status: str
    last_segment: str
    third_party_link: bool
    match_url: str
    data_id: str | None
    merchant_name: str | None

    @property
    def matched(self) -> bool:
        return self.match_status == MATCHED

    def as_record(self) -> dict[str, Any]:
        return {
            "URL": self.url,
            "Match_Status": self.match_status,
            "Last_Segment": self.last_segment,
            "3rd Party Link": self.third_party_link,
            "Match URL": self.match_url,
            "dataId": self.data_id,
            "Merchant Name": self.merchant_name,
        }


def build_competitor_rows(
    sitemaps: Iterable[ParsedSitemap],
    *,
    reference_domains: Set[str],
    reference_urls: Mapping[str, str],
    extractor: DomainExtractor | None = None,
) -> list[CompetitorComparisonRow]:
    """
    Rows for every competitor URL that yields a domain; rejected URLs are omitted.
    """

    active = extractor or DomainExtractor()
    rows: list[CompetitorComparisonRow] = []
    for sitemap in sitemaps:
        for entry in sitemap.urls:
            name = active.extract_name(entry.location)
            if name is None:
                continue
            matched = name in reference_domains
            rows.append(
                CompetitorComparisonRow(
                    url=entry.location,
                    match_status=match_status(matched),
                    domain=name,
                    reference_url=reference_urls.get(name, "") if matched else "",
                )
            )
    return rows


def build_state_comparison_rows(
    records: Iterable[MerchantRecord],
    *,
    reference_domains: Set[str],
    reference_urls: Mapping[str, str],
) -> list[StateComparisonRow]:
    rows: list[StateComparisonRow] = []
    for record in records:
        if not record.url_path:
            continue
        matched = record.url_path in reference_domains
        rows.append(
            StateComparisonRow(
                url=record.url,
                match_status=match_status(matched),
                last_segment=record.url_path,
                third_party_link=bool(record.has_amazon_deal),
                match_url=reference_urls.get(record.url_path, "") if matched else "",
                data_id=record.data_id,
                merchant_name=record.store_name or None,
            )
        )
    return rows
