"""
merchant_overlap/schemas/scrape_state.py

On-disk schema of the resumable merchant scrape state file.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RecordStatus = Literal["pending", "completed", "failed"]


class MerchantRecord(BaseModel):
    """
    One merchant page tracked by the scraper.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str = Field(min_length=1)
    url_path: str | None = None
    status: RecordStatus = "pending"
    attempts: int = Field(default=0, ge=0)
    processed_at: str | None = None
    last_attempt: str | None = None
    store_name: str | None = None
    has_amazon_deal: bool | None = None
    data_id: str | None = None
    screenshot_url: str | None = None


class ScrapeState(BaseModel):
    """
    Progress counters plus every tracked merchant record.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_links: int = Field(default=0, ge=0)
    pending_links: int = Field(default=0, ge=0)
    completed_links: int = Field(default=0, ge=0)
    failed_links: int = Field(default=0, ge=0)
    pages_with_amazon_deals: int = Field(default=0, ge=0)
    total_sitemap_pages: int = Field(default=0, ge=0)
    scraped_sitemap_pages: int = Field(default=0, ge=0)
    extracted_at: str | None = None
    last_updated: str | None = None
    test_mode: bool = False
    merchant_records: list[MerchantRecord]

    def refresh_counters(self) -> None:
        self.completed_links = sum(1 for r in self.merchant_records if r.status == "completed")
        self.failed_links = sum(1 for r in self.merchant_records if r.status == "failed")
        self.pending_links = max(0, self.total_links - self.completed_links - self.failed_links)
        self.pages_with_amazon_deals = sum(
            1 for r in self.merchant_records if r.has_amazon_deal is True
        )
