"""
Discovery of merchant page links from the merchant site's sitemap pages.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from urllib.parse import urlsplit

from merchant_overlap.config.models import MerchantScrapeSettings
from merchant_overlap.logging_utils import log_event
from merchant_overlap.schemas.scrape_state import MerchantRecord, ScrapeState
from merchant_overlap.scraping.firecrawl_client import FirecrawlClient
from merchant_overlap.scraping.state_store import ScrapeStateStore, state_file_path, utc_now_iso

logger = logging.getLogger(__name__)

TEST_MODE_SITEMAP_PAGES = 2


def merchant_link_pattern(site_base_url: str, path_prefix: str) -> re.Pattern[str]:
    host = urlsplit(site_base_url).netloc
    return re.compile(rf"https?://{re.escape(host)}{re.escape(path_prefix)}.+")


def clean_merchant_links(links: Iterable[str]) -> list[str]:
    """
    Drop fragments and query-string links; dedupe preserving first-seen order.
    """

    seen: set[str] = set()
    cleaned: list[str] = []
    for link in links:
        candidate = link.split("#", 1)[0]
        if "?" in candidate or candidate in seen:
            continue
        seen.add(candidate)
        cleaned.append(candidate)
    return cleaned


def build_merchant_records(links: Iterable[str], *, path_prefix: str) -> list[MerchantRecord]:
    records: list[MerchantRecord] = []
    for link in links:
        parts = link.split(path_prefix)
        url_path = parts[1] if len(parts) > 1 else None
        records.append(MerchantRecord(url=link, url_path=url_path or None))
    return records


class MerchantLinkExtractor:
    """
    Scrapes sitemap index pages for merchant links and writes the initial state file.
    """

    def __init__(
        self,
        *,
        client: FirecrawlClient,
        settings: MerchantScrapeSettings,
    ) -> None:
        self.client = client
        self.settings = settings
        self.link_pattern = merchant_link_pattern(
            settings.site_base_url,
            settings.merchant_path_prefix,
        )

    def sitemap_page_urls(self, *, test_mode: bool = False) -> list[str]:
        urls = [f"{self.settings.site_base_url}/sitemap/{page}" for page in self.settings.sitemap_pages]
        return urls[:TEST_MODE_SITEMAP_PAGES] if test_mode else urls

    def extract(self, *, test_mode: bool = False) -> ScrapeState:
        page_urls = self.sitemap_page_urls(test_mode=test_mode)
        log_event(
            logger,
            logging.INFO,
            "merchant_link_extraction_started",
            sitemap_pages=len(page_urls),
            test_mode=test_mode,
        )

        pages = self.client.batch_scrape(page_urls, formats=["links"])
        scraped_pages = 0
        total_links = 0
        merchant_links: list[str] = []
        for page in pages:
            if not page.links:
                log_event(
                    logger,
                    logging.WARNING,
                    "sitemap_page_without_links",
                    source_url=page.source_url,
                )
                continue
            scraped_pages += 1
            total_links += len(page.links)
            matched = [link for link in page.links if self.link_pattern.match(link)]
            merchant_links.extend(matched)
            log_event(
                logger,
                logging.INFO,
                "sitemap_page_links_extracted",
                source_url=page.source_url,
                links=len(page.links),
                merchant_links=len(matched),
            )

        records = build_merchant_records(
            clean_merchant_links(merchant_links),
            path_prefix=self.settings.merchant_path_prefix,
        )
        now = utc_now_iso()
        state = ScrapeState(
            total_links=len(records),
            pending_links=len(records),
            total_sitemap_pages=len(page_urls),
            scraped_sitemap_pages=scraped_pages,
            extracted_at=now,
            last_updated=now,
            test_mode=test_mode,
            merchant_records=records,
        )

        store = ScrapeStateStore(state_file_path(self.settings.output_dir, test_mode=test_mode))
        store.save(state)
        log_event(
            logger,
            logging.INFO,
            "merchant_link_extraction_completed",
            links_found=total_links,
            merchant_links=len(merchant_links),
            unique_merchant_links=len(records),
            state_path=str(store.path),
        )
        return state
