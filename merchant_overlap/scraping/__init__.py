"""
Merchant site scraping through the Firecrawl API with resumable state.
"""

from merchant_overlap.scraping.errors import FirecrawlError, ScrapeStateError, ScrapingError
from merchant_overlap.scraping.firecrawl_client import FirecrawlClient, ScrapedPage
from merchant_overlap.scraping.link_extractor import MerchantLinkExtractor
from merchant_overlap.scraping.merchant_parser import MerchantPageAttributes, parse_merchant_page
from merchant_overlap.scraping.page_scraper import (
    MerchantPageScraper,
    ScrapeRunOptions,
    ScrapeRunSummary,
    select_records,
)
from merchant_overlap.scraping.state_store import (
    ScrapeStateStore,
    load_scrape_state_domains,
    scrape_state_domains,
    state_file_path,
)

__all__ = [
    "FirecrawlClient",
    "FirecrawlError",
    "MerchantLinkExtractor",
    "MerchantPageAttributes",
    "MerchantPageScraper",
    "ScrapeRunOptions",
    "ScrapeRunSummary",
    "ScrapeStateError",
    "ScrapeStateStore",
    "ScrapedPage",
    "ScrapingError",
    "load_scrape_state_domains",
    "parse_merchant_page",
    "scrape_state_domains",
    "select_records",
    "state_file_path",
]
