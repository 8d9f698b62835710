"""
Config helpers for overlap analysis and merchant scraping.
"""

from merchant_overlap.config.loader import (
    get_analysis_settings,
    get_firecrawl_settings,
    get_merchant_scrape_settings,
    load_env_files,
    load_extraction_rules,
)
from merchant_overlap.config.models import (
    AnalysisSettings,
    FirecrawlSettings,
    MerchantScrapeSettings,
)

__all__ = [
    "AnalysisSettings",
    "FirecrawlSettings",
    "MerchantScrapeSettings",
    "get_analysis_settings",
    "get_firecrawl_settings",
    "get_merchant_scrape_settings",
    "load_env_files",
    "load_extraction_rules",
]
