"""
Scraping-layer exceptions.
"""

from __future__ import annotations


class ScrapingError(Exception):
    """Base exception for merchant scraping failures."""


class FirecrawlError(ScrapingError):
    """Raised when the Firecrawl API cannot complete a request after retries."""


class ScrapeStateError(ScrapingError):
    """Raised when the scrape state file is missing or malformed."""
