"""
Runtime configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Input/output locations and tuning for overlap analysis runs.
    """

    reference_dir: str
    competitors_dir: str
    output_dir: str
    scrape_state_path: str
    include_scrape_state: bool
    sitemap_max_workers: int
    extraction_rules_path: str | None
    comparison_site: str


@dataclass(frozen=True)
class FirecrawlSettings:
    """
    Connection and retry settings for the Firecrawl scraping API.
    """

    api_key: str | None
    api_url: str
    timeout_seconds: float
    max_retries: int
    backoff_initial_seconds: float
    backoff_multiplier: float
    poll_interval_seconds: float
    poll_timeout_seconds: float


@dataclass(frozen=True)
class MerchantScrapeSettings:
    """
    Target site layout and batching for merchant page scraping.
    """

    site_base_url: str
    merchant_path_prefix: str
    sitemap_pages: tuple[str, ...]
    batch_size: int
    max_attempts: int
    batch_delay_seconds: float
    default_run_limit: int
    output_dir: str
