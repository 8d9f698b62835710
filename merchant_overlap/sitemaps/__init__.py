"""
Sitemap ingestion: document parsing and on-disk discovery.
"""

from merchant_overlap.sitemaps.discovery import (
    CompetitorSource,
    competitor_base_name,
    discover_competitor_sources,
    find_sitemap_files,
    group_competitor_files,
    parse_sitemap_directory,
    parse_sitemap_files,
)
from merchant_overlap.sitemaps.parser import parse_sitemap, parse_sitemap_file

__all__ = [
    "CompetitorSource",
    "competitor_base_name",
    "discover_competitor_sources",
    "find_sitemap_files",
    "group_competitor_files",
    "parse_sitemap",
    "parse_sitemap_directory",
    "parse_sitemap_file",
    "parse_sitemap_files",
]
