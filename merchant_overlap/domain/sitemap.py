"""
merchant_overlap/domain/sitemap.py

Domain models for parsed sitemap documents.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SitemapUrl:
    """
    One `<url>` entry of a sitemap. Only `location` drives domain extraction.
    """

    location: str
    last_modified: str | None = None
    change_frequency: str | None = None
    priority: str | None = None


@dataclass(frozen=True)
class ParsedSitemap:
    """
    URLs read from one sitemap document, labelled with their source.
    """

    source_label: str
    urls: list[SitemapUrl] = field(default_factory=list)
