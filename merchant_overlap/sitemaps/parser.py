"""
Sitemap document parsing.

Accepts the standard `urlset` layout, non-standard roots wrapping `url`
entries, and arbitrary nesting of `loc` elements. Documents without any
recognizable entry fall back to a raw URL scan of the text.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path

from merchant_overlap.domain.sitemap import ParsedSitemap, SitemapUrl
from merchant_overlap.logging_utils import log_event

logger = logging.getLogger(__name__)

URL_TEXT_REGEX = re.compile(r"https?://[^\s<>\"']+")


def parse_sitemap(document: bytes | str, source_label: str) -> ParsedSitemap:
    """
    Parse one sitemap document into its URL entries. Never raises on bad XML.
    """

    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        log_event(
            logger,
            logging.WARNING,
            "sitemap_parse_failed",
            source=source_label,
            error=str(exc),
        )
        return ParsedSitemap(source_label=source_label, urls=[])

    urls = _urlset_entries(root)
    if not urls:
        urls = _wrapped_url_entries(root)
    if not urls:
        urls = _nested_loc_entries(root)
    if not urls:
        urls = _scan_raw_urls(document)

    if not urls:
        log_event(
            logger,
            logging.WARNING,
            "sitemap_empty",
            source=source_label,
        )
    return ParsedSitemap(source_label=source_label, urls=urls)


def parse_sitemap_file(path: str | Path, source_label: str | None = None) -> ParsedSitemap:
    """
    Read and parse one sitemap file. The label defaults to the file stem.
    """

    file_path = Path(path)
    document = file_path.read_bytes()
    return parse_sitemap(document, source_label or file_path.stem)


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _child_text(node: ET.Element, local_name: str) -> str | None:
    for child in list(node):
        if _local_name(child.tag) == local_name:
            text = (child.text or "").strip()
            return text or None
    return None


def _url_entry(node: ET.Element) -> SitemapUrl | None:
    location = _child_text(node, "loc")
    if not location:
        return None
    return SitemapUrl(
        location=location,
        last_modified=_child_text(node, "lastmod"),
        change_frequency=_child_text(node, "changefreq"),
        priority=_child_text(node, "priority"),
    )


def _entries_from(nodes: Iterator[ET.Element]) -> list[SitemapUrl]:
    entries: list[SitemapUrl] = []
    for node in nodes:
        entry = _url_entry(node)
        if entry is not None:
            entries.append(entry)
    return entries


def _urlset_entries(root: ET.Element) -> list[SitemapUrl]:
    if _local_name(root.tag) != "urlset":
        return []
    return _entries_from(child for child in root if _local_name(child.tag) == "url")


def _wrapped_url_entries(root: ET.Element) -> list[SitemapUrl]:
    if _local_name(root.tag) == "urlset":
        return []
    return _entries_from(child for child in root if _local_name(child.tag) == "url")


def _nested_loc_entries(root: ET.Element) -> list[SitemapUrl]:
    return _entries_from(root.iter())


def _scan_raw_urls(document: bytes | str) -> list[SitemapUrl]:
    if isinstance(document, bytes):
        text = document.decode("utf-8", errors="replace")
    else:
        text = document
    return [SitemapUrl(location=match) for match in URL_TEXT_REGEX.findall(text)]
