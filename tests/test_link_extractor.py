"""
tests/test_link_extractor.py

Pytest unit tests for merchant link discovery.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from merchant_overlap.config.models import MerchantScrapeSettings
from merchant_overlap.scraping import MerchantLinkExtractor, ScrapedPage
from merchant_overlap.scraping.link_extractor import (
    build_merchant_records,
    clean_merchant_links,
    merchant_link_pattern,
)

BASE_URL = "https://www.dontpayfull.com"


def _settings(output_dir: Path, **overrides: Any) -> MerchantScrapeSettings:
    values = {
        "site_base_url": BASE_URL,
        "merchant_path_prefix": "/at/",
        "sitemap_pages": ("a", "b", "c"),
        "batch_size": 2,
        "max_attempts": 3,
        "batch_delay_seconds": 0.0,
        "default_run_limit": 100,
        "output_dir": str(output_dir),
    }
    values.update(overrides)
    return MerchantScrapeSettings(**values)


class FakeClient:
    def __init__(self, pages: list[ScrapedPage]) -> None:
        self.pages = pages
        self.requests: list[tuple[list[str], list[str]]] = []

    def batch_scrape(self, urls, *, formats):
        self.requests.append((list(urls), list(formats)))
        return self.pages


def test_merchant_link_pattern() -> None:
    pattern = merchant_link_pattern(BASE_URL, "/at/")
    assert pattern.match("https://www.dontpayfull.com/at/nike.com")
    assert pattern.match("http://www.dontpayfull.com/at/target.com")
    assert not pattern.match("https://www.dontpayfull.com/at/")
    assert not pattern.match("https://www.dontpayfull.com/sitemap/a")
    assert not pattern.match("https://evil.example.com/at/nike.com")


def test_clean_merchant_links() -> None:
    cleaned = clean_merchant_links(
        [
            f"{BASE_URL}/at/nike.com#coupons",
            f"{BASE_URL}/at/nike.com",
            f"{BASE_URL}/at/target.com?ref=1",
            f"{BASE_URL}/at/gap.com",
        ]
    )
    assert cleaned == [f"{BASE_URL}/at/nike.com", f"{BASE_URL}/at/gap.com"]


def test_build_merchant_records() -> None:
    records = build_merchant_records(
        [f"{BASE_URL}/at/nike.com", f"{BASE_URL}/at/"],
        path_prefix="/at/",
    )
    assert [(record.url_path, record.status, record.attempts) for record in records] == [
        ("nike.com", "pending", 0),
        (None, "pending", 0),
    ]


def test_sitemap_page_urls(tmp_path: Path) -> None:
    extractor = MerchantLinkExtractor(client=FakeClient([]), settings=_settings(tmp_path))  # type: ignore[arg-type]
    assert extractor.sitemap_page_urls() == [
        f"{BASE_URL}/sitemap/a",
        f"{BASE_URL}/sitemap/b",
        f"{BASE_URL}/sitemap/c",
    ]
    assert extractor.sitemap_page_urls(test_mode=True) == [
        f"{BASE_URL}/sitemap/a",
        f"{BASE_URL}/sitemap/b",
    ]


def test_extract_writes_initial_state(tmp_path: Path) -> None:
    client = FakeClient(
        [
            ScrapedPage(
                source_url=f"{BASE_URL}/sitemap/a",
                links=[
                    f"{BASE_URL}/at/nike.com",
                    f"{BASE_URL}/about",
                    f"{BASE_URL}/at/nike.com#top",
                    f"{BASE_URL}/at/adidas.com",
                ],
            ),
            ScrapedPage(source_url=f"{BASE_URL}/sitemap/b", links=[]),
        ]
    )
    extractor = MerchantLinkExtractor(client=client, settings=_settings(tmp_path))  # type: ignore[arg-type]

    state = extractor.extract(test_mode=True)

    assert client.requests == [
        ([f"{BASE_URL}/sitemap/a", f"{BASE_URL}/sitemap/b"], ["links"]),
    ]
    assert [record.url_path for record in state.merchant_records] == ["nike.com", "adidas.com"]
    assert state.total_links == 2
    assert state.pending_links == 2
    assert state.total_sitemap_pages == 2
    assert state.scraped_sitemap_pages == 1
    assert state.test_mode is True

    raw = json.loads((tmp_path / "test-scrape-state.json").read_text(encoding="utf-8"))
    assert raw["testMode"] is True
    assert raw["merchantRecords"][0]["url"] == f"{BASE_URL}/at/nike.com"
