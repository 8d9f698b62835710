from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from merchant_overlap.config import (
    get_analysis_settings,
    get_firecrawl_settings,
    get_merchant_scrape_settings,
    load_extraction_rules,
)
from merchant_overlap.extraction.rules import DEFAULT_EXTRACTION_RULES

SETTINGS_GETTERS = (get_analysis_settings, get_firecrawl_settings, get_merchant_scrape_settings)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    for name in (
        "MERCHANT_OVERLAP_OUTPUT_DIR",
        "MERCHANT_OVERLAP_REFERENCE_DIR",
        "MERCHANT_OVERLAP_SITEMAP_MAX_WORKERS",
        "MERCHANT_OVERLAP_INCLUDE_SCRAPE_STATE",
        "MERCHANT_OVERLAP_SCRAPE_STATE_PATH",
        "FIRECRAWL_API_KEY",
        "FIRECRAWL_API_URL",
        "FIRECRAWL_MAX_RETRIES",
        "MERCHANT_SCRAPE_SITEMAP_PAGES",
        "MERCHANT_SCRAPE_BATCH_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    for getter in SETTINGS_GETTERS:
        getter.cache_clear()
    yield
    for getter in SETTINGS_GETTERS:
        getter.cache_clear()


def test_analysis_settings_defaults() -> None:
    settings = get_analysis_settings()

    assert settings.reference_dir == "reference"
    assert settings.competitors_dir == "competitors"
    assert settings.output_dir == "output"
    assert Path(settings.scrape_state_path) == Path("output") / "scrape-state.json"
    assert settings.include_scrape_state is False
    assert settings.sitemap_max_workers == 4
    assert settings.extraction_rules_path is None


def test_analysis_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MERCHANT_OVERLAP_OUTPUT_DIR", "results")
    monkeypatch.setenv("MERCHANT_OVERLAP_INCLUDE_SCRAPE_STATE", "yes")
    monkeypatch.setenv("MERCHANT_OVERLAP_SITEMAP_MAX_WORKERS", "0")

    settings = get_analysis_settings()

    assert settings.output_dir == "results"
    assert Path(settings.scrape_state_path) == Path("results") / "scrape-state.json"
    assert settings.include_scrape_state is True
    assert settings.sitemap_max_workers == 1


def test_env_file_values_do_not_override_process_env(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (tmp_path / ".env").write_text(
        "# comment\nFIRECRAWL_API_KEY='fc-from-file'\nFIRECRAWL_MAX_RETRIES=7\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("FIRECRAWL_MAX_RETRIES", "2")

    try:
        settings = get_firecrawl_settings()
    finally:
        os.environ.pop("FIRECRAWL_API_KEY", None)

    assert settings.api_key == "fc-from-file"
    assert settings.max_retries == 2


def test_firecrawl_settings_strip_trailing_slash(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FIRECRAWL_API_URL", "http://localhost:3002/")
    monkeypatch.setenv("FIRECRAWL_MAX_RETRIES", "not-a-number")

    settings = get_firecrawl_settings()

    assert settings.api_key is None
    assert settings.api_url == "http://localhost:3002"
    assert settings.max_retries == 3


def test_merchant_scrape_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MERCHANT_SCRAPE_SITEMAP_PAGES", "a, b,,c")
    monkeypatch.setenv("MERCHANT_SCRAPE_BATCH_SIZE", "-5")

    settings = get_merchant_scrape_settings()

    assert settings.sitemap_pages == ("a", "b", "c")
    assert settings.batch_size == 1
    assert settings.merchant_path_prefix == "/at/"


def test_default_sitemap_pages() -> None:
    pages = get_merchant_scrape_settings().sitemap_pages
    assert pages[0] == "a"
    assert pages[-1] == "0-9"
    assert len(pages) == 27


# ---------------------------------------------------------------------------
# Extraction rules
# ---------------------------------------------------------------------------


def test_extraction_rules_default_without_path() -> None:
    assert load_extraction_rules(config_path=None) is DEFAULT_EXTRACTION_RULES


def test_extraction_rules_overrides(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(
        json.dumps(
            {
                "primary_aggregator_host": " deals.example.net ",
                "marker_segments": ["store", "", 3, "brand"],
                "coupon_aggregator_marker": "",
                "unknown_key": "ignored",
            }
        ),
        encoding="utf-8",
    )

    rules = load_extraction_rules(config_path=str(path))

    assert rules.primary_aggregator_host == "deals.example.net"
    assert rules.marker_segments == ("store", "brand")
    assert rules.coupon_aggregator_marker == DEFAULT_EXTRACTION_RULES.coupon_aggregator_marker


def test_extraction_rules_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_extraction_rules(config_path=str(tmp_path / "missing.json"))


def test_extraction_rules_must_be_object(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_extraction_rules(config_path=str(path))


def test_extraction_rules_invalid_domain_pattern(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"domain_pattern": "([a-z"}), encoding="utf-8")
    with pytest.raises(ValueError, match="domain_pattern"):
        load_extraction_rules(config_path=str(path))


def test_extraction_rules_custom_domain_pattern(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"domain_pattern": r"^[a-z]+\.shop$"}), encoding="utf-8")

    rules = load_extraction_rules(config_path=str(path))

    assert rules.compiled_domain_pattern.fullmatch("widgets.shop")
    assert not rules.compiled_domain_pattern.fullmatch("widgets.com")
