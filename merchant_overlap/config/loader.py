"""
Environment + JSON config loader for overlap analysis and merchant scraping.
"""

from __future__ import annotations

import json
import os
import re
import string
from dataclasses import fields, replace
from functools import lru_cache
from pathlib import Path

from merchant_overlap.config.models import (
    AnalysisSettings,
    FirecrawlSettings,
    MerchantScrapeSettings,
)
from merchant_overlap.extraction.rules import DEFAULT_EXTRACTION_RULES, ExtractionRules

DEFAULT_SITEMAP_PAGES = (*string.ascii_lowercase, "0-9")


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    for filename in (".env", ".env.local"):
        env_path = Path.cwd() / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


@lru_cache(maxsize=1)
def get_analysis_settings() -> AnalysisSettings:
    """
    Return cached overlap analysis settings from environment variables.
    """

    load_env_files()
    output_dir = _get_str_env("MERCHANT_OVERLAP_OUTPUT_DIR", "output")
    return AnalysisSettings(
        reference_dir=_get_str_env("MERCHANT_OVERLAP_REFERENCE_DIR", "reference"),
        competitors_dir=_get_str_env("MERCHANT_OVERLAP_COMPETITORS_DIR", "competitors"),
        output_dir=output_dir,
        scrape_state_path=_get_str_env(
            "MERCHANT_OVERLAP_SCRAPE_STATE_PATH",
            str(Path(output_dir) / "scrape-state.json"),
        ),
        include_scrape_state=_get_bool_env("MERCHANT_OVERLAP_INCLUDE_SCRAPE_STATE", False),
        sitemap_max_workers=max(
            1,
            _get_int_env("MERCHANT_OVERLAP_SITEMAP_MAX_WORKERS", 4),
        ),
        extraction_rules_path=_get_optional_str_env("MERCHANT_OVERLAP_EXTRACTION_RULES_PATH"),
        comparison_site=_get_str_env("MERCHANT_OVERLAP_COMPARISON_SITE", "dontpayfull.com"),
    )


@lru_cache(maxsize=1)
def get_firecrawl_settings() -> FirecrawlSettings:
    """
    Return cached Firecrawl API settings from environment variables.
    """

    load_env_files()
    return FirecrawlSettings(
        api_key=_get_optional_str_env("FIRECRAWL_API_KEY"),
        api_url=_get_str_env("FIRECRAWL_API_URL", "https://api.firecrawl.dev").rstrip("/"),
        timeout_seconds=max(
            1.0,
            _get_float_env("FIRECRAWL_TIMEOUT_SECONDS", 60.0),
        ),
        max_retries=max(
            0,
            _get_int_env("FIRECRAWL_MAX_RETRIES", 3),
        ),
        backoff_initial_seconds=max(
            0.1,
            _get_float_env("FIRECRAWL_BACKOFF_INITIAL_SECONDS", 1.0),
        ),
        backoff_multiplier=max(
            1.0,
            _get_float_env("FIRECRAWL_BACKOFF_MULTIPLIER", 2.0),
        ),
        poll_interval_seconds=max(
            0.5,
            _get_float_env("FIRECRAWL_POLL_INTERVAL_SECONDS", 2.0),
        ),
        poll_timeout_seconds=max(
            10.0,
            _get_float_env("FIRECRAWL_POLL_TIMEOUT_SECONDS", 900.0),
        ),
    )


@lru_cache(maxsize=1)
def get_merchant_scrape_settings() -> MerchantScrapeSettings:
    """
    Return cached merchant scraping settings from environment variables.
    """

    load_env_files()
    return MerchantScrapeSettings(
        site_base_url=_get_str_env(
            "MERCHANT_SCRAPE_SITE_BASE_URL",
            "https://www.dontpayfull.com",
        ).rstrip("/"),
        merchant_path_prefix=_get_str_env("MERCHANT_SCRAPE_PATH_PREFIX", "/at/"),
        sitemap_pages=_get_list_env("MERCHANT_SCRAPE_SITEMAP_PAGES", DEFAULT_SITEMAP_PAGES),
        batch_size=max(
            1,
            _get_int_env("MERCHANT_SCRAPE_BATCH_SIZE", 50),
        ),
        max_attempts=max(
            1,
            _get_int_env("MERCHANT_SCRAPE_MAX_ATTEMPTS", 3),
        ),
        batch_delay_seconds=max(
            0.0,
            _get_float_env("MERCHANT_SCRAPE_BATCH_DELAY_SECONDS", 2.0),
        ),
        default_run_limit=max(
            1,
            _get_int_env("MERCHANT_SCRAPE_RUN_LIMIT", 2000),
        ),
        output_dir=_get_str_env("MERCHANT_OVERLAP_OUTPUT_DIR", "output"),
    )


def load_extraction_rules(*, config_path: str | None) -> ExtractionRules:
    """
    Load extraction rule overrides from a JSON object, falling back to defaults.
    """

    if not config_path:
        return DEFAULT_EXTRACTION_RULES

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Extraction rules file not found: {path}")

    raw_data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw_data, dict):
        raise ValueError("Invalid extraction rules: top-level value must be an object.")

    overrides: dict[str, object] = {}
    for rule_field in fields(ExtractionRules):
        if rule_field.name not in raw_data:
            continue
        value = raw_data[rule_field.name]
        default = getattr(DEFAULT_EXTRACTION_RULES, rule_field.name)
        if isinstance(default, tuple):
            normalized = _normalize_str_list(value)
            if normalized is not None:
                overrides[rule_field.name] = normalized
        elif isinstance(value, str) and value.strip():
            overrides[rule_field.name] = value.strip()

    pattern = overrides.get("domain_pattern")
    if isinstance(pattern, str):
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"Invalid extraction rules: domain_pattern does not compile: {exc}") from exc

    return replace(DEFAULT_EXTRACTION_RULES, **overrides)


def _normalize_str_list(value: object) -> tuple[str, ...] | None:
    if not isinstance(value, list):
        return None
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())
