"""
tests/test_scrape_state_store.py

Pytest unit tests for scrape state persistence and its domain view.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from merchant_overlap.schemas.scrape_state import MerchantRecord, ScrapeState
from merchant_overlap.scraping import (
    ScrapeStateError,
    ScrapeStateStore,
    load_scrape_state_domains,
    scrape_state_domains,
    state_file_path,
)


def _state() -> ScrapeState:
    return ScrapeState(
        total_links=4,
        pending_links=4,
        extracted_at="2024-05-01T00:00:00Z",
        merchant_records=[
            MerchantRecord(url="https://www.dontpayfull.com/at/nike.com", url_path="nike.com"),
            MerchantRecord(
                url="https://www.dontpayfull.com/at/target.com",
                url_path="target.com",
                status="completed",
                has_amazon_deal=True,
                data_id="42",
            ),
            MerchantRecord(
                url="https://www.dontpayfull.com/at/gap.com",
                url_path="gap.com",
                status="failed",
                attempts=3,
            ),
            MerchantRecord(url="https://www.dontpayfull.com/at/"),
        ],
    )


def test_state_file_path_test_prefix(tmp_path: Path) -> None:
    assert state_file_path(tmp_path) == tmp_path / "scrape-state.json"
    assert state_file_path(tmp_path, test_mode=True) == tmp_path / "test-scrape-state.json"


def test_save_refreshes_counters_and_writes_camel_case(tmp_path: Path) -> None:
    store = ScrapeStateStore(tmp_path / "nested" / "scrape-state.json")
    state = _state()

    store.save(state)

    assert state.completed_links == 1
    assert state.failed_links == 1
    assert state.pending_links == 2
    assert state.pages_with_amazon_deals == 1
    assert state.last_updated is not None and state.last_updated.endswith("Z")

    raw = json.loads(store.path.read_text(encoding="utf-8"))
    assert raw["totalLinks"] == 4
    assert raw["pagesWithAmazonDeals"] == 1
    assert raw["merchantRecords"][1]["hasAmazonDeal"] is True
    assert raw["merchantRecords"][1]["dataId"] == "42"
    assert not store.path.with_suffix(".json.tmp").exists()


def test_load_round_trips_saved_state(tmp_path: Path) -> None:
    store = ScrapeStateStore(tmp_path / "scrape-state.json")
    store.save(_state())

    loaded = store.load()

    assert store.exists()
    assert loaded.extracted_at == "2024-05-01T00:00:00Z"
    assert [record.status for record in loaded.merchant_records] == [
        "pending",
        "completed",
        "failed",
        "pending",
    ]


def test_load_accepts_camel_case_document(tmp_path: Path) -> None:
    path = tmp_path / "scrape-state.json"
    path.write_text(
        json.dumps(
            {
                "totalLinks": 1,
                "extractedAt": "2024-05-01T00:00:00Z",
                "merchantRecords": [
                    {"url": "https://www.dontpayfull.com/at/a.com", "urlPath": "a.com"}
                ],
            }
        ),
        encoding="utf-8",
    )

    state = ScrapeStateStore(path).load()

    assert state.merchant_records[0].url_path == "a.com"
    assert state.merchant_records[0].status == "pending"
    assert state.merchant_records[0].attempts == 0


@pytest.mark.parametrize("content", ["{not json", json.dumps({"totalLinks": 1})])
def test_load_rejects_invalid_documents(tmp_path: Path, content: str) -> None:
    path = tmp_path / "scrape-state.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ScrapeStateError):
        ScrapeStateStore(path).load()


def test_load_missing_file(tmp_path: Path) -> None:
    store = ScrapeStateStore(tmp_path / "missing.json")
    assert not store.exists()
    with pytest.raises(ScrapeStateError):
        store.load()


def test_scrape_state_domains_skip_records_without_path() -> None:
    assert scrape_state_domains(_state()) == {"nike.com", "target.com", "gap.com"}


def test_load_scrape_state_domains_optional_and_required(tmp_path: Path) -> None:
    missing = tmp_path / "missing.json"
    assert load_scrape_state_domains(missing, required=False) == set()
    with pytest.raises(ScrapeStateError):
        load_scrape_state_domains(missing, required=True)

    path = tmp_path / "scrape-state.json"
    ScrapeStateStore(path).save(_state())
    assert load_scrape_state_domains(path, required=True) == {"nike.com", "target.com", "gap.com"}


def test_load_rejects_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "scrape-state.json"
    path.write_bytes(b"\xff\xfe{bad")

    with pytest.raises(ScrapeStateError):
        ScrapeStateStore(path).load()
    assert load_scrape_state_domains(path, required=False) == set()


def test_load_rejects_directory_path(tmp_path: Path) -> None:
    path = tmp_path / "scrape-state.json"
    path.mkdir()

    with pytest.raises(ScrapeStateError):
        ScrapeStateStore(path).load()
    assert load_scrape_state_domains(path, required=False) == set()
