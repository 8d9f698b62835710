from __future__ import annotations

import csv
import tempfile
import unittest
from pathlib import Path

from merchant_overlap.domain.overlap import OverlapResult
from merchant_overlap.domain.sitemap import ParsedSitemap, SitemapUrl
from merchant_overlap.reporting import (
    COMPETITOR_ROW_FIELDS,
    MATCHED,
    NOT_MATCHED,
    STATE_ROW_FIELDS,
    build_competitor_rows,
    build_state_comparison_rows,
    format_overlap_table,
    write_domain_csv,
    write_rows_csv,
)
from merchant_overlap.schemas.scrape_state import MerchantRecord


def _read_csv(path: Path) -> list[dict[str, str]]:
    with path.open(encoding="utf-8", newline="") as handle:
        return list(csv.DictReader(handle))


class TestComparisonRows(unittest.TestCase):
    def test_competitor_rows_skip_rejected_urls(self) -> None:
        sitemap = ParsedSitemap(
            source_label="knoji",
            urls=[
                SitemapUrl(location="https://knoji.com/brands/nike.com"),
                SitemapUrl(location="https://knoji.com/brands/unknown.com"),
                SitemapUrl(location="https://knoji.com/about"),
            ],
        )

        rows = build_competitor_rows(
            [sitemap],
            reference_domains={"nike.com"},
            reference_urls={"nike.com": "https://ref.example.org/store/nike.com"},
        )

        self.assertEqual(
            [row.as_record() for row in rows],
            [
                {
                    "URL": "https://knoji.com/brands/nike.com",
                    "Match_Status": MATCHED,
                    "domain": "nike.com",
                    "reference loc": "https://ref.example.org/store/nike.com",
                },
                {
                    "URL": "https://knoji.com/brands/unknown.com",
                    "Match_Status": NOT_MATCHED,
                    "domain": "unknown.com",
                    "reference loc": "",
                },
            ],
        )

    def test_state_rows(self) -> None:
        records = [
            MerchantRecord(
                url="https://www.dontpayfull.com/at/nike.com",
                url_path="nike.com",
                store_name="Nike",
                has_amazon_deal=True,
                data_id="9",
            ),
            MerchantRecord(url="https://www.dontpayfull.com/at/gap.com", url_path="gap.com"),
            MerchantRecord(url="https://www.dontpayfull.com/at/"),
        ]

        rows = build_state_comparison_rows(
            records,
            reference_domains={"nike.com"},
            reference_urls={"nike.com": "https://ref.example.org/store/nike.com"},
        )

        self.assertEqual(len(rows), 2)
        self.assertTrue(rows[0].matched)
        self.assertEqual(rows[0].match_url, "https://ref.example.org/store/nike.com")
        self.assertTrue(rows[0].third_party_link)
        self.assertFalse(rows[1].matched)
        self.assertFalse(rows[1].third_party_link)
        self.assertIsNone(rows[1].merchant_name)
        self.assertEqual(list(rows[1].as_record()), STATE_ROW_FIELDS)


class TestWriters(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_write_rows_csv_normalizes_values(self) -> None:
        path = self.root / "csv-output" / "site-comparison.csv"
        count = write_rows_csv(
            path,
            fields=STATE_ROW_FIELDS,
            rows=[
                {
                    "URL": "https://www.dontpayfull.com/at/a.com",
                    "Match_Status": MATCHED,
                    "Last_Segment": "a.com",
                    "3rd Party Link": True,
                    "Match URL": "https://a.com",
                    "dataId": None,
                    "Merchant Name": "A, Inc.",
                }
            ],
        )

        self.assertEqual(count, 1)
        rows = _read_csv(path)
        self.assertEqual(rows[0]["3rd Party Link"], "true")
        self.assertEqual(rows[0]["dataId"], "")
        self.assertEqual(rows[0]["Merchant Name"], "A, Inc.")

    def test_write_domain_csv_sorted(self) -> None:
        path = self.root / "unique.csv"
        self.assertEqual(write_domain_csv(path, {"b.com", "a.com"}), 2)
        self.assertEqual(_read_csv(path), [{"Domain": "a.com"}, {"Domain": "b.com"}])

    def test_competitor_header(self) -> None:
        path = self.root / "empty.csv"
        write_rows_csv(path, fields=COMPETITOR_ROW_FIELDS, rows=[])
        self.assertEqual(
            path.read_text(encoding="utf-8").strip(),
            "URL,Match_Status,domain,reference loc",
        )


class TestOverlapTable(unittest.TestCase):
    def test_table_lists_every_result(self) -> None:
        table = format_overlap_table(
            10,
            [OverlapResult(source_name="knoji", total_domains=4, overlapping_domains=3, overlap_percentage=75.0)],
        )
        self.assertIn("Reference catalog has 10 unique domains", table)
        self.assertIn("75.00%", table)
        self.assertIn("knoji", table)


if __name__ == "__main__":
    unittest.main()
