"""
CSV and JSON writers for analysis outputs.
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from merchant_overlap.domain.overlap import OverlapResult
from merchant_overlap.logging_utils import log_event

logger = logging.getLogger(__name__)


def _csv_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def write_rows_csv(
    path: str | Path,
    *,
    fields: Sequence[str],
    rows: Iterable[dict[str, Any]],
) -> int:
    """
    Write dict rows under a fixed header; returns the number of data rows.
    """

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with target.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(
            handle,
            fieldnames=list(fields),
            extrasaction="ignore",
            restval="",
        )
        writer.writeheader()
        for row in rows:
            writer.writerow({key: _csv_value(value) for key, value in row.items()})
            count += 1

    log_event(
        logger,
        logging.INFO,
        "csv_written",
        path=str(target),
        rows=count,
    )
    return count


def write_domain_csv(path: str | Path, domains: Iterable[str]) -> int:
    return write_rows_csv(
        path,
        fields=["Domain"],
        rows=({"Domain": domain} for domain in sorted(domains)),
    )


def write_json(path: str | Path, payload: Any) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload, indent=2, default=str) + "\n", encoding="utf-8")
    log_event(
        logger,
        logging.INFO,
        "json_written",
        path=str(target),
    )
    return target


def format_overlap_table(reference_count: int, results: Sequence[OverlapResult]) -> str:
    """
    Plain-text ranking table for console output.
    """

    lines = [
        f"Reference catalog has {reference_count} unique domains",
        "",
        "Source               | Total Domains | Overlapping | Percentage",
        "-" * 62,
    ]
    for result in results:
        lines.append(
            f"{result.source_name:<20} | "
            f"{result.total_domains:<13} | "
            f"{result.overlapping_domains:<11} | "
            f"{result.overlap_percentage:.2f}%"
        )
    return "\n".join(lines)
