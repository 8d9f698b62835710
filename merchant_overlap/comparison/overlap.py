"""
Set overlap between the reference catalog and competitor catalogs.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Set

from merchant_overlap.domain.overlap import OverlapResult


def round_percentage(value: float) -> float:
    """
    Round half up to two decimals.
    """

    return math.floor(value * 100 + 0.5) / 100


def calculate_overlap(
    reference: Set[str],
    competitor: Set[str],
    source_name: str = "unknown",
) -> OverlapResult:
    """
    Share of the competitor's domains that the reference set also covers.
    """

    if len(reference) <= len(competitor):
        smaller, larger = reference, competitor
    else:
        smaller, larger = competitor, reference
    overlapping = sum(1 for domain in smaller if domain in larger)
    total = len(competitor)
    percentage = round_percentage(overlapping / total * 100) if total > 0 else 0.0
    return OverlapResult(
        source_name=source_name,
        total_domains=total,
        overlapping_domains=overlapping,
        overlap_percentage=percentage,
    )


def rank_results(results: Iterable[OverlapResult]) -> list[OverlapResult]:
    """
    Descending percentage; empty competitors always last. Ties keep input order.
    """

    return sorted(
        results,
        key=lambda result: (
            result.total_domains == 0,
            -result.overlap_percentage if result.total_domains > 0 else 0.0,
        ),
    )


def compare_all(
    reference: Set[str],
    competitors: Mapping[str, Set[str]],
) -> list[OverlapResult]:
    return rank_results(
        calculate_overlap(reference, domains, source_name=name)
        for name, domains in competitors.items()
    )


def unique_domains(left: Set[str], right: Set[str]) -> set[str]:
    return {domain for domain in left if domain not in right}


def find_unique_reference_domains(
    reference: Set[str],
    competitors: Mapping[str, Set[str]],
) -> list[str]:
    """
    Reference domains that no competitor carries, sorted.
    """

    covered: set[str] = set()
    for domains in competitors.values():
        covered.update(domains)
    return sorted(unique_domains(reference, covered))
