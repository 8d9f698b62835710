"""
Overlap computation and ranking.
"""

from merchant_overlap.comparison.overlap import (
    calculate_overlap,
    compare_all,
    find_unique_reference_domains,
    rank_results,
    round_percentage,
    unique_domains,
)

__all__ = [
    "calculate_overlap",
    "compare_all",
    "find_unique_reference_domains",
    "rank_results",
    "round_percentage",
    "unique_domains",
]
