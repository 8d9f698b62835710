"""
Report shaping and export.
"""

from merchant_overlap.reporting.rows import (
    COMPETITOR_ROW_FIELDS,
    MATCHED,
    NOT_MATCHED,
    STATE_ROW_FIELDS,
    CompetitorComparisonRow,
    StateComparisonRow,
    build_competitor_rows,
    build_state_comparison_rows,
)
from merchant_overlap.reporting.writers import (
    format_overlap_table,
    write_domain_csv,
    write_json,
    write_rows_csv,
)

__all__ = [
    "COMPETITOR_ROW_FIELDS",
    "MATCHED",
    "NOT_MATCHED",
    "STATE_ROW_FIELDS",
    "CompetitorComparisonRow",
    "StateComparisonRow",
    "build_competitor_rows",
    "build_state_comparison_rows",
    "format_overlap_table",
    "write_domain_csv",
    "write_json",
    "write_rows_csv",
]
