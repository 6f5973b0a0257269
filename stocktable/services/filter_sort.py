"""Filtering and ordering of the in-memory portfolio.

Uses a declarative filter registry mapping filter fields → record columns,
mirroring the screener's SQL registry but evaluated over a DataFrame.
"""

import operator

import pandas as pd

from stocktable.models import (
    ALL_INDUSTRIES,
    FIELD_ALIASES,
    NUMERIC_FIELDS,
    FilterConfig,
    SortConfig,
    StockRecord,
)
from stocktable.primitives import parse_number, safe_str_lower

# ── Filter Registry ──────────────────────────────────────────────────────────
# filter field → (record column, comparison). Absent values never pass.

RANGE_FILTERS: dict[str, tuple[str, str]] = {
    "min_price":     ("current_price", ">="),
    "max_price":     ("current_price", "<="),
    "min_1y_return": ("return_1y",     ">="),
    "max_1m_return": ("return_1m",     "<="),
}

_OPERATORS = {">=": operator.ge, "<=": operator.le}


def to_frame(records: list[StockRecord]) -> pd.DataFrame:
    """One row per record, positional index, numeric columns as float (NaN = absent)."""
    columns = list(FIELD_ALIASES)
    df = pd.DataFrame([{c: getattr(r, c) for c in columns} for r in records], columns=columns)
    numeric = [c for c in columns if c in NUMERIC_FIELDS]
    df[numeric] = df[numeric].astype(float)
    return df


def build_mask(df: pd.DataFrame, filters: FilterConfig) -> pd.Series:
    """Conjunction of every active predicate."""
    mask = pd.Series(True, index=df.index)

    if filters.search_term:
        term = filters.search_term.lower()
        mask &= safe_str_lower(df["name"]).str.contains(term, regex=False)

    if filters.industry and filters.industry != ALL_INDUSTRIES:
        mask &= df["industry"] == filters.industry

    for param, (column, op) in RANGE_FILTERS.items():
        bound = parse_number(getattr(filters, param))
        if bound is None:
            continue  # blank or non-numeric input leaves the filter off
        mask &= _OPERATORS[op](df[column], bound)

    return mask


def apply(records: list[StockRecord], filters: FilterConfig, sort: SortConfig) -> list[StockRecord]:
    """Return the records passing ``filters``, ordered by ``sort``.

    The sort is stable. Records with no value at the sort key come last in
    both directions.
    """
    records = list(records)
    if not records:
        return []

    df = to_frame(records)
    df = df[build_mask(df, filters).to_numpy(dtype=bool)]
    df = df.sort_values(
        by=sort.key,
        ascending=not sort.descending,
        kind="mergesort",
        na_position="last",
    )
    return [records[i] for i in df.index]


def industry_options(records: list[StockRecord]) -> list[str]:
    """"All" followed by the distinct industries, sorted."""
    industries = sorted({r.industry for r in records if r.industry})
    return [ALL_INDUSTRIES, *industries]
