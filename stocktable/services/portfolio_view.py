"""Per-request table state: filters, sort and hidden columns.

The state travels in the query string so every link on the page (sort
headers, column toggles, filter pills) is just another view of the same
records.
"""

from dataclasses import dataclass, field, replace
from urllib.parse import urlencode

from starlette.datastructures import QueryParams

from stocktable import config
from stocktable.models import (
    ALL_INDUSTRIES,
    FIELD_ALIASES,
    FilterConfig,
    SortConfig,
    SortDirection,
    StockRecord,
)
from stocktable.services import filter_sort

# filter field → query parameter
FILTER_PARAMS: dict[str, str] = {
    "search_term":   "searchTerm",
    "industry":      "industry",
    "min_price":     "minPrice",
    "max_price":     "maxPrice",
    "min_1y_return": "min1YReturn",
    "max_1m_return": "max1MReturn",
}

FILTER_LABELS: dict[str, str] = {
    "search_term":   'Search: "{}"',
    "industry":      "Industry: {}",
    "min_price":     "Min Price: {}",
    "max_price":     "Max Price: {}",
    "min_1y_return": "Min 1Y Return: {}%",
    "max_1m_return": "Max 1M Return: {}%",
}

TOGGLEABLE_KEYS = [key for key, _ in config.TOGGLEABLE_COLUMNS]

SORT_ARROWS = {SortDirection.ASCENDING: "▲", SortDirection.DESCENDING: "▼"}


def _is_active(field_name: str, value) -> bool:
    if field_name == "industry":
        return bool(value) and value != ALL_INDUSTRIES
    return value not in (None, "")


@dataclass(frozen=True)
class PortfolioView:
    filters: FilterConfig = field(default_factory=FilterConfig)
    sort: SortConfig = field(default_factory=SortConfig)
    hidden: frozenset = frozenset()

    @classmethod
    def from_query(cls, params: QueryParams) -> "PortfolioView":
        """Build the view from query parameters, ignoring anything unknown."""
        values = {}
        for field_name, param in FILTER_PARAMS.items():
            val = params.get(param)
            if val:
                values[field_name] = val.strip() if field_name != "search_term" else val
        filters = FilterConfig(**values)

        sort = SortConfig()
        sort_key = params.get("sort")
        if sort_key:
            direction = (
                SortDirection.DESCENDING
                if params.get("dir") == SortDirection.DESCENDING.value
                else SortDirection.ASCENDING
            )
            try:
                sort = SortConfig(key=sort_key, direction=direction)
            except ValueError:
                pass  # unknown column: keep the default order

        hidden = frozenset(k for k in params.getlist("hide") if k in TOGGLEABLE_KEYS)
        return cls(filters=filters, sort=sort, hidden=hidden)

    # ── Table ────────────────────────────────────────────────────────────

    def rows(self, records: list[StockRecord]) -> list[StockRecord]:
        return filter_sort.apply(records, self.filters, self.sort)

    def is_visible(self, key: str) -> bool:
        return key not in self.hidden

    def visible_perf_columns(self) -> list[tuple[str, str]]:
        return [(k, label) for k, label in config.PERF_COLUMNS if self.is_visible(k)]

    def sort_indicator(self, key: str) -> str:
        if self.sort.key != key:
            return ""
        return SORT_ARROWS[self.sort.direction]

    # ── Transitions ──────────────────────────────────────────────────────

    def request_sort(self, key: str) -> "PortfolioView":
        return replace(self, sort=self.sort.request(key))

    def toggle_column(self, key: str) -> "PortfolioView":
        if key not in TOGGLEABLE_KEYS:
            raise KeyError(key)
        return replace(self, hidden=self.hidden ^ {key})

    def clear_filter(self, field_name: str) -> "PortfolioView":
        default = FilterConfig.model_fields[field_name].default
        return replace(self, filters=self.filters.model_copy(update={field_name: default}))

    def clear_all(self) -> "PortfolioView":
        return replace(self, filters=FilterConfig())

    def active_filters(self) -> list[tuple[str, str]]:
        """(field, label) pairs for every filter the user has set."""
        active = []
        for field_name, template in FILTER_LABELS.items():
            value = getattr(self.filters, field_name)
            if _is_active(field_name, value):
                active.append((field_name, template.format(value)))
        return active

    # ── Query string ─────────────────────────────────────────────────────

    @property
    def is_default_sort(self) -> bool:
        return self.sort == SortConfig()

    @property
    def sort_param(self) -> str:
        return FIELD_ALIASES[self.sort.key]

    def to_query(self) -> list[tuple[str, str]]:
        pairs = []
        for field_name, param in FILTER_PARAMS.items():
            value = getattr(self.filters, field_name)
            if _is_active(field_name, value):
                pairs.append((param, str(value)))
        if not self.is_default_sort:
            pairs.append(("sort", self.sort_param))
            pairs.append(("dir", self.sort.direction.value))
        pairs.extend(("hide", k) for k in TOGGLEABLE_KEYS if k in self.hidden)
        return pairs

    def query_string(self) -> str:
        query = urlencode(self.to_query())
        return f"?{query}" if query else "?"
