"""Portfolio value types: stock rows plus filter and sort settings."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ── Field registry ──────────────────────────────────────────────────────────
# attribute name → wire/CSV column name
FIELD_ALIASES: dict[str, str] = {
    "name": "name",
    "bse_code": "bseCode",
    "nse_code": "nseCode",
    "industry": "industry",
    "current_price": "currentPrice",
    "return_1d": "return1D",
    "return_1m": "return1M",
    "return_1w": "return1W",
    "return_3m": "return3M",
    "return_6m": "return6M",
    "return_1y": "return1Y",
}

ALIAS_FIELDS: dict[str, str] = {alias: field for field, alias in FIELD_ALIASES.items()}

NUMERIC_FIELDS = frozenset({
    "current_price", "return_1d", "return_1w", "return_1m",
    "return_3m", "return_6m", "return_1y",
})

REQUIRED_COLUMNS: list[str] = list(FIELD_ALIASES.values())

ALL_INDUSTRIES = "All"


def resolve_field(key: str) -> str:
    """Map an attribute or column name to the attribute name. Raises KeyError."""
    if key in FIELD_ALIASES:
        return key
    return ALIAS_FIELDS[key]


class StockRecord(BaseModel):
    """One portfolio row. ``None`` means the value is not available."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
        allow_inf_nan=False,
    )

    name: Optional[str] = None
    bse_code: Optional[str] = Field(default=None, alias="bseCode")
    nse_code: Optional[str] = Field(default=None, alias="nseCode")
    industry: Optional[str] = None
    current_price: Optional[float] = Field(default=None, alias="currentPrice")
    return_1d: Optional[float] = Field(default=None, alias="return1D")
    return_1m: Optional[float] = Field(default=None, alias="return1M")
    return_1w: Optional[float] = Field(default=None, alias="return1W")
    return_3m: Optional[float] = Field(default=None, alias="return3M")
    return_6m: Optional[float] = Field(default=None, alias="return6M")
    return_1y: Optional[float] = Field(default=None, alias="return1Y")

    @property
    def company_code(self) -> Optional[str]:
        return self.nse_code or self.bse_code

    def to_wire(self) -> dict:
        """Return the camelCase dict used by the JSON API and the stores."""
        return self.model_dump(by_alias=True)


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class SortConfig(BaseModel):
    """The single active sort column and its direction."""

    model_config = ConfigDict(frozen=True)

    key: str = "name"
    direction: SortDirection = SortDirection.ASCENDING

    @field_validator("key")
    @classmethod
    def _known_field(cls, value: str) -> str:
        try:
            return resolve_field(value)
        except KeyError:
            raise ValueError(f"Unknown sort key: {value}") from None

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESCENDING

    def request(self, key: str) -> "SortConfig":
        """Sort by ``key``: flips direction on the current key, else ascending."""
        field = resolve_field(key)
        if field == self.key and self.direction is SortDirection.ASCENDING:
            return SortConfig(key=field, direction=SortDirection.DESCENDING)
        return SortConfig(key=field, direction=SortDirection.ASCENDING)


RangeValue = Union[str, float, None]


class FilterConfig(BaseModel):
    """User-entered filter values. Range bounds stay as raw input."""

    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    industry: str = ALL_INDUSTRIES
    min_price: RangeValue = ""
    max_price: RangeValue = ""
    min_1y_return: RangeValue = ""
    max_1m_return: RangeValue = ""
