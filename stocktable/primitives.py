"""
Pure helpers shared by ingestion and filtering — no I/O, no config lookups.
"""

import math
from typing import Optional

import pandas as pd


def parse_number(value) -> Optional[float]:
    """Parse user or CSV input as a finite float. Anything else gives None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def clean_text(value) -> Optional[str]:
    """Trim a text cell; empty or missing gives None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def safe_str_lower(series: pd.Series) -> pd.Series:
    """Safely convert Series to lowercase."""
    return series.fillna('').astype(str).str.lower()
