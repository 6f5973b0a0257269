"""
CSV upload parsing: header validation and row → StockRecord conversion.

The format is deliberately simple: one row per line, cells split on commas,
no quoting or escaping. Header order is free and extra columns are ignored.
"""

import logging

from stocktable.errors import FileReadError, MissingColumnsError
from stocktable.models import ALIAS_FIELDS, NUMERIC_FIELDS, REQUIRED_COLUMNS, StockRecord
from stocktable.primitives import clean_text, parse_number

DELIMITER = ","


def _split_line(line: str) -> list[str]:
    return [cell.strip() for cell in line.split(DELIMITER)]


def find_missing_columns(header: list[str]) -> list[str]:
    """Return required columns absent from the header, in required order."""
    present = set(header)
    return [c for c in REQUIRED_COLUMNS if c not in present]


def _build_record(header: list[str], cells: list[str]) -> StockRecord:
    entry = {}
    for index, column in enumerate(header):
        field = ALIAS_FIELDS.get(column)
        if field is None:
            continue
        raw = cells[index] if index < len(cells) else None
        if field in NUMERIC_FIELDS:
            entry[field] = parse_number(raw)
        else:
            entry[field] = clean_text(raw)
    return StockRecord.model_validate(entry)


def parse(raw_text: str) -> list[StockRecord]:
    """Parse CSV text into records.

    Raises MissingColumnsError naming every required header missing from
    the first line. A file with only a header row yields an empty list.
    """
    lines = raw_text.strip().split("\n")
    header = _split_line(lines[0])

    missing = find_missing_columns(header)
    if missing:
        raise MissingColumnsError(missing)

    records = [_build_record(header, _split_line(line)) for line in lines[1:]]
    logging.info(f"Parsed CSV: {len(records)} records, {len(header)} columns")
    return records


def parse_bytes(raw: bytes) -> list[StockRecord]:
    """Decode an uploaded file as UTF-8 (BOM tolerated) and parse it."""
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileReadError("Failed to read the file.") from e
    return parse(text)
