"""In-memory portfolio plus the load-on-start and upload flows."""

import logging
from dataclasses import dataclass

from stocktable.errors import FileReadError, MissingColumnsError, StoreUnavailableError
from stocktable.models import StockRecord
from stocktable.services import csv_ingestor
from stocktable.store import PortfolioStore, get_store

SUCCESS_MESSAGE = "Data updated successfully! Portfolio has been saved."
UNSAVED_MESSAGE = "Data updated, but the portfolio could not be saved to the server."
NO_FILE_MESSAGE = "Please select a file first."
READ_ERROR_MESSAGE = "Failed to read the file."

_service = None


@dataclass(frozen=True)
class UploadResult:
    """One-line outcome of an upload, as shown on the upload page."""

    status: str = ""
    error: str = ""
    saved: bool = False
    count: int = 0


class PortfolioService:
    """Holds the current record set; the store sees whole-set loads and saves only."""

    def __init__(self, store: PortfolioStore):
        self.store = store
        self._records: list[StockRecord] = []

    @property
    def records(self) -> list[StockRecord]:
        return self._records

    def load(self) -> list[StockRecord]:
        """Load from the store, falling back to an empty set if it is unavailable."""
        try:
            self._records = self.store.load()
        except StoreUnavailableError as e:
            logging.error(f"Error loading portfolio data, starting empty: {e}")
            self._records = []
        else:
            logging.info(f"Loaded portfolio: {len(self._records)} records")
        return self._records

    def read_stored(self) -> list[StockRecord]:
        """Read straight from the store. Raises StoreUnavailableError."""
        return self.store.load()

    def save(self, records: list[StockRecord]) -> None:
        """Persist ``records`` and make them current. Raises StoreUnavailableError."""
        records = list(records)
        self.store.save(records)
        self._records = records
        logging.info(f"Saved portfolio: {len(records)} records")

    def replace(self, records: list[StockRecord]) -> bool:
        """Make ``records`` current even if persisting them fails. Returns saved flag."""
        self._records = list(records)
        try:
            self.store.save(self._records)
        except StoreUnavailableError as e:
            logging.error(f"Error updating portfolio data, keeping it in memory only: {e}")
            return False
        logging.info(f"Saved portfolio: {len(self._records)} records")
        return True

    def upload(self, raw: bytes | None) -> UploadResult:
        """Parse an uploaded CSV and replace the portfolio with it.

        Parse failures leave the current records untouched.
        """
        if raw is None:
            return UploadResult(error=NO_FILE_MESSAGE)
        try:
            records = csv_ingestor.parse_bytes(raw)
        except FileReadError:
            logging.warning("Uploaded file is not valid UTF-8 text")
            return UploadResult(error=READ_ERROR_MESSAGE)
        except MissingColumnsError as e:
            logging.warning(str(e))
            return UploadResult(error=f"Error parsing file: {e}")

        if self.replace(records):
            return UploadResult(status=SUCCESS_MESSAGE, saved=True, count=len(records))
        return UploadResult(status=UNSAVED_MESSAGE, saved=False, count=len(records))


def get_portfolio_service() -> PortfolioService:
    """Get the process-wide service bound to the configured store (singleton)."""
    global _service
    if _service is None:
        _service = PortfolioService(get_store())
    return _service
