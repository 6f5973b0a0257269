"""Exceptions raised by ingestion and storage."""


class StocktableError(Exception):
    """Base class for application errors."""


class MissingColumnsError(StocktableError):
    """CSV header row lacks one or more required columns."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required CSV columns: {', '.join(self.missing)}")


class FileReadError(StocktableError):
    """Uploaded file could not be read as text."""


class StoreUnavailableError(StocktableError):
    """Portfolio storage backend failed to load or save."""
