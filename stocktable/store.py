"""Portfolio persistence: one JSON blob in a file or in a Redis key."""

import json
import logging
import os
from typing import Protocol

import redis
from pydantic import ValidationError

from stocktable import config
from stocktable.errors import StoreUnavailableError
from stocktable.models import StockRecord

_store = None


class PortfolioStore(Protocol):
    """Whole-set load/save of portfolio records."""

    def load(self) -> list[StockRecord]:  # pragma: no cover - interface
        ...

    def save(self, records: list[StockRecord]) -> None:  # pragma: no cover - interface
        ...


def _decode(payload: str | bytes) -> list[StockRecord]:
    data = json.loads(payload)
    if not isinstance(data, list):
        raise ValueError("Stored portfolio is not a JSON array")
    return [StockRecord.model_validate(item) for item in data]


def _encode(records: list[StockRecord], indent: int | None = None) -> str:
    return json.dumps([r.to_wire() for r in records], indent=indent)


class JsonFileStore:
    """Records kept as a pretty-printed JSON array at ``path``."""

    def __init__(self, path: str):
        self.path = path

    def _ensure_file(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not os.path.exists(self.path):
            with open(self.path, "w", encoding="utf-8") as f:
                f.write("[]")
            logging.info(f"Created empty portfolio file: {self.path}")

    def load(self) -> list[StockRecord]:
        try:
            self._ensure_file()
            with open(self.path, encoding="utf-8") as f:
                return _decode(f.read())
        except (OSError, ValueError, ValidationError) as e:
            raise StoreUnavailableError(f"Failed to read {self.path}: {e}") from e

    def save(self, records: list[StockRecord]) -> None:
        try:
            self._ensure_file()
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(_encode(records, indent=2))
        except OSError as e:
            raise StoreUnavailableError(f"Failed to write {self.path}: {e}") from e


class RedisStore:
    """Records kept as a JSON array under a single Redis key, no expiry."""

    def __init__(self, client, key: str = "portfolio:data"):
        if client is None:
            raise ValueError("Redis client must not be None")
        self._client = client
        self.key = key

    @classmethod
    def from_url(cls, url: str, key: str = "portfolio:data") -> "RedisStore":
        return cls(redis.Redis.from_url(url), key=key)

    def load(self) -> list[StockRecord]:
        try:
            payload = self._client.get(self.key)
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Redis get failed for {self.key}: {e}") from e
        if payload is None:
            return []
        try:
            return _decode(payload)
        except (ValueError, ValidationError) as e:
            raise StoreUnavailableError(f"Invalid portfolio payload in {self.key}: {e}") from e

    def save(self, records: list[StockRecord]) -> None:
        try:
            self._client.set(self.key, _encode(records))
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Redis set failed for {self.key}: {e}") from e


def create_store(backend: str | None = None) -> PortfolioStore:
    """Build the store named by ``backend`` (defaults to config.STORE_BACKEND)."""
    backend = (backend or config.STORE_BACKEND).lower()
    if backend == "file":
        return JsonFileStore(config.DATA_FILE)
    if backend == "redis":
        return RedisStore.from_url(config.REDIS_URL, key=config.REDIS_KEY)
    raise ValueError(f"Unknown portfolio store backend: {backend}")


def get_store() -> PortfolioStore:
    """Get the configured store (singleton)."""
    global _store
    if _store is None:
        _store = create_store()
    return _store
