"""Shared fixtures: sample records, stores, and a TestClient bound to them."""

import pytest
import redis
from fastapi.testclient import TestClient

from stocktable.errors import StoreUnavailableError
from stocktable.models import StockRecord
from stocktable.services import portfolio_service
from stocktable.services.portfolio_service import PortfolioService
from stocktable.store import JsonFileStore

HEADER = "name,bseCode,nseCode,industry,currentPrice,return1D,return1M,return1W,return3M,return6M,return1Y"


class FakeRedis:
    """Dict-backed stand-in for the two redis.Redis calls the store makes."""

    def __init__(self, fail: bool = False):
        self.data: dict[str, bytes] = {}
        self.fail = fail

    def get(self, key):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return self.data.get(key)

    def set(self, key, value):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        self.data[key] = value.encode("utf-8") if isinstance(value, str) else value
        return True


class BrokenStore:
    """Store whose every call fails like an unreachable backend."""

    def load(self):
        raise StoreUnavailableError("backend down")

    def save(self, records):
        raise StoreUnavailableError("backend down")


def make_record(name, **fields) -> StockRecord:
    return StockRecord(name=name, **fields)


@pytest.fixture
def abc_records():
    """The A/B/C set: B has neither price nor returns."""
    return [
        make_record("A", current_price=10, return_1y=5),
        make_record("B"),
        make_record("C", current_price=20, return_1y=-3),
    ]


@pytest.fixture
def portfolio():
    return [
        make_record("Acme Corp", bse_code="500001", nse_code="ACME", industry="Tech",
                    current_price=100.5, return_1d=1.2, return_1w=-0.4, return_1m=3.1,
                    return_3m=8.0, return_6m=12.5, return_1y=25.0),
        make_record("Bharat Steel", bse_code="500002", industry="Metals",
                    current_price=45.0, return_1d=-2.5, return_1m=-6.0, return_1y=-12.0),
        make_record("Coastal Power", nse_code="COASTAL", industry="Utilities",
                    current_price=None, return_1m=0.5, return_1y=None),
        make_record("delta pharma", industry="Pharma", current_price=850.0,
                    return_1d=0.0, return_1m=-1.0, return_1y=40.0),
        make_record("Echo Tech", industry="Tech", current_price=100.5,
                    return_1m=None, return_1y=25.0),
    ]


@pytest.fixture
def json_store(tmp_path):
    return JsonFileStore(str(tmp_path / "data" / "portfolio.json"))


@pytest.fixture
def service(json_store, monkeypatch):
    svc = PortfolioService(json_store)
    monkeypatch.setattr(portfolio_service, "_service", svc)
    return svc


@pytest.fixture
def client(service):
    from stocktable.main import app

    with TestClient(app) as c:
        yield c
