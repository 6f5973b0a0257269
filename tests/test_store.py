import json

import pytest

from stocktable import config, store
from stocktable.errors import StoreUnavailableError
from stocktable.store import JsonFileStore, RedisStore

from conftest import FakeRedis


def test_json_store_creates_empty_file_on_first_load(json_store):
    assert json_store.load() == []
    with open(json_store.path, encoding="utf-8") as f:
        assert json.load(f) == []


def test_json_store_save_replaces_whole_set(json_store, portfolio):
    json_store.save(portfolio)
    assert json_store.load() == portfolio

    json_store.save(portfolio[:1])
    assert json_store.load() == portfolio[:1]


def test_json_store_writes_camelcase_pretty_json(json_store, abc_records):
    json_store.save(abc_records)
    with open(json_store.path, encoding="utf-8") as f:
        text = f.read()
    assert text.startswith("[\n  {")
    data = json.loads(text)
    assert data[0]["currentPrice"] == 10
    assert data[1]["currentPrice"] is None
    assert data[2]["return1Y"] == -3


@pytest.mark.parametrize("content", ["not json", '{"data": []}', "[1, 2]"])
def test_json_store_bad_content_is_unavailable(json_store, content):
    json_store.save([])
    with open(json_store.path, "w", encoding="utf-8") as f:
        f.write(content)
    with pytest.raises(StoreUnavailableError):
        json_store.load()


def test_json_store_write_failure_is_unavailable(tmp_path, abc_records):
    target = tmp_path / "portfolio.json"
    target.mkdir()
    with pytest.raises(StoreUnavailableError):
        JsonFileStore(str(target)).save(abc_records)


def test_redis_store_missing_key_is_empty():
    assert RedisStore(FakeRedis()).load() == []


def test_redis_store_round_trip_under_single_key(portfolio):
    client = FakeRedis()
    s = RedisStore(client, key="portfolio:data")
    s.save(portfolio)

    assert list(client.data) == ["portfolio:data"]
    assert json.loads(client.data["portfolio:data"])[0]["nseCode"] == "ACME"
    assert s.load() == portfolio


def test_redis_store_errors_are_unavailable(abc_records):
    s = RedisStore(FakeRedis(fail=True))
    with pytest.raises(StoreUnavailableError):
        s.load()
    with pytest.raises(StoreUnavailableError):
        s.save(abc_records)


def test_redis_store_corrupt_payload_is_unavailable():
    client = FakeRedis()
    client.data["portfolio:data"] = b"{oops"
    with pytest.raises(StoreUnavailableError):
        RedisStore(client).load()


def test_redis_store_requires_client():
    with pytest.raises(ValueError):
        RedisStore(None)


def test_create_store_selects_backend(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DATA_FILE", str(tmp_path / "p.json"))
    file_store = store.create_store("file")
    assert isinstance(file_store, JsonFileStore)
    assert file_store.path == str(tmp_path / "p.json")

    redis_store = store.create_store("REDIS")
    assert isinstance(redis_store, RedisStore)
    assert redis_store.key == config.REDIS_KEY

    with pytest.raises(ValueError):
        store.create_store("sqlite")


@pytest.mark.parametrize("content", ['[{"name": "X", "currentPrice": NaN}]', '[{"name": "X", "return1Y": Infinity}]'])
def test_json_store_non_finite_numbers_are_unavailable(json_store, content):
    json_store.save([])
    with open(json_store.path, "w", encoding="utf-8") as f:
        f.write(content)
    with pytest.raises(StoreUnavailableError):
        json_store.load()


def test_redis_store_non_finite_numbers_are_unavailable():
    client = FakeRedis()
    client.data["portfolio:data"] = b'[{"name": "X", "currentPrice": NaN}]'
    with pytest.raises(StoreUnavailableError):
        RedisStore(client).load()
