# tests/test_redis_store.py
"""
Redis Store Tests - Unit Tests for Snapshot Persistence

This module tests RedisRateStore against a mocked redis-py client: the
transactional write of both keys, deserialization of the stored snapshot
and translation of Redis failures into domain errors.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxconvert.adapters.persistence.redis_store (RedisRateStore, keys)
- fxconvert.domain.errors (StoreError, InternalError)
- unittest.mock (Mock for the Redis client)
- pytest (testing framework)
"""
import json  # JSON parsing for asserting the stored payload
import pytest  # Testing framework for writing and running tests

from decimal import Decimal  # Exact decimal arithmetic for expected values
from unittest.mock import Mock  # Mock objects for testing without a Redis server
import redis  # Redis client library (used for its exception types)

from fxconvert.adapters.persistence.redis_store import DATE_KEY, RATES_KEY, RedisRateStore
from fxconvert.domain.errors import InternalError, StoreError


@pytest.fixture
def client():
    mock_client = Mock()
    mock_client.pipeline.return_value = Mock()
    return mock_client


class TestStore:
    def test_store_writes_both_keys_in_transaction(self, client, eur_rates):
        store = RedisRateStore(client)

        store.store(eur_rates)

        client.pipeline.assert_called_once_with(transaction=True)
        pipe = client.pipeline.return_value
        assert pipe.set.call_count == 2
        key, payload = pipe.set.call_args_list[0].args
        assert key == RATES_KEY
        assert json.loads(payload) == {
            "date": "2024-12-04",
            "base": "EUR",
            "rates": {"USD": "1.05", "GBP": "0.85", "JPY": "158.2"},
        }
        assert pipe.set.call_args_list[1].args == (DATE_KEY, "2024-12-04")
        pipe.execute.assert_called_once()

    def test_store_failure_raises_store_error(self, client, eur_rates):
        client.pipeline.return_value.execute.side_effect = redis.ConnectionError("down")
        store = RedisRateStore(client)

        with pytest.raises(StoreError, match="2024-12-04"):
            store.store(eur_rates)


class TestGetLatest:
    def test_nothing_stored(self, client):
        client.get.return_value = None
        assert RedisRateStore(client).get_latest() is None
        client.get.assert_called_once_with(RATES_KEY)

    def test_restores_exact_decimals(self, client, eur_rates):
        client.get.return_value = json.dumps(eur_rates.to_json())

        result = RedisRateStore(client).get_latest()

        assert result == eur_rates
        assert result.rates["JPY"] == Decimal("158.2")

    def test_corrupt_json(self, client):
        client.get.return_value = "{not json"
        with pytest.raises(InternalError, match="deserialize"):
            RedisRateStore(client).get_latest()

    def test_snapshot_missing_fields(self, client):
        client.get.return_value = json.dumps({"date": "2024-12-04"})
        with pytest.raises(InternalError):
            RedisRateStore(client).get_latest()

    def test_unreachable(self, client):
        client.get.side_effect = redis.TimeoutError("timeout")
        with pytest.raises(StoreError):
            RedisRateStore(client).get_latest()


class TestMetadata:
    def test_last_update_date(self, client):
        client.get.return_value = "2024-12-04"
        assert RedisRateStore(client).get_last_update_date() == "2024-12-04"
        client.get.assert_called_once_with(DATE_KEY)

    def test_last_update_date_absent(self, client):
        client.get.return_value = None
        assert RedisRateStore(client).get_last_update_date() is None

    def test_health_check_ok(self, client):
        RedisRateStore(client).health_check()
        client.ping.assert_called_once()

    def test_health_check_failure(self, client):
        client.ping.side_effect = redis.ConnectionError("refused")
        with pytest.raises(StoreError, match="ping"):
            RedisRateStore(client).health_check()

    def test_close(self, client):
        RedisRateStore(client).close()
        client.close.assert_called_once()
