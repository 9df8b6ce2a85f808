# tests/test_updater.py
"""
Update Pipeline Tests - Unit Tests for Fetch and Store Runs

This module tests RateUpdatePipeline: successful runs, failures at each
stage, run counters and preservation of the previously cached snapshot.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxconvert.application.updater (RateUpdatePipeline, UpdateState)
- fxconvert.domain.errors (FetchError, ParseError, StoreError)
- tests.conftest (memory_store, empty_store, unreachable_store fixtures)
- unittest.mock (Mock for the provider)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from decimal import Decimal  # Exact decimal arithmetic for test data
from unittest.mock import Mock  # Mock objects for testing without HTTP calls

from fxconvert.application.updater import RateUpdatePipeline, UpdateState
from fxconvert.domain.errors import FetchError, ParseError, StoreError
from fxconvert.domain.models import RateSet


@pytest.fixture
def fresh_rates():
    return RateSet(date="2024-12-05", base="EUR", rates={"USD": Decimal("1.06")})


class TestUpdateRates:
    def test_fetches_and_stores(self, eur_rates, empty_store):
        provider = Mock()
        provider.fetch_rates.return_value = eur_rates
        store = empty_store

        result = RateUpdatePipeline(provider, store).update_rates()

        assert result == eur_rates
        assert store.get_latest() == eur_rates
        assert store.get_last_update_date() == "2024-12-04"

    def test_fetch_error_propagates(self, empty_store):
        provider = Mock()
        provider.fetch_rates.side_effect = FetchError("ECB returned status: 503")
        store = empty_store

        with pytest.raises(FetchError):
            RateUpdatePipeline(provider, store).update_rates()
        assert store.store_calls == 0


class TestRun:
    def test_success(self, eur_rates, empty_store):
        provider = Mock()
        provider.fetch_rates.return_value = eur_rates
        pipeline = RateUpdatePipeline(provider, empty_store)

        result = pipeline.run()

        assert result.ok
        assert result.state is UpdateState.STORED
        assert result.date == "2024-12-04"
        assert result.rate_count == 3
        assert result.error is None
        assert result.finished_at >= result.started_at
        assert pipeline.state is UpdateState.IDLE
        assert pipeline.last_result is result
        assert (pipeline.success_count, pipeline.failure_count) == (1, 0)
        assert pipeline.last_success_at == result.finished_at

    def test_fetch_failure_keeps_previous_snapshot(self, eur_rates, memory_store):
        provider = Mock()
        provider.fetch_rates.side_effect = FetchError("HTTP request failed: refused")
        store = memory_store
        pipeline = RateUpdatePipeline(provider, store)

        result = pipeline.run()

        assert not result.ok
        assert result.state is UpdateState.FAILED
        assert result.error == "FetchError: HTTP request failed: refused"
        assert store.get_latest() == eur_rates
        assert store.store_calls == 1
        assert (pipeline.success_count, pipeline.failure_count) == (0, 1)
        assert pipeline.last_success_at is None
        assert pipeline.last_result.error == result.error

    def test_parse_failure(self, empty_store):
        provider = Mock()
        provider.fetch_rates.side_effect = ParseError("Failed to parse XML: junk")
        pipeline = RateUpdatePipeline(provider, empty_store)

        result = pipeline.run()

        assert result.error.startswith("ParseError")

    def test_store_failure(self, eur_rates, unreachable_store):
        provider = Mock()
        provider.fetch_rates.return_value = eur_rates
        pipeline = RateUpdatePipeline(provider, unreachable_store)

        result = pipeline.run()

        assert result.state is UpdateState.FAILED
        assert result.error == "StoreError: connection refused"
        assert pipeline.state is UpdateState.IDLE

    def test_unexpected_error_does_not_escape(self, empty_store):
        provider = Mock()
        provider.fetch_rates.side_effect = RuntimeError("boom")
        pipeline = RateUpdatePipeline(provider, empty_store)

        result = pipeline.run()

        assert result.state is UpdateState.FAILED
        assert result.error == "RuntimeError: boom"

    def test_recovers_on_next_run(self, fresh_rates, memory_store):
        provider = Mock()
        provider.fetch_rates.side_effect = [FetchError("timed out"), fresh_rates]
        store = memory_store
        pipeline = RateUpdatePipeline(provider, store)

        first = pipeline.run()
        second = pipeline.run()

        assert not first.ok
        assert second.ok
        assert store.get_latest() == fresh_rates
        assert (pipeline.success_count, pipeline.failure_count) == (1, 1)

    def test_store_error_type_exposed(self, eur_rates):
        store = Mock()
        store.store.side_effect = StoreError("READONLY")
        provider = Mock()
        provider.fetch_rates.return_value = eur_rates

        result = RateUpdatePipeline(provider, store).run()

        assert result.error == "StoreError: READONLY"
