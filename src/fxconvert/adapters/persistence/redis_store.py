# src/fxconvert/adapters/persistence/redis_store.py
"""
Redis Store - Latest Snapshot Persistence

This module keeps exactly one "latest" RateSet in Redis, plus its date under
a separate key so freshness can be probed without deserializing the table.
No history is kept: every store overwrites the previous snapshot.

Keys:
- exchange:rates:latest  JSON {"date", "base", "rates": {CODE: "decimal"}}
- exchange:rates:date    YYYY-MM-DD

Both keys are written in one MULTI/EXEC transaction, so readers see either
the old or the new snapshot. The redis-py client is connection-pooled and
thread-safe; a single instance is shared by the HTTP handlers and the
scheduler thread.

Files that USE this module:
- fxconvert.app (builds RedisRateStore from settings)
- fxconvert.application.updater (stores fetched snapshots)
- fxconvert.application.rates_service (reads the latest snapshot)
- fxconvert.application.health (liveness probe)

Files that this module USES:
- fxconvert.domain (RateSet, StoreError, InternalError, InvalidRateSetError)
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

import redis

from fxconvert.domain.errors import InternalError, InvalidRateSetError, StoreError
from fxconvert.domain.models import RateSet

log = logging.getLogger(__name__)

RATES_KEY = "exchange:rates:latest"
DATE_KEY = "exchange:rates:date"


class RateStore(ABC):
    """Contract for the latest-snapshot cache."""

    @abstractmethod
    def store(self, rate_set: RateSet) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_latest(self) -> Optional[RateSet]:
        raise NotImplementedError

    @abstractmethod
    def get_last_update_date(self) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def health_check(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class RedisRateStore(RateStore):
    def __init__(self, client: redis.Redis):
        """
        Initialize store with a redis-py client.

        Args:
            client: Client created with decode_responses=True
        """
        self.client = client

    @classmethod
    def from_url(cls, url: str, timeout: float = 5.0) -> RedisRateStore:
        """
        Create a store connected to the given Redis URL.

        The connection is established lazily on first command; socket
        timeouts bound every round trip.
        """
        log.info("Connecting to Redis at: %s", url)
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
            health_check_interval=30,
        )
        return cls(client)

    def store(self, rate_set: RateSet) -> None:
        """
        Overwrite the latest snapshot and its date.

        Raises:
            StoreError: If Redis rejects or cannot run the transaction
        """
        payload = json.dumps(rate_set.to_json(), separators=(",", ":"))
        try:
            pipe = self.client.pipeline(transaction=True)
            pipe.set(RATES_KEY, payload)
            pipe.set(DATE_KEY, rate_set.date)
            pipe.execute()
        except redis.RedisError as e:
            raise StoreError(f"Failed to store rates for {rate_set.date}: {e}") from e
        log.info("Stored exchange rates for %s in Redis", rate_set.date)

    def get_latest(self) -> Optional[RateSet]:
        """
        Load the latest snapshot.

        Returns:
            RateSet, or None if nothing has been stored yet

        Raises:
            StoreError: If Redis is unreachable
            InternalError: If the stored payload cannot be deserialized
        """
        try:
            raw = self.client.get(RATES_KEY)
        except redis.RedisError as e:
            raise StoreError(f"Failed to read rates: {e}") from e

        if raw is None:
            log.warning("No exchange rates found in Redis")
            return None

        try:
            rate_set = RateSet.from_json(json.loads(raw))
        except (ValueError, TypeError, InvalidRateSetError) as e:
            raise InternalError(f"Failed to deserialize rates: {e}") from e

        log.debug("Retrieved exchange rates for %s from Redis", rate_set.date)
        return rate_set

    def get_last_update_date(self) -> Optional[str]:
        """
        Return the date of the latest stored snapshot, or None.

        Raises:
            StoreError: If Redis is unreachable
        """
        try:
            return self.client.get(DATE_KEY)
        except redis.RedisError as e:
            raise StoreError(f"Failed to read last update date: {e}") from e

    def health_check(self) -> None:
        """
        Ping Redis.

        Raises:
            StoreError: If the ping fails
        """
        try:
            self.client.ping()
        except redis.RedisError as e:
            raise StoreError(f"Redis ping failed: {e}") from e

    def close(self) -> None:
        self.client.close()
